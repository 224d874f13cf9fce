from typing import ClassVar, List, Literal, Optional, Tuple
from pydantic import BaseModel, model_validator
from kgl.schemas.base import BaseSchema, PatchSchema, TimestampSchema

SaleType = Literal["Cash", "Credit"]


def check_sale_amounts(sale_type: Optional[str], amount_paid: Optional[float], amount_due: Optional[float]) -> None:
    """Cash sales are settled with amountPaid, credit sales owe amountDue; never both."""
    if sale_type == "Cash" and amount_due is not None:
        raise ValueError("amountDue is not allowed on a Cash sale")
    if sale_type == "Credit" and amount_paid is not None:
        raise ValueError("amountPaid is not allowed on a Credit sale")


class SaleFields(BaseSchema):
    produce_name: Optional[str] = None
    produce_type: Optional[str] = None
    tonnage: Optional[float] = None

    amount_paid: Optional[float] = None
    amount_due: Optional[float] = None

    buyer_name: Optional[str] = None
    national_id: Optional[str] = None
    location: Optional[str] = None
    contacts: Optional[str] = None

    sales_agent_name: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    due_date: Optional[str] = None
    dispatch_date: Optional[str] = None

class SaleCreate(SaleFields):
    sale_type: SaleType

    @model_validator(mode="after")
    def amounts_match_sale_type(self):
        check_sale_amounts(self.sale_type, self.amount_paid, self.amount_due)
        return self

class SaleUpdate(SaleFields, PatchSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("sale_type",)

    sale_type: Optional[SaleType] = None

class Sale(TimestampSchema, SaleFields):
    id: int
    sale_type: SaleType

# Response envelopes

class SaleCreated(BaseModel):
    message: str
    sale: Sale

class SaleList(BaseModel):
    message: str
    sales: List[Sale]

class SaleFound(BaseModel):
    message: str
    sale: Sale

class SaleUpdated(BaseModel):
    message: str
    updatedSale: Sale

class SaleDeleted(BaseModel):
    message: str
    deletedSale: Sale
