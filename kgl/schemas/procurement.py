from typing import ClassVar, List, Literal, Optional, Tuple
from pydantic import BaseModel, Field
from kgl.schemas.base import BaseSchema, NonEmptyStr, PatchSchema, TimestampSchema

Branch = Literal["Maganjo", "Matugga"]

class ProcurementBase(BaseSchema):
    produce_name: NonEmptyStr
    produce_type: NonEmptyStr
    date: NonEmptyStr
    time: NonEmptyStr
    tonnage: float = Field(ge=1000)
    cost: float = Field(ge=10000)
    dealer_name: NonEmptyStr
    branch: Branch
    contact: NonEmptyStr
    selling_price: float

class ProcurementCreate(ProcurementBase):
    pass

class ProcurementUpdate(PatchSchema):
    required_fields: ClassVar[Tuple[str, ...]] = tuple(ProcurementBase.model_fields)

    produce_name: Optional[NonEmptyStr] = None
    produce_type: Optional[NonEmptyStr] = None
    date: Optional[NonEmptyStr] = None
    time: Optional[NonEmptyStr] = None
    tonnage: Optional[float] = Field(default=None, ge=1000)
    cost: Optional[float] = Field(default=None, ge=10000)
    dealer_name: Optional[NonEmptyStr] = None
    branch: Optional[Branch] = None
    contact: Optional[NonEmptyStr] = None
    selling_price: Optional[float] = None

class Procurement(TimestampSchema, ProcurementBase):
    id: int

# Response envelopes

class ProcurementCreated(BaseModel):
    message: str
    createdRecord: Procurement

class ProcurementList(BaseModel):
    message: str
    AllRecords: List[Procurement]

class ProcurementFound(BaseModel):
    message: str
    Record: Procurement

class ProcurementUpdated(BaseModel):
    message: str
    updatedRecord: Procurement

class ProcurementDeleted(BaseModel):
    message: str
    deletedRecord: Procurement
