from sqlalchemy import Column, String, Float, Enum
from kgl.models.base import BaseModel

SALE_TYPES = ('Cash', 'Credit')

class Sale(BaseModel):
    __tablename__ = "sales"
    
    sale_type = Column(Enum(*SALE_TYPES, name='sale_types'), nullable=False)

    produce_name = Column(String(100))
    produce_type = Column(String(100))
    tonnage = Column(Float)

    amount_paid = Column(Float)  # cash
    amount_due = Column(Float)   # credit

    buyer_name = Column(String(100))
    national_id = Column(String(50))
    location = Column(String(100))
    contacts = Column(String(50))

    sales_agent_name = Column(String(100))
    date = Column(String(20))
    time = Column(String(20))
    due_date = Column(String(20))
    dispatch_date = Column(String(20))
