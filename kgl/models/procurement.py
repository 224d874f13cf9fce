from sqlalchemy import Column, String, Float, Enum
from kgl.models.base import BaseModel

BRANCHES = ('Maganjo', 'Matugga')

class Procurement(BaseModel):
    __tablename__ = "procurements"
    
    produce_name = Column(String(100), nullable=False)
    produce_type = Column(String(100), nullable=False)
    date = Column(String(20), nullable=False)
    time = Column(String(20), nullable=False)
    tonnage = Column(Float, nullable=False)
    cost = Column(Float, nullable=False)
    dealer_name = Column(String(100), nullable=False)
    branch = Column(Enum(*BRANCHES, name='branches'), nullable=False)
    contact = Column(String(50), nullable=False)
    selling_price = Column(Float, nullable=False)
