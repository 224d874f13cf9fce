from sqlalchemy import Column, String, Enum
from kgl.models.base import BaseModel

USER_ROLES = ('Manager', 'SalesAgent')
USER_STATUSES = ('Active', 'Inactive')

class User(BaseModel):
    __tablename__ = "users"
    
    username = Column(String(50), index=True, nullable=False)
    # Not unique: the same address may be registered more than once
    email = Column(String(100), index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(Enum(*USER_ROLES, name='user_roles'), nullable=False)
    status = Column(Enum(*USER_STATUSES, name='user_statuses'), nullable=False)
