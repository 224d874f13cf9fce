from typing import ClassVar, List, Literal, Optional, Tuple
from pydantic import BaseModel
from kgl.schemas.base import BaseSchema, NonEmptyStr, PatchSchema, TimestampSchema

Role = Literal["Manager", "SalesAgent"]
Status = Literal["Active", "Inactive"]

class UserBase(BaseSchema):
    username: NonEmptyStr
    email: NonEmptyStr
    role: Role
    status: Status

class UserCreate(UserBase):
    password: NonEmptyStr

class UserUpdate(PatchSchema):
    required_fields: ClassVar[Tuple[str, ...]] = ("username", "email", "role", "status", "password")

    username: Optional[NonEmptyStr] = None
    email: Optional[NonEmptyStr] = None
    role: Optional[Role] = None
    status: Optional[Status] = None
    password: Optional[NonEmptyStr] = None

# Never carries the password hash
class User(TimestampSchema, UserBase):
    id: int

class LoginRequest(BaseModel):
    email: NonEmptyStr
    password: NonEmptyStr

class TokenData(BaseModel):
    user_id: int
    role: Role

# Response envelopes

class UserEnvelope(BaseModel):
    message: str
    user: User

class UserList(BaseModel):
    message: str
    users: List[User]

class LoginResponse(BaseModel):
    message: str
    token: str

class Token(BaseModel):
    access_token: str
    token_type: str
