from datetime import datetime

from pydantic import EmailStr
from sqlmodel import Field, SQLModel

from cinelog.utils import created_at_field

__all__ = [
    "UserBase",
    "UserCreate",
    "User",
]


# Shared properties
class UserBase(SQLModel):
    username: str = Field(unique=True, index=True, max_length=255)
    email: EmailStr = Field(unique=True, index=True, max_length=255)
    avatar: str | None = Field(default=None, max_length=512)


# Properties to receive on creation, the password arrives already hashed
class UserCreate(UserBase):
    hashed_password: str


# Database model, database table inferred from class name
class User(UserBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    hashed_password: str
    created_at: datetime = created_at_field()
