from datetime import datetime

from sqlmodel import SQLModel

__all__ = [
    "UserPublic",
    "FollowRelation",
]


# Never carries the email or password hash
class UserPublic(SQLModel):
    id: int
    username: str
    avatar: str | None
    created_at: datetime


class FollowRelation(SQLModel):
    follows: bool
    followed_by: bool
