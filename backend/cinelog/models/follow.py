from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

__all__ = [
    "Follow",
]


class Follow(SQLModel, table=True):
    __table_args__ = (
        CheckConstraint("follower_id <> followed_id", name="ck_follow_not_self"),
    )
    follower_id: int = Field(
        foreign_key="user.id", primary_key=True, ondelete="CASCADE"
    )
    followed_id: int = Field(
        foreign_key="user.id", primary_key=True, ondelete="CASCADE"
    )
