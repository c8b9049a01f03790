from datetime import datetime

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlmodel import Field, SQLModel

from cinelog.utils import created_at_field

__all__ = [
    "ReviewBase",
    "ReviewCreate",
    "Review",
]

MIN_RATING = 1
MAX_RATING = 5


class ReviewBase(SQLModel):
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING)
    content: str | None = Field(default=None, max_length=5000)


class ReviewCreate(ReviewBase):
    user_id: int
    movie_id: int


class Review(ReviewBase, table=True):
    __table_args__ = (
        UniqueConstraint("user_id", "movie_id", name="uq_review_user_movie"),
        CheckConstraint(
            f"rating BETWEEN {MIN_RATING} AND {MAX_RATING}",
            name="ck_review_rating_range",
        ),
    )
    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True, ondelete="CASCADE")
    movie_id: int = Field(foreign_key="movie.id", index=True)
    created_at: datetime = created_at_field()
