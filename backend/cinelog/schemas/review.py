from datetime import datetime

from cinelog.models.review import ReviewBase

__all__ = [
    "ReviewPublic",
]


class ReviewPublic(ReviewBase):
    id: int
    user_id: int
    movie_id: int
    created_at: datetime
    username: str
    avatar: str | None
