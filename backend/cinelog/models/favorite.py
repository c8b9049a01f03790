from datetime import datetime

from sqlmodel import Field, SQLModel

from cinelog.utils import created_at_field

__all__ = [
    "MovieFavorite",
]


class MovieFavorite(SQLModel, table=True):
    user_id: int = Field(foreign_key="user.id", primary_key=True, ondelete="CASCADE")
    movie_id: int = Field(foreign_key="movie.id", primary_key=True)
    created_at: datetime = created_at_field()
