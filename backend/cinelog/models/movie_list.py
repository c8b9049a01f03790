from datetime import datetime

from sqlmodel import Field, SQLModel

from cinelog.utils import created_at_field

__all__ = [
    "MovieListBase",
    "MovieListCreate",
    "MovieListUpdate",
    "MovieList",
    "MovieListEntry",
    "SavedList",
]


# Shared properties
class MovieListBase(SQLModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)


# Properties to receive on list creation
class MovieListCreate(MovieListBase):
    user_id: int


# Properties to receive on update, all are optional
class MovieListUpdate(SQLModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)


# Database model, database table inferred from class name
class MovieList(MovieListBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True, ondelete="CASCADE")
    created_at: datetime = created_at_field()


class MovieListEntry(SQLModel, table=True):
    list_id: int = Field(
        foreign_key="movielist.id", primary_key=True, ondelete="CASCADE"
    )
    movie_id: int = Field(foreign_key="movie.id", primary_key=True)
    added_at: datetime = created_at_field()


class SavedList(SQLModel, table=True):
    user_id: int = Field(foreign_key="user.id", primary_key=True, ondelete="CASCADE")
    list_id: int = Field(
        foreign_key="movielist.id", primary_key=True, ondelete="CASCADE"
    )
