from datetime import date

from sqlmodel import Field, SQLModel

__all__ = [
    "MovieBase",
    "MovieCreate",
    "MoviePublic",
    "Movie",
]


# Shared properties
class MovieBase(SQLModel):
    id: int = Field(
        unique=True,
        index=True,
        primary_key=True,
    )
    title: str
    release_date: date | None = None
    poster_path: str | None = None


# Properties to receive on movie creation
class MovieCreate(MovieBase):
    pass


# Properties to return via API
class MoviePublic(MovieBase):
    pass


# Database model, database table inferred from class name.
# Rows are created once from TMDB data and never updated afterwards.
class Movie(MovieBase, table=True):
    pass
