from datetime import datetime

from sqlmodel import SQLModel

from cinelog.models.movie import MoviePublic
from cinelog.models.movie_list import MovieListBase

__all__ = [
    "MovieListPublic",
    "MovieListSummary",
    "MovieListDetail",
    "MovieListWithMovieStatus",
    "ProfileLists",
]


class MovieListPublic(MovieListBase):
    id: int
    user_id: int
    created_at: datetime


class MovieListSummary(MovieListPublic):
    author: str
    saved: int
    movies: list[MoviePublic]


class MovieListDetail(MovieListPublic):
    author: str
    saved: int
    movies: list[MoviePublic]
    page: int
    total_pages: int
    total_results: int


class MovieListWithMovieStatus(MovieListPublic):
    has_movie: bool


class ProfileLists(SQLModel):
    own: list[MovieListPublic]
    saved: list[MovieListPublic]
