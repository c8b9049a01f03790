from typing import Any

from sqlmodel import SQLModel

from cinelog.models.movie import MovieBase

__all__ = [
    "SearchResults",
    "MovieStats",
    "MovieWithFavoriteCount",
    "MovieWithAverageRating",
    "MovieRecommendation",
]


class SearchResults(SQLModel):
    page: int
    movies: list[dict[str, Any]]
    total_pages: int
    total_results: int


class MovieStats(SQLModel):
    movie_id: int
    favorites: int
    watched: int
    reviews: int
    average_rating: float | None


class MovieWithFavoriteCount(MovieBase):
    favorites: int


class MovieWithAverageRating(MovieBase):
    average_rating: float
    reviews: int


class MovieRecommendation(MovieBase):
    followed_favorites: int
