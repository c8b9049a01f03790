from datetime import date
from typing import Any

from cinelog.exceptions.movie_exceptions import MovieConversionError
from cinelog.models.movie import Movie, MovieCreate, MoviePublic
from cinelog.schemas.movie import (
    MovieRecommendation,
    MovieWithAverageRating,
    MovieWithFavoriteCount,
)


def _parse_release_date(raw: Any) -> date | None:
    # TMDB sends "" for movies without a known release date
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        return None


def _clean_str(raw: Any) -> str | None:
    if not isinstance(raw, str):
        return None
    value = raw.strip()
    return value or None


def to_movie_create(payload: dict[str, Any]) -> MovieCreate:
    """
    Extract the persisted subset of a TMDB movie payload.

    Parameters:
        payload (dict[str, Any]): The raw TMDB movie payload.
    Returns:
        MovieCreate: id, title, release date and poster path.
    Raises:
        MovieConversionError: If the payload has no usable id or title.
    """
    movie_id = payload.get("id")
    if isinstance(movie_id, bool) or not isinstance(movie_id, int):
        raise MovieConversionError(f"invalid id {movie_id!r}")
    title = _clean_str(payload.get("title"))
    if title is None:
        raise MovieConversionError(f"movie {movie_id} has no title")
    return MovieCreate(
        id=movie_id,
        title=title,
        release_date=_parse_release_date(payload.get("release_date")),
        poster_path=_clean_str(payload.get("poster_path")),
    )


def to_public(movie: Movie) -> MoviePublic:
    return MoviePublic.model_validate(movie)


def to_with_favorite_count(movie: Movie, favorites: int) -> MovieWithFavoriteCount:
    return MovieWithFavoriteCount.model_validate(movie, update={"favorites": favorites})


def to_with_average_rating(
    movie: Movie,
    average_rating: float,
    reviews: int,
) -> MovieWithAverageRating:
    return MovieWithAverageRating.model_validate(
        movie,
        update={"average_rating": round(average_rating, 2), "reviews": reviews},
    )


def to_recommendation(movie: Movie, followed_favorites: int) -> MovieRecommendation:
    return MovieRecommendation.model_validate(
        movie,
        update={"followed_favorites": followed_favorites},
    )
