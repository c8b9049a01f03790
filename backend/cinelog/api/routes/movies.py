from typing import Any

from fastapi import APIRouter, Query

from cinelog.api.deps import MetadataDep, ResolverDep, SessionDep
from cinelog.exceptions.movie_exceptions import MovieNotFoundError
from cinelog.inputs.movie import ReviewInput, UserMovieInput
from cinelog.models.auth_schemas import Message
from cinelog.models.movie import MoviePublic
from cinelog.schemas.movie import MovieStats, SearchResults
from cinelog.schemas.review import ReviewPublic
from cinelog.services import movies as movies_service

router = APIRouter(prefix="/movies", tags=["movies"])


@router.get("/search", response_model=SearchResults)
def search_movies(
    metadata: MetadataDep,
    query: str = Query(min_length=1),
    page: int = Query(1, ge=1),
) -> SearchResults:
    return metadata.search_by_title(query, page)


@router.get("/list")
def read_default_collection(
    session: SessionDep,
    metadata: MetadataDep,
    name: str | None = Query(None),
) -> list[dict[str, Any]]:
    return metadata.get_collection(name, session=session)


@router.get("/list/{name}")
def read_collection(
    session: SessionDep,
    metadata: MetadataDep,
    name: str,
) -> list[dict[str, Any]]:
    return metadata.get_collection(name, session=session)


@router.get("/genres")
def read_genres(metadata: MetadataDep) -> list[dict[str, Any]]:
    return metadata.get_genres()


@router.get("/languages")
def read_languages(metadata: MetadataDep) -> list[dict[str, Any]]:
    return metadata.get_languages()


@router.post("/fav", response_model=MoviePublic)
def add_favorite(
    session: SessionDep,
    resolver: ResolverDep,
    favorite_in: UserMovieInput,
) -> MoviePublic:
    return movies_service.add_favorite(
        session=session,
        resolver=resolver,
        user_id=favorite_in.user_id,
        movie_id=favorite_in.movie_id,
    )


@router.delete("/fav", response_model=Message)
def remove_favorite(session: SessionDep, user_id: int, movie_id: int) -> Message:
    movies_service.remove_favorite(session=session, user_id=user_id, movie_id=movie_id)
    return Message(message="Movie successfully removed from favorites")


@router.get("/fav")
def is_favorite(session: SessionDep, user_id: int, movie_id: int) -> bool:
    return movies_service.is_favorite(session=session, user_id=user_id, movie_id=movie_id)


@router.post("/watched", response_model=MoviePublic)
def add_watched(
    session: SessionDep,
    resolver: ResolverDep,
    watched_in: UserMovieInput,
) -> MoviePublic:
    return movies_service.add_watched(
        session=session,
        resolver=resolver,
        user_id=watched_in.user_id,
        movie_id=watched_in.movie_id,
    )


@router.delete("/watched", response_model=Message)
def remove_watched(session: SessionDep, user_id: int, movie_id: int) -> Message:
    movies_service.remove_watched(session=session, user_id=user_id, movie_id=movie_id)
    return Message(message="Movie successfully removed from watched")


@router.get("/watched")
def is_watched(session: SessionDep, user_id: int, movie_id: int) -> bool:
    return movies_service.is_watched(session=session, user_id=user_id, movie_id=movie_id)


@router.post("/review", response_model=ReviewPublic)
def add_review(
    session: SessionDep,
    resolver: ResolverDep,
    review_in: ReviewInput,
) -> ReviewPublic:
    return movies_service.add_review(
        session=session,
        resolver=resolver,
        user_id=review_in.user_id,
        movie_id=review_in.movie_id,
        rating=review_in.rating,
        content=review_in.content,
    )


@router.delete("/review", response_model=Message)
def remove_review(session: SessionDep, user_id: int, movie_id: int) -> Message:
    movies_service.remove_review(session=session, user_id=user_id, movie_id=movie_id)
    return Message(message="Review successfully deleted")


@router.get("/review", response_model=ReviewPublic)
def read_review(session: SessionDep, user_id: int, movie_id: int) -> ReviewPublic:
    return movies_service.get_review(session=session, user_id=user_id, movie_id=movie_id)


@router.get("/review/{movie_id}", response_model=list[ReviewPublic])
def read_movie_reviews(session: SessionDep, movie_id: int) -> list[ReviewPublic]:
    return movies_service.get_movie_reviews(session=session, movie_id=movie_id)


@router.get("/{id}/stats", response_model=MovieStats)
def read_movie_stats(session: SessionDep, id: int) -> MovieStats:
    return movies_service.get_movie_stats(session=session, movie_id=id)


# KEEP AT THE BOTTOM
@router.get("/{id}")
def read_movie(metadata: MetadataDep, id: int) -> dict[str, Any]:
    movie = metadata.get_by_id(id)
    if movie is None:
        raise MovieNotFoundError(id)
    return movie
