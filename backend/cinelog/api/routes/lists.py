from fastapi import APIRouter, Query

from cinelog.api.deps import ResolverDep, SessionDep
from cinelog.inputs.movie import ListCreateInput, ListMovieInput, SavedListInput
from cinelog.models.auth_schemas import Message
from cinelog.models.movie_list import MovieListUpdate
from cinelog.schemas.movie_list import (
    MovieListDetail,
    MovieListPublic,
    MovieListSummary,
    MovieListWithMovieStatus,
)
from cinelog.services import lists as lists_service

router = APIRouter(prefix="/lists", tags=["lists"])


@router.post("/", response_model=MovieListPublic)
def create_list(
    session: SessionDep,
    resolver: ResolverDep,
    list_in: ListCreateInput,
) -> MovieListPublic:
    return lists_service.create_list(
        session=session,
        resolver=resolver,
        user_id=list_in.user_id,
        title=list_in.title,
        description=list_in.description,
        movie_id=list_in.movie_id,
    )


@router.get("/popular", response_model=list[MovieListSummary])
def read_popular_lists(session: SessionDep) -> list[MovieListSummary]:
    return lists_service.get_popular_lists(session=session)


@router.get("/followed/{user_id}", response_model=list[MovieListSummary])
def read_followed_lists(session: SessionDep, user_id: int) -> list[MovieListSummary]:
    return lists_service.get_followed_lists(session=session, user_id=user_id)


@router.get("/user/{user_id}", response_model=list[MovieListWithMovieStatus])
def read_user_lists_with_movie_status(
    session: SessionDep,
    user_id: int,
    movie_id: int | None = Query(None),
) -> list[MovieListWithMovieStatus]:
    return lists_service.get_user_lists_with_movie_status(
        session=session,
        user_id=user_id,
        movie_id=movie_id,
    )


@router.post("/movie", response_model=Message)
def add_movie_to_list(
    session: SessionDep,
    resolver: ResolverDep,
    entry_in: ListMovieInput,
) -> Message:
    return lists_service.add_movie_to_list(
        session=session,
        resolver=resolver,
        list_id=entry_in.list_id,
        movie_id=entry_in.movie_id,
    )


@router.delete("/movie", response_model=Message)
def remove_movie_from_list(session: SessionDep, list_id: int, movie_id: int) -> Message:
    return lists_service.remove_movie_from_list(
        session=session,
        list_id=list_id,
        movie_id=movie_id,
    )


@router.post("/saved", response_model=Message)
def save_list(session: SessionDep, saved_in: SavedListInput) -> Message:
    return lists_service.save_list(
        session=session,
        user_id=saved_in.user_id,
        list_id=saved_in.list_id,
    )


@router.delete("/saved", response_model=Message)
def unsave_list(session: SessionDep, user_id: int, list_id: int) -> Message:
    return lists_service.unsave_list(session=session, user_id=user_id, list_id=list_id)


@router.get("/saved")
def is_list_saved(session: SessionDep, user_id: int, list_id: int) -> bool:
    return lists_service.is_list_saved(session=session, user_id=user_id, list_id=list_id)


@router.get("/{list_id}", response_model=MovieListDetail)
def read_list(
    session: SessionDep,
    list_id: int,
    page: int = Query(1, ge=1),
) -> MovieListDetail:
    return lists_service.get_list(session=session, list_id=list_id, page=page)


@router.patch("/{list_id}", response_model=MovieListPublic)
def update_list(
    session: SessionDep,
    list_id: int,
    list_update: MovieListUpdate,
) -> MovieListPublic:
    return lists_service.update_list(
        session=session,
        list_id=list_id,
        list_update=list_update,
    )


@router.delete("/{list_id}", response_model=MovieListPublic)
def delete_list(session: SessionDep, list_id: int) -> MovieListPublic:
    return lists_service.delete_list(session=session, list_id=list_id)
