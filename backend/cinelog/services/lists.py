from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from cinelog.converters import movie_list as list_converters
from cinelog.core.config import settings
from cinelog.core.enums import IntegrityKind
from cinelog.crud import movie_list as lists_crud
from cinelog.crud import user as users_crud
from cinelog.crud.integrity import classify_integrity_error
from cinelog.exceptions.base import AppError
from cinelog.exceptions.list_exceptions import (
    ListAlreadySavedError,
    ListNotFoundError,
    ListNotUpdatedError,
    MovieAlreadyInListError,
    MovieNotInListError,
    SavedListNotFoundError,
)
from cinelog.exceptions.user_exceptions import UserNotFoundError
from cinelog.models.auth_schemas import Message
from cinelog.models.movie_list import MovieListCreate, MovieListUpdate
from cinelog.schemas.movie_list import (
    MovieListDetail,
    MovieListPublic,
    MovieListSummary,
    MovieListWithMovieStatus,
)
from cinelog.services.movie_resolver import MovieResolver


def create_list(
    *,
    session: Session,
    resolver: MovieResolver,
    user_id: int,
    title: str,
    description: str | None,
    movie_id: int,
) -> MovieListPublic:
    """
    Create a list holding its first movie.

    The movie is resolved before anything is written, so a movie that can not
    be found leaves no empty list behind.

    Parameters:
        session (Session): Database session.
        resolver (MovieResolver): Resolves the movie before it is referenced.
        user_id (int): ID of the owner.
        title (str): Title of the list.
        description (str | None): Optional description.
        movie_id (int): TMDB ID of the first movie.
    Returns:
        MovieListPublic: The created list.
    Raises:
        UserNotFoundError: If the owner does not exist.
        MovieNotFoundError: If the movie exists neither locally nor on TMDB.
        UpstreamUnavailableError: If TMDB fails.
        AppError: For any other (unexpected) errors.
    """
    if users_crud.get_user_by_id(session=session, user_id=user_id) is None:
        raise UserNotFoundError(user_id)
    movie = resolver.resolve(session=session, movie_id=movie_id)
    try:
        movie_list = lists_crud.create_list(
            session=session,
            list_create=MovieListCreate(
                user_id=user_id,
                title=title,
                description=description,
            ),
        )
        assert movie_list.id is not None
        lists_crud.add_movie_to_list(
            session=session,
            list_id=movie_list.id,
            movie_id=movie.id,
        )
        session.commit()
    except IntegrityError as e:
        session.rollback()
        if classify_integrity_error(e) is IntegrityKind.FOREIGN_KEY:
            raise UserNotFoundError(user_id) from e
        raise AppError from e
    except Exception as e:
        session.rollback()
        raise AppError from e
    return list_converters.to_public(movie_list)


def get_list(*, session: Session, list_id: int, page: int = 1) -> MovieListDetail:
    """
    Get a list with one page of its movies.

    Raises:
        ListNotFoundError: If the list does not exist.
    """
    row = lists_crud.get_list_with_details(session=session, list_id=list_id)
    if row is None:
        raise ListNotFoundError(list_id)
    movie_list, author, saved = row
    movies = lists_crud.get_movies_in_list(session=session, list_id=list_id)
    return list_converters.to_detail(
        movie_list,
        author=author,
        saved=saved,
        movies=movies,
        page=page,
        page_size=settings.LIST_PAGE_SIZE,
    )


def add_movie_to_list(
    *,
    session: Session,
    resolver: MovieResolver,
    list_id: int,
    movie_id: int,
) -> Message:
    """
    Add a movie to an existing list.

    Raises:
        ListNotFoundError: If the list does not exist.
        MovieAlreadyInListError: If the movie is already in the list.
        MovieNotFoundError: If the movie exists neither locally nor on TMDB.
        UpstreamUnavailableError: If TMDB fails.
        AppError: For any other (unexpected) errors.
    """
    if lists_crud.get_list_by_id(session=session, list_id=list_id) is None:
        raise ListNotFoundError(list_id)
    if lists_crud.get_list_entry(session=session, list_id=list_id, movie_id=movie_id):
        raise MovieAlreadyInListError(list_id, movie_id)

    movie = resolver.resolve(session=session, movie_id=movie_id)
    try:
        lists_crud.add_movie_to_list(
            session=session,
            list_id=list_id,
            movie_id=movie.id,
        )
        session.commit()
    except IntegrityError as e:
        session.rollback()
        kind = classify_integrity_error(e)
        if kind is IntegrityKind.UNIQUE:
            raise MovieAlreadyInListError(list_id, movie_id) from e
        elif kind is IntegrityKind.FOREIGN_KEY:
            raise ListNotFoundError(list_id) from e
        else:
            raise AppError from e
    except Exception as e:
        session.rollback()
        raise AppError from e
    return Message(message="Movie successfully added to list")


def remove_movie_from_list(*, session: Session, list_id: int, movie_id: int) -> Message:
    removed = lists_crud.remove_movie_from_list(
        session=session,
        list_id=list_id,
        movie_id=movie_id,
    )
    if removed is None:
        raise MovieNotInListError(list_id, movie_id)
    session.commit()
    return Message(message="Movie successfully removed from list")


def delete_list(*, session: Session, list_id: int) -> MovieListPublic:
    deleted = lists_crud.delete_list(session=session, list_id=list_id)
    if deleted is None:
        raise ListNotFoundError(list_id)
    deleted_public = list_converters.to_public(deleted)
    session.commit()
    return deleted_public


def update_list(
    *,
    session: Session,
    list_id: int,
    list_update: MovieListUpdate,
) -> MovieListPublic:
    """
    Update the title and/or description of a list.

    Raises:
        ListNotUpdatedError: If the list does not exist or nothing was set.
    """
    movie_list = lists_crud.get_list_by_id(session=session, list_id=list_id)
    if movie_list is None or not list_update.model_dump(exclude_unset=True):
        raise ListNotUpdatedError(list_id)
    try:
        lists_crud.update_list(db_list=movie_list, list_update=list_update)
        session.commit()
    except Exception as e:
        session.rollback()
        raise AppError from e
    return list_converters.to_public(movie_list)


def get_user_lists_with_movie_status(
    *,
    session: Session,
    user_id: int,
    movie_id: int | None,
) -> list[MovieListWithMovieStatus]:
    return [
        list_converters.to_with_movie_status(movie_list, has_movie)
        for movie_list, has_movie in lists_crud.get_user_lists_with_movie_status(
            session=session,
            user_id=user_id,
            movie_id=movie_id,
        )
    ]


def is_list_saved(*, session: Session, user_id: int, list_id: int) -> bool:
    return lists_crud.get_saved(session=session, user_id=user_id, list_id=list_id) is not None


def save_list(*, session: Session, user_id: int, list_id: int) -> Message:
    """
    Save someone's list.

    Raises:
        ListAlreadySavedError: If the user already saved the list.
        ListNotFoundError: If the list does not exist.
        UserNotFoundError: If the user does not exist.
        AppError: For any other (unexpected) errors.
    """
    if lists_crud.get_list_by_id(session=session, list_id=list_id) is None:
        raise ListNotFoundError(list_id)
    if is_list_saved(session=session, user_id=user_id, list_id=list_id):
        raise ListAlreadySavedError(user_id, list_id)
    try:
        lists_crud.add_saved(session=session, user_id=user_id, list_id=list_id)
        session.commit()
    except IntegrityError as e:
        session.rollback()
        kind = classify_integrity_error(e)
        if kind is IntegrityKind.UNIQUE:
            raise ListAlreadySavedError(user_id, list_id) from e
        elif kind is IntegrityKind.FOREIGN_KEY:
            raise UserNotFoundError(user_id) from e
        else:
            raise AppError from e
    except Exception as e:
        session.rollback()
        raise AppError from e
    return Message(message="List successfully added to saved")


def unsave_list(*, session: Session, user_id: int, list_id: int) -> Message:
    removed = lists_crud.remove_saved(session=session, user_id=user_id, list_id=list_id)
    if removed is None:
        raise SavedListNotFoundError(user_id, list_id)
    session.commit()
    return Message(message="List successfully removed from saved")


def _to_summaries(
    *,
    session: Session,
    rows: list[tuple],
) -> list[MovieListSummary]:
    summaries = []
    for movie_list, author, saved in rows:
        movies = lists_crud.get_movies_in_list(session=session, list_id=movie_list.id)
        summaries.append(
            list_converters.to_summary(
                movie_list,
                author=author,
                saved=saved,
                movies=movies,
            )
        )
    return summaries


def get_popular_lists(*, session: Session, limit: int = 10) -> list[MovieListSummary]:
    rows = lists_crud.get_popular_lists(session=session, limit=limit)
    return _to_summaries(session=session, rows=rows)


def get_followed_lists(
    *,
    session: Session,
    user_id: int,
    limit: int = 10,
) -> list[MovieListSummary]:
    """
    Get the most saved lists created by the users someone follows.
    """
    rows = lists_crud.get_followed_lists(session=session, user_id=user_id, limit=limit)
    return _to_summaries(session=session, rows=rows)
