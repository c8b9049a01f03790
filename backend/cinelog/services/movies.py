from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from cinelog.converters import movie as movie_converters
from cinelog.converters import review as review_converters
from cinelog.core.enums import IntegrityKind
from cinelog.crud import favorite as favorites_crud
from cinelog.crud import movie as movies_crud
from cinelog.crud import review as reviews_crud
from cinelog.crud import user as users_crud
from cinelog.crud import watched as watched_crud
from cinelog.crud.integrity import classify_integrity_error
from cinelog.exceptions.base import AppError, ConstraintViolationError
from cinelog.exceptions.movie_exceptions import (
    FavoriteAlreadyExistsError,
    FavoriteNotFoundError,
    MovieNotFoundError,
    ReviewAlreadyExistsError,
    ReviewNotFoundError,
    WatchedAlreadyExistsError,
    WatchedNotFoundError,
)
from cinelog.exceptions.user_exceptions import UserNotFoundError
from cinelog.models.movie import MoviePublic
from cinelog.models.review import ReviewCreate
from cinelog.schemas.movie import MovieStats
from cinelog.schemas.review import ReviewPublic
from cinelog.services.movie_resolver import MovieResolver


def _ensure_user_exists(*, session: Session, user_id: int) -> None:
    if users_crud.get_user_by_id(session=session, user_id=user_id) is None:
        raise UserNotFoundError(user_id)


def add_favorite(
    *,
    session: Session,
    resolver: MovieResolver,
    user_id: int,
    movie_id: int,
) -> MoviePublic:
    """
    Add a movie to the favorites of a user, creating the movie locally first
    if it was never stored.

    Parameters:
        session (Session): Database session.
        resolver (MovieResolver): Resolves the movie before it is referenced.
        user_id (int): ID of the user.
        movie_id (int): TMDB ID of the movie.
    Returns:
        MoviePublic: The favorited movie.
    Raises:
        UserNotFoundError: If the user does not exist.
        MovieNotFoundError: If the movie exists neither locally nor on TMDB.
        UpstreamUnavailableError: If TMDB fails.
        FavoriteAlreadyExistsError: If the movie is already a favorite.
        AppError: For any other (unexpected) errors.
    """
    _ensure_user_exists(session=session, user_id=user_id)
    if is_favorite(session=session, user_id=user_id, movie_id=movie_id):
        raise FavoriteAlreadyExistsError(user_id, movie_id)
    movie = resolver.resolve(session=session, movie_id=movie_id)
    try:
        favorites_crud.create_favorite(
            session=session,
            user_id=user_id,
            movie_id=movie.id,
        )
        session.commit()
    except IntegrityError as e:
        session.rollback()
        kind = classify_integrity_error(e)
        if kind is IntegrityKind.UNIQUE:
            raise FavoriteAlreadyExistsError(user_id, movie_id) from e
        elif kind is IntegrityKind.FOREIGN_KEY:
            raise UserNotFoundError(user_id) from e
        else:
            raise AppError from e
    except Exception as e:
        session.rollback()
        raise AppError from e
    return movie_converters.to_public(movie)


def remove_favorite(*, session: Session, user_id: int, movie_id: int) -> None:
    """
    Raises:
        FavoriteNotFoundError: If the movie was not a favorite of the user.
    """
    removed = favorites_crud.delete_favorite(
        session=session,
        user_id=user_id,
        movie_id=movie_id,
    )
    if removed is None:
        raise FavoriteNotFoundError(user_id, movie_id)
    session.commit()


def is_favorite(*, session: Session, user_id: int, movie_id: int) -> bool:
    favorite = favorites_crud.get_favorite(
        session=session,
        user_id=user_id,
        movie_id=movie_id,
    )
    return favorite is not None


def add_watched(
    *,
    session: Session,
    resolver: MovieResolver,
    user_id: int,
    movie_id: int,
) -> MoviePublic:
    """
    Mark a movie as watched by a user, creating the movie locally first if
    it was never stored.

    Raises:
        UserNotFoundError: If the user does not exist.
        MovieNotFoundError: If the movie exists neither locally nor on TMDB.
        UpstreamUnavailableError: If TMDB fails.
        WatchedAlreadyExistsError: If the movie is already marked as watched.
        AppError: For any other (unexpected) errors.
    """
    _ensure_user_exists(session=session, user_id=user_id)
    if is_watched(session=session, user_id=user_id, movie_id=movie_id):
        raise WatchedAlreadyExistsError(user_id, movie_id)
    movie = resolver.resolve(session=session, movie_id=movie_id)
    try:
        watched_crud.create_watched(
            session=session,
            user_id=user_id,
            movie_id=movie.id,
        )
        session.commit()
    except IntegrityError as e:
        session.rollback()
        kind = classify_integrity_error(e)
        if kind is IntegrityKind.UNIQUE:
            raise WatchedAlreadyExistsError(user_id, movie_id) from e
        elif kind is IntegrityKind.FOREIGN_KEY:
            raise UserNotFoundError(user_id) from e
        else:
            raise AppError from e
    except Exception as e:
        session.rollback()
        raise AppError from e
    return movie_converters.to_public(movie)


def remove_watched(*, session: Session, user_id: int, movie_id: int) -> None:
    removed = watched_crud.delete_watched(
        session=session,
        user_id=user_id,
        movie_id=movie_id,
    )
    if removed is None:
        raise WatchedNotFoundError(user_id, movie_id)
    session.commit()


def is_watched(*, session: Session, user_id: int, movie_id: int) -> bool:
    watched = watched_crud.get_watched(
        session=session,
        user_id=user_id,
        movie_id=movie_id,
    )
    return watched is not None


def add_review(
    *,
    session: Session,
    resolver: MovieResolver,
    user_id: int,
    movie_id: int,
    rating: int,
    content: str | None,
) -> ReviewPublic:
    """
    Create a review for a movie, creating the movie locally first if it was
    never stored.

    Parameters:
        session (Session): Database session.
        resolver (MovieResolver): Resolves the movie before it is referenced.
        user_id (int): ID of the author.
        movie_id (int): TMDB ID of the movie.
        rating (int): Rating from 1 to 5.
        content (str | None): Review text.
    Returns:
        ReviewPublic: The created review with its author.
    Raises:
        UserNotFoundError: If the user does not exist.
        MovieNotFoundError: If the movie exists neither locally nor on TMDB.
        UpstreamUnavailableError: If TMDB fails.
        ReviewAlreadyExistsError: If the user already reviewed the movie.
        ConstraintViolationError: If the rating is rejected by the database.
        AppError: For any other (unexpected) errors.
    """
    user = users_crud.get_user_by_id(session=session, user_id=user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    if reviews_crud.get_review(session=session, user_id=user_id, movie_id=movie_id):
        raise ReviewAlreadyExistsError(user_id, movie_id)
    movie = resolver.resolve(session=session, movie_id=movie_id)
    review_create = ReviewCreate(
        user_id=user_id,
        movie_id=movie.id,
        rating=rating,
        content=content,
    )
    try:
        review = reviews_crud.create_review(session=session, review_create=review_create)
        session.commit()
    except IntegrityError as e:
        session.rollback()
        kind = classify_integrity_error(e)
        if kind is IntegrityKind.UNIQUE:
            raise ReviewAlreadyExistsError(user_id, movie_id) from e
        elif kind is IntegrityKind.FOREIGN_KEY:
            raise UserNotFoundError(user_id) from e
        elif kind is IntegrityKind.CHECK:
            raise ConstraintViolationError(f"Invalid rating {rating}.") from e
        else:
            raise AppError from e
    except Exception as e:
        session.rollback()
        raise AppError from e
    return review_converters.to_public(review, user)


def remove_review(*, session: Session, user_id: int, movie_id: int) -> None:
    removed = reviews_crud.delete_review(
        session=session,
        user_id=user_id,
        movie_id=movie_id,
    )
    if removed is None:
        raise ReviewNotFoundError(user_id, movie_id)
    session.commit()


def get_review(*, session: Session, user_id: int, movie_id: int) -> ReviewPublic:
    row = reviews_crud.get_review_with_author(
        session=session,
        user_id=user_id,
        movie_id=movie_id,
    )
    if row is None:
        raise ReviewNotFoundError(user_id, movie_id)
    review, author = row
    return review_converters.to_public(review, author)


def get_movie_reviews(*, session: Session, movie_id: int) -> list[ReviewPublic]:
    return [
        review_converters.to_public(review, author)
        for review, author in reviews_crud.get_reviews_for_movie(
            session=session,
            movie_id=movie_id,
        )
    ]


def get_movie_stats(*, session: Session, movie_id: int) -> MovieStats:
    """
    Count the engagement of a locally stored movie.

    Raises:
        MovieNotFoundError: If the movie is not stored locally. Nothing has
            referenced it yet, so there is nothing to count.
    """
    if movies_crud.get_movie_by_id(session=session, id=movie_id) is None:
        raise MovieNotFoundError(movie_id)
    reviews, average_rating = reviews_crud.get_rating_summary(
        session=session,
        movie_id=movie_id,
    )
    return MovieStats(
        movie_id=movie_id,
        favorites=favorites_crud.count_favorites(session=session, movie_id=movie_id),
        watched=watched_crud.count_watched(session=session, movie_id=movie_id),
        reviews=reviews,
        average_rating=round(average_rating, 2) if average_rating is not None else None,
    )
