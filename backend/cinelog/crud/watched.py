from sqlalchemy import func
from sqlmodel import Session, col, select

from cinelog.models.movie import Movie
from cinelog.models.user import User
from cinelog.models.watched import MovieWatched


def get_watched(
    *,
    session: Session,
    user_id: int,
    movie_id: int,
) -> MovieWatched | None:
    return session.get(MovieWatched, (user_id, movie_id))


def create_watched(
    *,
    session: Session,
    user_id: int,
    movie_id: int,
) -> MovieWatched:
    """
    Mark a movie as watched by a user.

    Raises:
        IntegrityError: If the entry already exists, or the user or movie
            does not exist.
    """
    watched = MovieWatched(user_id=user_id, movie_id=movie_id)
    session.add(watched)
    session.flush()
    return watched


def delete_watched(
    *,
    session: Session,
    user_id: int,
    movie_id: int,
) -> MovieWatched | None:
    watched = session.get(MovieWatched, (user_id, movie_id))
    if watched is None:
        return None
    session.delete(watched)
    session.flush()
    return watched


def get_watched_movies_by_username(*, session: Session, username: str) -> list[Movie]:
    """
    Retrieve the movies a user has watched, most recently added first.

    Parameters:
        session (Session): The database session.
        username (str): The username of the user.
    Returns:
        list[Movie]: The user's watched movies.
    """
    stmt = (
        select(Movie)
        .join(MovieWatched, col(MovieWatched.movie_id) == col(Movie.id))
        .join(User, col(User.id) == col(MovieWatched.user_id))
        .where(col(User.username) == username)
        .order_by(col(MovieWatched.created_at).desc(), col(Movie.id))
    )
    return list(session.exec(stmt).all())


def count_watched(*, session: Session, movie_id: int) -> int:
    stmt = select(func.count()).select_from(MovieWatched).where(
        col(MovieWatched.movie_id) == movie_id
    )
    return session.exec(stmt).one()
