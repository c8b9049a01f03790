from sqlalchemy import func
from sqlmodel import Session, col, select

from cinelog.models.favorite import MovieFavorite
from cinelog.models.movie import Movie
from cinelog.models.user import User


def get_favorite(
    *,
    session: Session,
    user_id: int,
    movie_id: int,
) -> MovieFavorite | None:
    return session.get(MovieFavorite, (user_id, movie_id))


def create_favorite(
    *,
    session: Session,
    user_id: int,
    movie_id: int,
) -> MovieFavorite:
    """
    Mark a movie as favorite for a user.

    Parameters:
        session (Session): The database session.
        user_id (int): The ID of the user.
        movie_id (int): The ID of the movie, which must already exist locally.
    Returns:
        MovieFavorite: The created favorite row.
    Raises:
        IntegrityError: If the favorite already exists, or the user or movie
            does not exist.
    """
    favorite = MovieFavorite(user_id=user_id, movie_id=movie_id)
    session.add(favorite)
    session.flush()
    return favorite


def delete_favorite(
    *,
    session: Session,
    user_id: int,
    movie_id: int,
) -> MovieFavorite | None:
    """
    Delete a favorite. Returns the deleted row, or None if there was none.
    """
    favorite = session.get(MovieFavorite, (user_id, movie_id))
    if favorite is None:
        return None
    session.delete(favorite)
    session.flush()
    return favorite


def get_favorite_movies_by_username(*, session: Session, username: str) -> list[Movie]:
    """
    Retrieve the favorite movies of a user, most recently added first.

    Parameters:
        session (Session): The database session.
        username (str): The username of the user.
    Returns:
        list[Movie]: The user's favorite movies.
    """
    stmt = (
        select(Movie)
        .join(MovieFavorite, col(MovieFavorite.movie_id) == col(Movie.id))
        .join(User, col(User.id) == col(MovieFavorite.user_id))
        .where(col(User.username) == username)
        .order_by(col(MovieFavorite.created_at).desc(), col(Movie.id))
    )
    return list(session.exec(stmt).all())


def count_favorites(*, session: Session, movie_id: int) -> int:
    stmt = select(func.count()).select_from(MovieFavorite).where(
        col(MovieFavorite.movie_id) == movie_id
    )
    return session.exec(stmt).one()
