from sqlalchemy import exists, func, select
from sqlmodel import Session, col

from cinelog.models.follow import Follow
from cinelog.models.movie import Movie
from cinelog.models.movie_list import (
    MovieList,
    MovieListCreate,
    MovieListEntry,
    MovieListUpdate,
    SavedList,
)
from cinelog.models.user import User


def _saved_count():
    return (
        select(func.count())
        .select_from(SavedList)
        .where(col(SavedList.list_id) == col(MovieList.id))
        .correlate(MovieList)
        .scalar_subquery()
    )


def create_list(*, session: Session, list_create: MovieListCreate) -> MovieList:
    """
    Create a new movie list.

    Parameters:
        session (Session): The database session.
        list_create (MovieListCreate): The list data, including its owner.
    Returns:
        MovieList: The created list, with its id assigned.
    Raises:
        IntegrityError: If the owner does not exist.
    """
    db_obj = MovieList.model_validate(list_create)
    session.add(db_obj)
    session.flush()
    return db_obj


def get_list_by_id(*, session: Session, list_id: int) -> MovieList | None:
    return session.get(MovieList, list_id)


def update_list(*, db_list: MovieList, list_update: MovieListUpdate) -> MovieList:
    """
    Update an existing list. Does not flush, only the fields that were set
    on ``list_update`` are changed.
    """
    list_data = list_update.model_dump(exclude_unset=True)
    db_list.sqlmodel_update(list_data)
    return db_list


def delete_list(*, session: Session, list_id: int) -> MovieList | None:
    """
    Delete a list. Its entries and saves are removed by the database cascade.
    Returns the deleted list, or None if it did not exist.
    """
    movie_list = session.get(MovieList, list_id)
    if movie_list is None:
        return None
    session.delete(movie_list)
    session.flush()
    return movie_list


def get_list_entry(
    *,
    session: Session,
    list_id: int,
    movie_id: int,
) -> MovieListEntry | None:
    return session.get(MovieListEntry, (list_id, movie_id))


def add_movie_to_list(
    *,
    session: Session,
    list_id: int,
    movie_id: int,
) -> MovieListEntry:
    """
    Add a movie to a list.

    Raises:
        IntegrityError: If the movie is already in the list, or the list or
            movie does not exist.
    """
    entry = MovieListEntry(list_id=list_id, movie_id=movie_id)
    session.add(entry)
    session.flush()
    return entry


def remove_movie_from_list(
    *,
    session: Session,
    list_id: int,
    movie_id: int,
) -> MovieListEntry | None:
    entry = session.get(MovieListEntry, (list_id, movie_id))
    if entry is None:
        return None
    session.delete(entry)
    session.flush()
    return entry


def get_movies_in_list(*, session: Session, list_id: int) -> list[Movie]:
    """
    Retrieve the movies of a list in the order they were added.
    """
    stmt = (
        select(Movie)
        .join(MovieListEntry, col(MovieListEntry.movie_id) == col(Movie.id))
        .where(col(MovieListEntry.list_id) == list_id)
        .order_by(col(MovieListEntry.added_at), col(Movie.id))
    )
    return list(session.execute(stmt).scalars().all())


def get_list_with_details(
    *,
    session: Session,
    list_id: int,
) -> tuple[MovieList, str, int] | None:
    """
    Retrieve a list together with the username of its author and the number
    of users that saved it.

    Parameters:
        session (Session): The database session.
        list_id (int): The ID of the list.
    Returns:
        tuple[MovieList, str, int] | None: The list, its author and saved
        count, or None if the list does not exist.
    """
    stmt = (
        select(MovieList, col(User.username), _saved_count().label("saved"))
        .join(User, col(User.id) == col(MovieList.user_id))
        .where(col(MovieList.id) == list_id)
    )
    row = session.execute(stmt).one_or_none()
    if row is None:
        return None
    movie_list, author, saved = row
    return movie_list, author, saved


def get_lists_by_username(*, session: Session, username: str) -> list[MovieList]:
    stmt = (
        select(MovieList)
        .join(User, col(User.id) == col(MovieList.user_id))
        .where(col(User.username) == username)
        .order_by(col(MovieList.created_at).desc(), col(MovieList.id).desc())
    )
    return list(session.execute(stmt).scalars().all())


def get_saved_lists_by_username(*, session: Session, username: str) -> list[MovieList]:
    stmt = (
        select(MovieList)
        .join(SavedList, col(SavedList.list_id) == col(MovieList.id))
        .join(User, col(User.id) == col(SavedList.user_id))
        .where(col(User.username) == username)
        .order_by(col(MovieList.created_at).desc(), col(MovieList.id).desc())
    )
    return list(session.execute(stmt).scalars().all())


def get_user_lists_with_movie_status(
    *,
    session: Session,
    user_id: int,
    movie_id: int | None,
) -> list[tuple[MovieList, bool]]:
    """
    Retrieve the lists of a user, each flagged with whether it contains a movie.

    Parameters:
        session (Session): The database session.
        user_id (int): The ID of the owner.
        movie_id (int | None): The movie to look for. When None every list is
            flagged False.
    Returns:
        list[tuple[MovieList, bool]]: The lists and their ``has_movie`` flag.
    """
    has_movie = exists().where(
        col(MovieListEntry.list_id) == col(MovieList.id),
        col(MovieListEntry.movie_id) == movie_id,
    )
    stmt = (
        select(MovieList, has_movie.label("has_movie"))
        .where(col(MovieList.user_id) == user_id)
        .order_by(col(MovieList.created_at).desc(), col(MovieList.id).desc())
    )
    return [
        (movie_list, bool(flag) and movie_id is not None)
        for movie_list, flag in session.execute(stmt).all()
    ]


def get_saved(*, session: Session, user_id: int, list_id: int) -> SavedList | None:
    return session.get(SavedList, (user_id, list_id))


def add_saved(*, session: Session, user_id: int, list_id: int) -> SavedList:
    """
    Save a list for a user.

    Raises:
        IntegrityError: If it is already saved, or the user or list does not exist.
    """
    saved = SavedList(user_id=user_id, list_id=list_id)
    session.add(saved)
    session.flush()
    return saved


def remove_saved(*, session: Session, user_id: int, list_id: int) -> SavedList | None:
    saved = session.get(SavedList, (user_id, list_id))
    if saved is None:
        return None
    session.delete(saved)
    session.flush()
    return saved


def get_popular_lists(*, session: Session, limit: int) -> list[tuple[MovieList, str, int]]:
    """
    Retrieve the most saved lists.

    Parameters:
        session (Session): The database session.
        limit (int): The maximum number of lists to retrieve.
    Returns:
        list[tuple[MovieList, str, int]]: Lists with their author and saved
        count, most saved first.
    """
    saved = _saved_count()
    stmt = (
        select(MovieList, col(User.username), saved.label("saved"))
        .join(User, col(User.id) == col(MovieList.user_id))
        .order_by(saved.desc(), col(MovieList.id))
        .limit(limit)
    )
    return [
        (movie_list, author, count)
        for movie_list, author, count in session.execute(stmt).all()
    ]


def get_followed_lists(
    *,
    session: Session,
    user_id: int,
    limit: int,
) -> list[tuple[MovieList, str, int]]:
    """
    Retrieve the most saved lists created by the users a user follows.

    Parameters:
        session (Session): The database session.
        user_id (int): The ID of the follower.
        limit (int): The maximum number of lists to retrieve.
    Returns:
        list[tuple[MovieList, str, int]]: Lists with their author and saved
        count, most saved first.
    """
    saved = _saved_count()
    stmt = (
        select(MovieList, col(User.username), saved.label("saved"))
        .join(Follow, col(Follow.followed_id) == col(MovieList.user_id))
        .join(User, col(User.id) == col(MovieList.user_id))
        .where(col(Follow.follower_id) == user_id)
        .order_by(saved.desc(), col(MovieList.id))
        .limit(limit)
    )
    return [
        (movie_list, author, count)
        for movie_list, author, count in session.execute(stmt).all()
    ]
