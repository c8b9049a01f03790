from sqlalchemy import func, select
from sqlmodel import Session, col

from cinelog.models.favorite import MovieFavorite
from cinelog.models.follow import Follow
from cinelog.models.movie import Movie, MovieCreate
from cinelog.models.review import Review
from cinelog.models.watched import MovieWatched


def get_movie_by_id(*, session: Session, id: int) -> Movie | None:
    """
    Retrieve a movie by its ID.
    Parameters:
        session (Session): The database session.
        id (int): The TMDB ID of the movie to retrieve.
    Returns:
        Movie | None: The movie object if found, otherwise None.
    """
    movie = session.get(Movie, id)
    return movie


def create_movie(*, session: Session, movie_create: MovieCreate) -> Movie:
    """
    Create a new movie in the database. Raises an IntegrityError if the movie with that id already exists.

    Parameters:
        session (Session): The database session.
        movie_create (MovieCreate): The movie data to create.
    Returns:
        Movie: The created movie object.
    Raises:
        IntegrityError: If a movie with the same id already exists.
    """
    db_obj = Movie(**movie_create.model_dump())
    session.add(db_obj)
    session.flush()  # Check for Unique Violations
    return db_obj


def get_most_favorited_movies(
    *,
    session: Session,
    limit: int,
) -> list[tuple[Movie, int]]:
    """
    Retrieve the movies with the most favorites.

    Parameters:
        session (Session): The database session.
        limit (int): The maximum number of movies to retrieve.
    Returns:
        list[tuple[Movie, int]]: Movies paired with their favorite count,
        most favorited first.
    """
    favorites = func.count(col(MovieFavorite.user_id))
    stmt = (
        select(Movie, favorites.label("favorites"))
        .join(MovieFavorite, col(MovieFavorite.movie_id) == col(Movie.id))
        .group_by(col(Movie.id))
        .order_by(favorites.desc(), col(Movie.id))
        .limit(limit)
    )
    result = session.execute(stmt)
    return [(movie, count) for movie, count in result.all()]


def get_top_rated_movies(
    *,
    session: Session,
    limit: int,
) -> list[tuple[Movie, float, int]]:
    """
    Retrieve the movies with the highest average review rating.

    Parameters:
        session (Session): The database session.
        limit (int): The maximum number of movies to retrieve.
    Returns:
        list[tuple[Movie, float, int]]: Movies with their average rating and
        number of reviews, best rated first. Ties go to the most reviewed.
    """
    average = func.avg(col(Review.rating))
    reviews = func.count(col(Review.id))
    stmt = (
        select(Movie, average.label("average_rating"), reviews.label("reviews"))
        .join(Review, col(Review.movie_id) == col(Movie.id))
        .group_by(col(Movie.id))
        .order_by(average.desc(), reviews.desc(), col(Movie.id))
        .limit(limit)
    )
    result = session.execute(stmt)
    return [
        (movie, float(average_rating), count)
        for movie, average_rating, count in result.all()
    ]


def get_recommended_movies(
    *,
    session: Session,
    user_id: int,
    limit: int,
) -> list[tuple[Movie, int]]:
    """
    Retrieve movies favorited by the users that a user follows, excluding the
    movies that user already watched or favorited.

    Parameters:
        session (Session): The database session.
        user_id (int): The ID of the user to recommend movies to.
        limit (int): The maximum number of movies to retrieve.
    Returns:
        list[tuple[Movie, int]]: Movies paired with the number of followed
        users that favorited them, highest first.
    """
    followed_ids = select(col(Follow.followed_id)).where(
        col(Follow.follower_id) == user_id
    )
    watched_ids = select(col(MovieWatched.movie_id)).where(
        col(MovieWatched.user_id) == user_id
    )
    favorite_ids = select(col(MovieFavorite.movie_id)).where(
        col(MovieFavorite.user_id) == user_id
    )
    followed_favorites = func.count(col(MovieFavorite.user_id))
    stmt = (
        select(Movie, followed_favorites.label("followed_favorites"))
        .join(MovieFavorite, col(MovieFavorite.movie_id) == col(Movie.id))
        .where(
            col(MovieFavorite.user_id).in_(followed_ids),
            col(Movie.id).not_in(watched_ids),
            col(Movie.id).not_in(favorite_ids),
        )
        .group_by(col(Movie.id))
        .order_by(followed_favorites.desc(), col(Movie.id))
        .limit(limit)
    )
    result = session.execute(stmt)
    return [(movie, count) for movie, count in result.all()]
