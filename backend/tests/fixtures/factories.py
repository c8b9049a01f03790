import pytest
from factory import (
    Factory,  # type: ignore
    Faker,  # type: ignore
    LazyAttribute,  # type: ignore
    Sequence,  # type: ignore
)
from factory.alchemy import SQLAlchemyModelFactory
from sqlmodel import Session

from cinelog.models.movie import Movie, MovieCreate
from cinelog.models.movie_list import MovieList
from cinelog.models.user import User, UserCreate

__all__ = [
    "movie_create_factory",
    "movie_factory",
    "user_create_factory",
    "user_factory",
    "movie_list_factory",
]


class SQLModelFactory(SQLAlchemyModelFactory):
    class Meta:
        abstract = True
        sqlalchemy_session_persistence = "flush"


# --------------------------------------
# FACTORIES
# --------------------------------------


class MovieCreateFactory(Factory):
    class Meta:
        model = MovieCreate

    id = Sequence(lambda n: n + 100_000)
    title = Faker("sentence", nb_words=3)
    release_date = Faker("date_object")
    poster_path = Faker("file_path", depth=1, extension="jpg", absolute=True)


@pytest.fixture
def movie_create_factory():
    return MovieCreateFactory


class MovieFactory(SQLModelFactory):
    class Meta:
        model = Movie

    id = Sequence(lambda n: n + 100_000)
    title = Faker("sentence", nb_words=3)
    release_date = Faker("date_object")
    poster_path = Faker("file_path", depth=1, extension="jpg", absolute=True)


@pytest.fixture
def movie_factory(db_transaction: Session):
    MovieFactory._meta.sqlalchemy_session = db_transaction
    return MovieFactory


class UserCreateFactory(Factory):
    class Meta:
        model = UserCreate

    username = Sequence(lambda n: f"user{n}")
    email = LazyAttribute(lambda o: f"{o.username}@example.com")
    avatar = None
    hashed_password = Faker("sha256")


@pytest.fixture
def user_create_factory():
    return UserCreateFactory


class UserFactory(SQLModelFactory):
    class Meta:
        model = User

    username = Sequence(lambda n: f"user{n}")
    email = LazyAttribute(lambda o: f"{o.username}@example.com")
    avatar = Faker("image_url", width=64, height=64)
    hashed_password = Faker("sha256")


@pytest.fixture
def user_factory(db_transaction: Session):
    UserFactory._meta.sqlalchemy_session = db_transaction
    return UserFactory


class MovieListFactory(SQLModelFactory):
    class Meta:
        model = MovieList

    title = Faker("sentence", nb_words=4)
    description = Faker("sentence", nb_words=12)
    user_id: int


@pytest.fixture
def movie_list_factory(db_transaction: Session):
    MovieListFactory._meta.sqlalchemy_session = db_transaction
    return MovieListFactory
