import os

# Must be set before anything imports cinelog.core.config
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["TMDB_KEY"] = "test-key"
os.environ["ENABLE_FILE_LOGGING"] = "false"

from collections.abc import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session  # noqa: E402

from cinelog.api.deps import (  # noqa: E402
    get_db,
    get_metadata_service,
    get_movie_resolver,
)
from cinelog.core.db import create_db_engine, init_db  # noqa: E402
from cinelog.core.ttl_cache import TTLCache  # noqa: E402
from cinelog.main import app  # noqa: E402
from cinelog.services.metadata import MetadataService  # noqa: E402
from cinelog.services.movie_resolver import MovieResolver  # noqa: E402

from .fixtures.factories import *  # noqa: E402, F403
from .fixtures.tmdb import *  # noqa: E402, F403

TEST_TTL_SECONDS = 60
TEST_REFERENCE_TTL_SECONDS = 86400


@pytest.fixture(scope="function")
def test_engine() -> Generator[Engine, None, None]:
    # A fresh in-memory database per test, one connection shared by all threads
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db_transaction(test_engine: Engine) -> Generator[Session, None, None]:
    with Session(test_engine) as session:
        yield session


@pytest.fixture(scope="function")
def cache(fake_clock) -> TTLCache:
    return TTLCache(clock=fake_clock)


@pytest.fixture(scope="function")
def metadata_service(fake_tmdb, cache: TTLCache) -> MetadataService:
    return MetadataService(
        client=fake_tmdb,
        cache=cache,
        ttl_seconds=TEST_TTL_SECONDS,
        reference_ttl_seconds=TEST_REFERENCE_TTL_SECONDS,
        filter_invalid=True,
    )


@pytest.fixture(scope="function")
def movie_resolver(metadata_service: MetadataService) -> MovieResolver:
    return MovieResolver(metadata=metadata_service)


@pytest.fixture(scope="function")
def client(
    db_transaction: Session,
    metadata_service: MetadataService,
    movie_resolver: MovieResolver,
) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        yield db_transaction

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_metadata_service] = lambda: metadata_service
    app.dependency_overrides[get_movie_resolver] = lambda: movie_resolver

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
