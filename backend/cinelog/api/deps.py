from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Request
from sqlmodel import Session

from cinelog.core.db import engine
from cinelog.services.metadata import MetadataService
from cinelog.services.movie_resolver import MovieResolver


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def get_metadata_service(request: Request) -> MetadataService:
    return request.app.state.metadata_service


def get_movie_resolver(request: Request) -> MovieResolver:
    return request.app.state.movie_resolver


SessionDep = Annotated[Session, Depends(get_db)]
MetadataDep = Annotated[MetadataService, Depends(get_metadata_service)]
ResolverDep = Annotated[MovieResolver, Depends(get_movie_resolver)]
