import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from cinelog.converters import movie as movie_converters
from cinelog.core.enums import IntegrityKind
from cinelog.crud import movie as movies_crud
from cinelog.crud.integrity import classify_integrity_error
from cinelog.exceptions.base import AppError, ConstraintViolationError
from cinelog.exceptions.movie_exceptions import MovieNotFoundError
from cinelog.models.movie import Movie
from cinelog.services.metadata import MetadataService

logger = logging.getLogger(__name__)


class MovieResolver:
    """
    Makes sure a local Movie row exists before anything references it.

    A movie found locally is returned without contacting TMDB. Otherwise its
    payload is fetched through the metadata service and a row is inserted.
    The insert is only flushed: the caller commits it together with the row
    that references the movie, so a failure afterwards leaves nothing behind.
    """

    def __init__(self, *, metadata: MetadataService):
        self.metadata = metadata

    def resolve(self, *, session: Session, movie_id: int) -> Movie:
        """
        Return the local Movie for an ID, creating it from TMDB if needed.

        Parameters:
            session (Session): The database session. Should hold no pending
                changes, because a lost insert race rolls it back.
            movie_id (int): The TMDB ID of the movie.
        Returns:
            Movie: The existing or newly created movie.
        Raises:
            MovieNotFoundError: If the movie is neither local nor on TMDB.
            UpstreamUnavailableError: If TMDB fails or answers with a payload
                that can not be stored (MovieConversionError).
            ConstraintViolationError: If the insert is rejected for any reason
                other than a concurrent insert of the same movie.
        """
        movie = movies_crud.get_movie_by_id(session=session, id=movie_id)
        if movie is not None:
            return movie

        payload = self.metadata.get_by_id(movie_id)
        if payload is None:
            raise MovieNotFoundError(movie_id)

        # Shape and id were checked by the metadata service.
        movie_create = movie_converters.to_movie_create(payload)

        try:
            return movies_crud.create_movie(session=session, movie_create=movie_create)
        except IntegrityError as e:
            session.rollback()
            kind = classify_integrity_error(e)
            if kind is not IntegrityKind.UNIQUE:
                raise ConstraintViolationError(
                    f"Movie with ID {movie_id} could not be stored."
                ) from e

        # Another request created the movie between our read and our insert.
        logger.debug(f"Movie {movie_id} was created concurrently, re-reading it.")
        movie = movies_crud.get_movie_by_id(session=session, id=movie_id)
        if movie is None:
            raise AppError(f"Movie with ID {movie_id} vanished after a conflicting insert.")
        return movie
