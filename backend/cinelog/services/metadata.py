"""Single point of contact with TMDB, with results served from a TTL cache."""

import logging
from copy import deepcopy
from typing import Any, Protocol

from sqlmodel import Session

from cinelog.converters import movie as movie_converters
from cinelog.core.config import settings
from cinelog.core.enums import MovieCollection
from cinelog.core.ttl_cache import TTLCache
from cinelog.crud import movie as movies_crud
from cinelog.exceptions.movie_exceptions import MovieConversionError
from cinelog.schemas.movie import SearchResults

logger = logging.getLogger(__name__)

REQUIRED_MOVIE_FIELDS = (
    "adult",
    "backdrop_path",
    "genre_ids",
    "id",
    "original_language",
    "original_title",
    "overview",
    "popularity",
    "poster_path",
    "release_date",
    "title",
    "video",
    "vote_average",
    "vote_count",
)


class MovieMetadataClient(Protocol):
    def get_movie(self, movie_id: int) -> dict[str, Any] | None: ...

    def search_movies(self, query: str, page: int = 1) -> dict[str, Any]: ...

    def get_movie_collection(self, name: str) -> dict[str, Any]: ...

    def get_genres(self) -> list[dict[str, Any]]: ...

    def get_languages(self) -> list[dict[str, Any]]: ...


def is_valid_movie(movie: dict[str, Any]) -> bool:
    """
    Tell whether a TMDB search entry has every field needed to display it.

    A field counts as missing when it is absent, None, an empty string or an
    empty list. ``False`` and ``0`` are legitimate values.
    """
    for field in REQUIRED_MOVIE_FIELDS:
        value = movie.get(field)
        if value is None or value == "" or value == []:
            return False
    return True


def filter_valid_movies(movies: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [movie for movie in movies if is_valid_movie(movie)]


def search_cache_key(query: str, page: int) -> str:
    return f"search:{query.strip().lower()}:{page}"


def movie_cache_key(movie_id: int) -> str:
    return f"movie:{movie_id}"


def collection_cache_key(collection: MovieCollection) -> str:
    return f"collection:{collection.value}"


GENRES_CACHE_KEY = "genres"
LANGUAGES_CACHE_KEY = "languages"


class MetadataService:
    """
    Routes read-mostly TMDB queries through a TTL cache and normalizes results.

    Only successful upstream answers are cached. UpstreamUnavailableError
    raised by the client propagates untouched, and a movie TMDB does not know
    is not cached either, so the next lookup asks TMDB again.

    Callers always receive a copy of the cached value, never the stored object.

    Parameters:
        client (MovieMetadataClient): The upstream client.
        cache (TTLCache): The cache instance, shared by all requests.
        ttl_seconds (float): Lifetime of search, movie and collection entries.
        reference_ttl_seconds (float): Lifetime of genre and language entries.
        filter_invalid (bool): Drop search entries with missing display fields.
    """

    def __init__(
        self,
        *,
        client: MovieMetadataClient,
        cache: TTLCache,
        ttl_seconds: float = settings.CACHE_TTL_SECONDS,
        reference_ttl_seconds: float = settings.REFERENCE_CACHE_TTL_SECONDS,
        filter_invalid: bool = settings.SEARCH_FILTER_INVALID_MOVIES,
    ):
        self.client = client
        self.cache = cache
        self.ttl_seconds = ttl_seconds
        self.reference_ttl_seconds = reference_ttl_seconds
        self.filter_invalid = filter_invalid

    def search_by_title(self, query: str, page: int = 1) -> SearchResults:
        """
        Search movies by title.

        Parameters:
            query (str): The title to search for.
            page (int): The 1-based results page.
        Returns:
            SearchResults: The page of movies and the pagination totals.
        Raises:
            UpstreamUnavailableError: If TMDB fails.
        """
        key = search_cache_key(query, page)
        cached: SearchResults | None = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return cached.model_copy(deep=True)

        payload = self.client.search_movies(query, page)
        movies: list[dict[str, Any]] = payload.get("results", [])
        if self.filter_invalid:
            movies = filter_valid_movies(movies)
        results = SearchResults(
            page=payload.get("page", page),
            movies=movies,
            total_pages=payload.get("total_pages", 0),
            total_results=payload.get("total_results", 0),
        )
        self.cache.set(key, results, self.ttl_seconds)
        return results.model_copy(deep=True)

    def get_by_id(self, movie_id: int) -> dict[str, Any] | None:
        """
        Fetch the TMDB payload of a movie.

        The payload is checked before it is cached: it must carry a usable
        title and the requested id.

        Parameters:
            movie_id (int): The TMDB ID of the movie.
        Returns:
            dict[str, Any] | None: The payload, or None if TMDB has no such movie.
        Raises:
            MovieConversionError: If the payload can not be stored as a movie.
            UpstreamUnavailableError: If TMDB fails.
        """
        key = movie_cache_key(movie_id)
        cached: dict[str, Any] | None = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return deepcopy(cached)

        payload = self.client.get_movie(movie_id)
        if payload is None:
            logger.info(f"Movie {movie_id} not found on TMDB.")
            return None

        try:
            movie_create = movie_converters.to_movie_create(payload)
        except MovieConversionError:
            logger.warning(f"TMDB returned an unusable payload for movie {movie_id}.")
            raise
        if movie_create.id != movie_id:
            logger.warning(
                f"TMDB answered movie {movie_create.id} when asked for {movie_id}."
            )
            raise MovieConversionError(
                f"asked for movie {movie_id}, got {movie_create.id}"
            )

        self.cache.set(key, payload, self.ttl_seconds)
        return deepcopy(payload)

    def get_collection(
        self,
        name: str | None,
        *,
        session: Session,
    ) -> list[dict[str, Any]]:
        """
        Return the movies of a collection.

        ``popular`` and ``top_rated`` are ranked from local favorites and
        review ratings and are never cached. ``now_playing`` and ``upcoming``
        come from TMDB. An unknown or missing name means ``now_playing``.

        Parameters:
            name (str | None): The collection name.
            session (Session): The database session, used for local rankings.
        Returns:
            list[dict[str, Any]]: The movies of the collection.
        Raises:
            UpstreamUnavailableError: If TMDB fails.
        """
        collection = MovieCollection.parse(name)
        if collection.is_local:
            return self._local_collection(collection, session=session)

        key = collection_cache_key(collection)
        cached: list[dict[str, Any]] | None = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return deepcopy(cached)

        payload = self.client.get_movie_collection(collection.value)
        movies: list[dict[str, Any]] = payload.get("results", [])
        self.cache.set(key, movies, self.ttl_seconds)
        return deepcopy(movies)

    def _local_collection(
        self,
        collection: MovieCollection,
        *,
        session: Session,
    ) -> list[dict[str, Any]]:
        if collection is MovieCollection.POPULAR:
            return [
                movie_converters.to_with_favorite_count(movie, favorites).model_dump(
                    mode="json"
                )
                for movie, favorites in movies_crud.get_most_favorited_movies(
                    session=session,
                    limit=settings.POPULAR_LIMIT,
                )
            ]
        return [
            movie_converters.to_with_average_rating(
                movie, average_rating, reviews
            ).model_dump(mode="json")
            for movie, average_rating, reviews in movies_crud.get_top_rated_movies(
                session=session,
                limit=settings.POPULAR_LIMIT,
            )
        ]

    def get_genres(self) -> list[dict[str, Any]]:
        cached: list[dict[str, Any]] | None = self.cache.get(GENRES_CACHE_KEY)
        if cached is not None:
            return deepcopy(cached)
        genres = self.client.get_genres()
        self.cache.set(GENRES_CACHE_KEY, genres, self.reference_ttl_seconds)
        return deepcopy(genres)

    def get_languages(self) -> list[dict[str, Any]]:
        cached: list[dict[str, Any]] | None = self.cache.get(LANGUAGES_CACHE_KEY)
        if cached is not None:
            return deepcopy(cached)
        languages = self.client.get_languages()
        self.cache.set(LANGUAGES_CACHE_KEY, languages, self.reference_ttl_seconds)
        return deepcopy(languages)
