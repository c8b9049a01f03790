"""Thin HTTP client for the TMDB v3 API."""

from collections.abc import Mapping
from threading import local
from typing import Any

import requests
from requests.adapters import HTTPAdapter

from cinelog.core.config import settings
from cinelog.exceptions.movie_exceptions import UpstreamUnavailableError
from cinelog.tmdb.logger import logger

MOVIE_PATH_TEMPLATE = "/movie/{id}"
SEARCH_MOVIE_PATH = "/search/movie"
COLLECTION_PATH_TEMPLATE = "/movie/{name}"
GENRES_PATH = "/genre/movie/list"
LANGUAGES_PATH = "/configuration/languages"


class TmdbClient:
    """
    Issues GET requests against TMDB with the API key and a fixed locale.

    Every failure (connection error, timeout, non-2xx status, body that is not
    the expected JSON shape) raises UpstreamUnavailableError. Nothing is retried.
    The single exception is a 404 on a movie lookup, which means the movie does
    not exist and is reported as None.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://api.themoviedb.org/3",
        language: str = "es-ES",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.language = language
        self.timeout = timeout
        self._session = session
        self._thread_local = local()

    def _get_session(self) -> requests.Session:
        """Return the injected session, or a thread-local one for TMDB calls."""
        if self._session is not None:
            return self._session
        session = getattr(self._thread_local, "session", None)
        if session is None:
            session = requests.Session()
            # No retries: a failed call fails the request that needed it.
            session.mount("https://", HTTPAdapter(max_retries=0))
            self._thread_local.session = session
        return session

    def _get(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        *,
        allow_not_found: bool = False,
    ) -> Any | None:
        url = f"{self.base_url}{path}"
        query: dict[str, Any] = {
            "api_key": self.api_key,
            "language": self.language,
        }
        if params:
            query.update(params)

        try:
            response = self._get_session().get(url, params=query, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"TMDB request failed for {path}. Error: {e}")
            raise UpstreamUnavailableError from e

        if allow_not_found and response.status_code == 404:
            logger.debug(f"TMDB returned 404 for {path}.")
            return None

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            logger.warning(
                f"TMDB request for {path} answered with status {response.status_code}."
            )
            raise UpstreamUnavailableError(
                f"TMDB answered with status {response.status_code}."
            ) from e

        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"TMDB returned a body that is not JSON for {path}.")
            raise UpstreamUnavailableError("Malformed response body.") from e

    @staticmethod
    def _expect_dict(payload: Any, path: str) -> dict[str, Any]:
        if not isinstance(payload, dict):
            logger.warning(f"Unexpected TMDB payload for {path}.")
            raise UpstreamUnavailableError("Malformed response body.")
        return payload

    def get_movie(self, movie_id: int) -> dict[str, Any] | None:
        """
        Fetch the details of a single movie.

        Returns:
            dict[str, Any] | None: The raw TMDB payload, None when TMDB has no
            movie with this id.
        Raises:
            UpstreamUnavailableError: If TMDB can not be reached or misbehaves.
        """
        path = MOVIE_PATH_TEMPLATE.format(id=movie_id)
        payload = self._get(path, allow_not_found=True)
        if payload is None:
            return None
        return self._expect_dict(payload, path)

    def search_movies(self, query: str, page: int = 1) -> dict[str, Any]:
        """Search movies by title, returning TMDB's paginated search body."""
        payload = self._expect_dict(
            self._get(SEARCH_MOVIE_PATH, {"query": query, "page": page}),
            SEARCH_MOVIE_PATH,
        )
        if not isinstance(payload.get("results"), list):
            logger.warning(f"TMDB search for '{query}' returned no results list.")
            raise UpstreamUnavailableError("Malformed response body.")
        return payload

    def get_movie_collection(self, name: str) -> dict[str, Any]:
        """Fetch one of TMDB's movie collections (now_playing, upcoming, ...)."""
        path = COLLECTION_PATH_TEMPLATE.format(name=name)
        payload = self._expect_dict(self._get(path), path)
        if not isinstance(payload.get("results"), list):
            logger.warning(f"TMDB collection '{name}' returned no results list.")
            raise UpstreamUnavailableError("Malformed response body.")
        return payload

    def get_genres(self) -> list[dict[str, Any]]:
        payload = self._expect_dict(self._get(GENRES_PATH), GENRES_PATH)
        genres = payload.get("genres")
        if not isinstance(genres, list):
            raise UpstreamUnavailableError("Malformed response body.")
        return genres

    def get_languages(self) -> list[dict[str, Any]]:
        payload = self._get(LANGUAGES_PATH)
        if not isinstance(payload, list):
            logger.warning(f"Unexpected TMDB payload for {LANGUAGES_PATH}.")
            raise UpstreamUnavailableError("Malformed response body.")
        return payload


def get_tmdb_client() -> TmdbClient:
    """Build a client configured from the application settings."""
    return TmdbClient(
        api_key=settings.TMDB_KEY,
        base_url=settings.TMDB_BASE_URL,
        language=settings.TMDB_LANGUAGE,
        timeout=settings.TMDB_TIMEOUT_SECONDS,
    )
