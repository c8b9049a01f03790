import pytest
import requests
from pytest_mock import MockerFixture

from cinelog.exceptions.movie_exceptions import UpstreamUnavailableError
from cinelog.tmdb.client import TmdbClient


def _response(mocker: MockerFixture, status_code: int = 200, payload=None):
    response = mocker.MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Error"
        )
    return response


@pytest.fixture
def http_session(mocker: MockerFixture):
    return mocker.MagicMock(spec=requests.Session)


@pytest.fixture
def tmdb_client(http_session) -> TmdbClient:
    return TmdbClient(
        api_key="secret",
        base_url="https://api.example.org/3/",
        language="es-ES",
        timeout=3.0,
        session=http_session,
    )


def test_get_movie_sends_key_and_locale(
    mocker: MockerFixture,
    http_session,
    tmdb_client: TmdbClient,
):
    http_session.get.return_value = _response(mocker, payload={"id": 550})

    movie = tmdb_client.get_movie(550)

    assert movie == {"id": 550}
    http_session.get.assert_called_once_with(
        "https://api.example.org/3/movie/550",
        params={"api_key": "secret", "language": "es-ES"},
        timeout=3.0,
    )


def test_get_movie_not_found_returns_none(
    mocker: MockerFixture,
    http_session,
    tmdb_client: TmdbClient,
):
    http_session.get.return_value = _response(mocker, status_code=404)

    assert tmdb_client.get_movie(999_999_999) is None


def test_search_movies_passes_query_and_page(
    mocker: MockerFixture,
    http_session,
    tmdb_client: TmdbClient,
):
    body = {"page": 2, "results": [], "total_pages": 2, "total_results": 21}
    http_session.get.return_value = _response(mocker, payload=body)

    assert tmdb_client.search_movies("matrix", page=2) == body
    _, kwargs = http_session.get.call_args
    assert kwargs["params"]["query"] == "matrix"
    assert kwargs["params"]["page"] == 2
    assert kwargs["params"]["language"] == "es-ES"


@pytest.mark.parametrize("status_code", [401, 404, 429, 500, 503])
def test_search_movies_error_status_raises(
    mocker: MockerFixture,
    http_session,
    tmdb_client: TmdbClient,
    status_code: int,
):
    http_session.get.return_value = _response(mocker, status_code=status_code)

    with pytest.raises(UpstreamUnavailableError):
        tmdb_client.search_movies("matrix")


@pytest.mark.parametrize(
    "error",
    [requests.Timeout("timed out"), requests.ConnectionError("refused")],
)
def test_transport_errors_raise_upstream_unavailable(
    http_session,
    tmdb_client: TmdbClient,
    error: Exception,
):
    http_session.get.side_effect = error

    with pytest.raises(UpstreamUnavailableError):
        tmdb_client.get_movie(550)

    # Not retried
    assert http_session.get.call_count == 1


def test_body_that_is_not_json_raises(
    mocker: MockerFixture,
    http_session,
    tmdb_client: TmdbClient,
):
    response = _response(mocker)
    response.json.side_effect = ValueError("Expecting value")
    http_session.get.return_value = response

    with pytest.raises(UpstreamUnavailableError):
        tmdb_client.get_genres()


@pytest.mark.parametrize(
    "payload",
    [[], {"page": 1}, {"results": "nope"}],
)
def test_collection_with_unexpected_shape_raises(
    mocker: MockerFixture,
    http_session,
    tmdb_client: TmdbClient,
    payload,
):
    http_session.get.return_value = _response(mocker, payload=payload)

    with pytest.raises(UpstreamUnavailableError):
        tmdb_client.get_movie_collection("upcoming")


def test_get_genres_and_languages(
    mocker: MockerFixture,
    http_session,
    tmdb_client: TmdbClient,
):
    http_session.get.side_effect = [
        _response(mocker, payload={"genres": [{"id": 18, "name": "Drama"}]}),
        _response(mocker, payload=[{"iso_639_1": "es"}]),
    ]

    assert tmdb_client.get_genres() == [{"id": 18, "name": "Drama"}]
    assert tmdb_client.get_languages() == [{"iso_639_1": "es"}]
    urls = [call.args[0] for call in http_session.get.call_args_list]
    assert urls == [
        "https://api.example.org/3/genre/movie/list",
        "https://api.example.org/3/configuration/languages",
    ]
