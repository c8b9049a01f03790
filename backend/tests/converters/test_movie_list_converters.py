from cinelog.converters import movie_list as list_converters
from cinelog.models.movie import Movie
from cinelog.models.movie_list import MovieList
from cinelog.utils import now_utc


def _movie_list() -> MovieList:
    return MovieList(
        id=1,
        user_id=7,
        title="Noir",
        description=None,
        created_at=now_utc(),
    )


def test_to_detail_slices_requested_page():
    movies = [Movie(id=i, title=f"Movie {i}") for i in range(1, 6)]

    detail = list_converters.to_detail(
        _movie_list(),
        author="sam",
        saved=3,
        movies=movies,
        page=2,
        page_size=2,
    )

    assert [movie.id for movie in detail.movies] == [3, 4]
    assert detail.page == 2
    assert detail.total_pages == 3
    assert detail.total_results == 5
    assert detail.author == "sam"
    assert detail.saved == 3


def test_to_detail_past_last_page_is_empty():
    detail = list_converters.to_detail(
        _movie_list(),
        author="sam",
        saved=0,
        movies=[Movie(id=1, title="Only")],
        page=4,
        page_size=20,
    )

    assert detail.movies == []
    assert detail.total_pages == 1
