import math

from cinelog.converters import movie as movie_converters
from cinelog.models.movie import Movie
from cinelog.models.movie_list import MovieList
from cinelog.schemas.movie_list import (
    MovieListDetail,
    MovieListPublic,
    MovieListSummary,
    MovieListWithMovieStatus,
)


def to_public(movie_list: MovieList) -> MovieListPublic:
    return MovieListPublic.model_validate(movie_list)


def to_summary(
    movie_list: MovieList,
    *,
    author: str,
    saved: int,
    movies: list[Movie],
) -> MovieListSummary:
    return MovieListSummary.model_validate(
        movie_list,
        update={
            "author": author,
            "saved": saved,
            "movies": [movie_converters.to_public(movie) for movie in movies],
        },
    )


def to_detail(
    movie_list: MovieList,
    *,
    author: str,
    saved: int,
    movies: list[Movie],
    page: int,
    page_size: int,
) -> MovieListDetail:
    """
    Convert a list into its paginated detail view.

    Parameters:
        movie_list (MovieList): The list to convert.
        author (str): The username of the list owner.
        saved (int): How many users saved the list.
        movies (list[Movie]): All movies of the list, in list order.
        page (int): The 1-based page to return.
        page_size (int): The number of movies per page.
    Returns:
        MovieListDetail: The list with one page of its movies.
    """
    start = (page - 1) * page_size
    return MovieListDetail.model_validate(
        movie_list,
        update={
            "author": author,
            "saved": saved,
            "movies": [
                movie_converters.to_public(movie)
                for movie in movies[start : start + page_size]
            ],
            "page": page,
            "total_pages": math.ceil(len(movies) / page_size),
            "total_results": len(movies),
        },
    )


def to_with_movie_status(
    movie_list: MovieList,
    has_movie: bool,
) -> MovieListWithMovieStatus:
    return MovieListWithMovieStatus.model_validate(
        movie_list, update={"has_movie": has_movie}
    )
