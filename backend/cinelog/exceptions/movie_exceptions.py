from fastapi import status

from .base import AppError, ConstraintViolationError


class MovieNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, movie_id: int):
        self.movie_id = movie_id
        detail = f"Movie with ID {movie_id} not found."
        super().__init__(detail)


class UpstreamUnavailableError(AppError):
    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, message: str | None = None):
        detail = "Movie metadata service is unavailable."
        if message:
            detail = f"{detail} {message}"
        super().__init__(detail)


class MovieConversionError(UpstreamUnavailableError):
    """TMDB answered with a movie payload that can not be stored."""

    def __init__(self, message: str):
        super().__init__(f"Malformed movie payload: {message}.")


class FavoriteAlreadyExistsError(ConstraintViolationError):
    def __init__(self, user_id: int, movie_id: int):
        detail = f"Movie with ID {movie_id} is already a favorite of user {user_id}."
        super().__init__(detail)


class FavoriteNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, user_id: int, movie_id: int):
        detail = f"Movie with ID {movie_id} is not a favorite of user {user_id}."
        super().__init__(detail)


class WatchedAlreadyExistsError(ConstraintViolationError):
    def __init__(self, user_id: int, movie_id: int):
        detail = f"Movie with ID {movie_id} is already watched by user {user_id}."
        super().__init__(detail)


class WatchedNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, user_id: int, movie_id: int):
        detail = f"Movie with ID {movie_id} is not watched by user {user_id}."
        super().__init__(detail)


class ReviewAlreadyExistsError(ConstraintViolationError):
    def __init__(self, user_id: int, movie_id: int):
        detail = f"User {user_id} has already reviewed movie with ID {movie_id}."
        super().__init__(detail)


class ReviewNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, user_id: int, movie_id: int):
        detail = f"User {user_id} has no review for movie with ID {movie_id}."
        super().__init__(detail)
