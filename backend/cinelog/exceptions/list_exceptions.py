from fastapi import status

from .base import AppError, ConstraintViolationError


class ListNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, list_id: int):
        self.list_id = list_id
        detail = f"List with ID {list_id} not found."
        super().__init__(detail)


class ListNotUpdatedError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, list_id: int):
        detail = f"List with ID {list_id} not found or without updates."
        super().__init__(detail)


class MovieAlreadyInListError(ConstraintViolationError):
    def __init__(self, list_id: int, movie_id: int):
        detail = f"Movie with ID {movie_id} is already in list {list_id}."
        super().__init__(detail)


class MovieNotInListError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, list_id: int, movie_id: int):
        detail = f"Movie with ID {movie_id} is not in list {list_id}."
        super().__init__(detail)


class ListAlreadySavedError(ConstraintViolationError):
    def __init__(self, user_id: int, list_id: int):
        detail = f"List {list_id} is already saved by user {user_id}."
        super().__init__(detail)


class SavedListNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, user_id: int, list_id: int):
        detail = f"List {list_id} is not saved by user {user_id}."
        super().__init__(detail)
