from collections.abc import Sequence

from fastapi import status

from .base import AppError, ConstraintViolationError


class UserNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, user: int | str):
        self.user = user
        detail = f"User {user} not found."
        super().__init__(detail)


class OneOrMoreUsersNotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, user_ids: Sequence[int]):
        self.user_ids = list(user_ids)
        detail = f"One or more users not found: {', '.join(map(str, user_ids))}."
        super().__init__(detail)


class SelfFollowError(ConstraintViolationError):
    def __init__(self, user_id: int):
        detail = f"User {user_id} can not follow themselves."
        super().__init__(detail)


class AlreadyFollowingError(ConstraintViolationError):
    def __init__(self, follower_id: int, followed_id: int):
        detail = f"User {follower_id} already follows user {followed_id}."
        super().__init__(detail)


class FollowNotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, follower_id: int, followed_id: int):
        detail = f"User {follower_id} does not follow user {followed_id}."
        super().__init__(detail)
