from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "An unexpected error occurred"

    def __init__(self, detail: str | None = None):
        if detail:
            self.detail = detail
        super().__init__(self.detail)


class ConstraintViolationError(AppError):
    """A write was rejected by a database constraint the caller can act on."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "The request conflicts with existing data."
