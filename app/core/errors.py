from fastapi import status


class AppError(Exception):
    """Base error carrying the HTTP status and the `{error, detail}` body."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_content(self) -> dict:
        content = {"error": self.message}
        if self.detail:
            content["detail"] = self.detail
        return content


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class MalformedInputError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class PersistenceError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__("Internal error", detail=detail)
