"""Error taxonomy shared by services and the HTTP layer."""

from http import HTTPStatus


class ServiceError(RuntimeError):
    """Base error carrying a user-facing message and an HTTP status."""

    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class InvalidArgument(ServiceError):
    status = HTTPStatus.BAD_REQUEST


class Unauthenticated(ServiceError):
    status = HTTPStatus.UNAUTHORIZED


class Forbidden(ServiceError):
    status = HTTPStatus.FORBIDDEN


class NotFound(ServiceError):
    status = HTTPStatus.NOT_FOUND
