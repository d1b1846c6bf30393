"""
Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; main.py registers a single
handler that turns any ServiceError into {"detail": ..., "error": ...}.
"""

from starlette import status


class ServiceError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    @property
    def kind(self) -> str:
        return type(self).__name__


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden access"


class Unauthenticated(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized access"


class InvalidTransition(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid status transition"


class UpstreamFailure(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Upstream service failure"
