"""
Request ID middleware.

Every request gets an id (client supplied X-Request-ID or a fresh UUID).
The id is kept in a context variable so concurrent requests served by the
same event loop never see each other's id, and a log record factory copies
it onto every record emitted while the request is being handled.
"""

import uuid
import logging
from contextvars import ContextVar
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def _install_record_factory():
    base_factory = logging.getLogRecordFactory()
    if getattr(base_factory, "_adds_request_id", False):
        return

    def record_factory(*args, **kwargs):
        record = base_factory(*args, **kwargs)
        record.request_id = _request_id.get()
        return record

    record_factory._adds_request_id = True
    logging.setLogRecordFactory(record_factory)


class RequestIDMiddleware(BaseHTTPMiddleware):

    def __init__(self, app):
        super().__init__(app)
        _install_record_factory()

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        token = _request_id.set(request_id)
        try:
            response: Response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            _request_id.reset(token)


def get_request_id(request: Request) -> str:
    """
    Request id of the current request, or "no-request-id" outside the middleware.
    """
    return getattr(request.state, "request_id", "no-request-id")
