"""Request ID middleware for log correlation.

Each request gets an ID, taken from the incoming ``X-Request-ID`` header
when it is usable or generated otherwise. The ID is stored in a context
variable so log records emitted anywhere during the request (including
deep inside an extraction) can carry it, and echoed on the response.
"""

from __future__ import annotations

import contextvars
import logging
import uuid
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

if TYPE_CHECKING:
    from starlette.middleware.base import RequestResponseEndpoint

logger = logging.getLogger(__name__)

# Maximum length for request ID header values
MAX_REQUEST_ID_LENGTH = 128

REQUEST_ID_HEADER = "X-Request-ID"

# Empty string means no request is in flight in this context
request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "request_id", default=""
)


def get_request_id() -> str:
    """Get the current request ID, or empty string outside a request."""
    return request_id_var.get()


def _sanitize_request_id(header_value: str | None) -> str:
    """Sanitize an incoming request ID header value.

    - None or empty: generate a new UUID v4
    - Characters outside ASCII 33-126: generate a new UUID v4
    - Longer than 128 characters: keep the first 128

    Parameters
    ----------
    header_value : str | None
        The raw X-Request-ID header value.

    Returns
    -------
    str
        A usable request ID.
    """
    if not header_value:
        return str(uuid.uuid4())

    if not all(33 <= ord(c) <= 126 for c in header_value):
        logger.warning(
            "X-Request-ID contains non-ASCII-printable characters, generating new ID"
        )
        return str(uuid.uuid4())

    return header_value[:MAX_REQUEST_ID_LENGTH]


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Propagate a request ID through the request and onto the response.

    Examples
    --------
    >>> from fastapi import FastAPI
    >>> from clipstats.api.middleware import RequestIdMiddleware
    >>> app = FastAPI()
    >>> app.add_middleware(RequestIdMiddleware)
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = _sanitize_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(request_id)
        try:
            request.state.request_id = request_id
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_var.reset(token)


class RequestIdFilter(logging.Filter):
    """Logging filter that adds ``request_id`` to every record.

    Lets formatters use ``%(request_id)s``; "-" outside a request.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True
