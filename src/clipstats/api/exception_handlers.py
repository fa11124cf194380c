"""Centralized exception handlers for the clipstats API.

Extraction failures reach the client as ``{error, details, kind}`` JSON
with a status chosen by failure kind; anything unexpected becomes a 500
with the same shape so no traceback leaks to the caller.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from clipstats.api.schemas.responses import ERROR_STATUS_CODES, ErrorResponse
from clipstats.exceptions import ExtractionError

logger = logging.getLogger(__name__)

MAX_DETAIL_LENGTH = 4096
"""Maximum allowed length for detail messages before truncation."""

TRUNCATION_SUFFIX = "... (truncated)"


def _truncate_detail(detail: str) -> str:
    """Truncate detail message if it exceeds maximum length."""
    if len(detail) <= MAX_DETAIL_LENGTH:
        return detail
    truncate_at = MAX_DETAIL_LENGTH - len(TRUNCATION_SUFFIX)
    return detail[:truncate_at] + TRUNCATION_SUFFIX


async def extraction_error_handler(
    request: Request, exc: ExtractionError
) -> JSONResponse:
    """Render an ExtractionError as an ErrorResponse.

    Parameters
    ----------
    request : Request
        The incoming FastAPI request.
    exc : ExtractionError
        Carries the pipeline's ExtractionFailure.

    Returns
    -------
    JSONResponse
        400 for invalid input, 500 for every other failure kind.
    """
    body = ErrorResponse.from_failure(exc.failure)
    body.details = _truncate_detail(body.details)
    status = ERROR_STATUS_CODES.get(exc.failure.kind, 500)
    return JSONResponse(content=body.model_dump(), status_code=status)


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected exceptions."""
    logger.error(
        "Unhandled error on %s: %s", request.url.path, exc, exc_info=exc
    )
    body = ErrorResponse(
        error="Could not extract metrics automatically",
        details=_truncate_detail(f"{type(exc).__name__}: {exc}"),
    )
    return JSONResponse(content=body.model_dump(), status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Examples
    --------
    >>> from fastapi import FastAPI
    >>> from clipstats.api.exception_handlers import register_exception_handlers
    >>> app = FastAPI()
    >>> register_exception_handlers(app)
    """
    app.add_exception_handler(ExtractionError, extraction_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_error_handler)
