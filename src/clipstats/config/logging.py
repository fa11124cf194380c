"""
Logging setup shared by the CLI and the API server.
"""

from __future__ import annotations

import logging

from clipstats.api.middleware.request_id import RequestIdFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
REQUEST_LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
)
_HANDLER_NAME = "clipstats"


def configure_logging(level: str = "INFO", request_ids: bool = False) -> logging.Handler:
    """
    Attach a stderr handler to the ``clipstats`` logger.

    Calling this again replaces the handler installed by a previous call
    rather than adding a second one.

    Parameters
    ----------
    level : str
        Log level name, e.g. ``"INFO"`` or ``"DEBUG"``.
    request_ids : bool
        Include the current HTTP request ID in every record.

    Returns
    -------
    logging.Handler
        The installed handler.
    """
    app_logger = logging.getLogger("clipstats")
    for existing in list(app_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            app_logger.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter(
            REQUEST_LOG_FORMAT if request_ids else LOG_FORMAT,
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    if request_ids:
        handler.addFilter(RequestIdFilter())

    app_logger.addHandler(handler)
    app_logger.setLevel(level.upper())
    return handler
