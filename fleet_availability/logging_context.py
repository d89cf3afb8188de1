"""Request context for log records emitted while serving a vendor action.

Each vendor action runs inside a request scope that binds a fresh request
id and the acting vendor. RequestContextFilter copies both onto every log
record, so a refused blackout can be followed from the action facade
through the engine and into the stores.

Usage:
    from fleet_availability.logging_context import get_request_logger, request_scope

    logger = get_request_logger(__name__)
    with request_scope("VENDOR-A") as request_id:
        logger.info("Checking availability")  # record.vendor_id == "VENDOR-A"
"""

import functools
import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

NO_REQUEST_ID = "NO_REQUEST_ID"
NO_VENDOR = "-"

LOG_FORMAT = (
    "%(asctime)s [%(request_id)s vendor=%(vendor_id)s] "
    "[%(name)s] %(levelname)s: %(message)s"
)

_request_id: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST_ID)
_vendor_id: ContextVar[str] = ContextVar("vendor_id", default=NO_VENDOR)


def _generate_request_id() -> str:
    return f"REQ-{uuid.uuid4().hex[:8]}"


def set_request_id(request_id: str) -> None:
    _request_id.set(request_id)


def get_request_id() -> str:
    return _request_id.get()


def get_vendor_id() -> str:
    return _vendor_id.get()


@contextmanager
def request_scope(
    vendor_id: Optional[str] = None, request_id: Optional[str] = None
) -> Iterator[str]:
    """Bind a request id and vendor for one action.

    Both values revert when the scope exits, so consecutive actions in the
    same task never share an id.
    """
    request_id = request_id or _generate_request_id()
    request_token = _request_id.set(request_id)
    vendor_token = _vendor_id.set(vendor_id or NO_VENDOR)
    try:
        yield request_id
    finally:
        _vendor_id.reset(vendor_token)
        _request_id.reset(request_token)


def vendor_request(func):
    """Run an async ``method(self, vendor_id, ...)`` inside a request scope."""

    @functools.wraps(func)
    async def wrapper(self, vendor_id: str, *args, **kwargs):
        with request_scope(vendor_id):
            return await func(self, vendor_id, *args, **kwargs)

    return wrapper


class RequestContextFilter(logging.Filter):
    """Stamps request_id and vendor_id onto every record it sees."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get()  # type: ignore[attr-defined]
        record.vendor_id = _vendor_id.get()  # type: ignore[attr-defined]
        return True


def install_request_filter(handler: logging.Handler) -> None:
    """Attach the filter to a handler so records from any logger get stamped."""
    if not any(isinstance(f, RequestContextFilter) for f in handler.filters):
        handler.addFilter(RequestContextFilter())


def get_request_logger(name: str) -> logging.Logger:
    """Return a module logger carrying the request context filter."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, RequestContextFilter) for f in logger.filters):
        logger.addFilter(RequestContextFilter())
    return logger
