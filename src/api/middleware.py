"""
Request middleware

Correlation ids: every request carries an X-Correlation-ID (taken from the
client or generated) which is echoed in the response and attached to every
log record emitted while the request is handled.
"""

import logging
import time
import uuid
from contextvars import ContextVar
from typing import Optional

from fastapi import Request, Response

CORRELATION_ID_HEADER = "X-Correlation-ID"

correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

logger = logging.getLogger(__name__)


class CorrelationIdFilter(logging.Filter):
    """Adds record.correlation_id ("-" outside a request)"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get() or "-"
        return True


def get_correlation_id() -> Optional[str]:
    return correlation_id_var.get()


async def correlation_id_middleware(request: Request, call_next) -> Response:
    correlation_id = request.headers.get(CORRELATION_ID_HEADER) or uuid.uuid4().hex
    token = correlation_id_var.set(correlation_id)
    request.state.correlation_id = correlation_id
    try:
        response = await call_next(request)
        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
    finally:
        correlation_id_var.reset(token)


async def request_logging_middleware(request: Request, call_next) -> Response:
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "%s %s -> %d (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - started) * 1000,
    )
    return response
