"""
Domain errors raised by the planning, approval and throttling services.

Routers let these propagate; main.py maps them to JSON responses.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class TaskeeError(Exception):
    status_code = 400
    default_detail = "Request failed"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidWindow(TaskeeError):
    status_code = 400
    default_detail = "Start time must be before end time"


class Forbidden(TaskeeError):
    status_code = 403
    default_detail = "Manager access required"


class NotFound(TaskeeError):
    status_code = 404
    default_detail = "Not found"


class RateLimited(TaskeeError):
    status_code = 429

    def __init__(self, retry_after: int, detail: str | None = None):
        self.retry_after = retry_after
        super().__init__(detail or f"Too many requests. Try again in {retry_after} seconds.")


async def taskee_error_handler(request: Request, exc: TaskeeError) -> JSONResponse:
    logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.detail)
    headers = None
    content = {"detail": exc.detail}
    if isinstance(exc, RateLimited):
        headers = {"Retry-After": str(exc.retry_after)}
        content["retry_after"] = exc.retry_after
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)
