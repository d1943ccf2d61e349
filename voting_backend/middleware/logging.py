import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from voting_backend.lib.logger import configure_logger

logger = configure_logger(__name__)


def request_event_type(path: str) -> str:
    """Group request logs by the surface they hit."""
    if path.startswith("/api/chainhooks"):
        return "chainhook_webhook"
    if path.startswith("/api/voting"):
        return "voting_api"
    return "http_request"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of every request.

    Headers and bodies are never logged; webhook requests carry the shared
    secret in ``Authorization``.
    """

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "request": {"method": request.method, "path": request.url.path},
                "response": {
                    "status_code": response.status_code,
                    "process_time_ms": elapsed_ms,
                },
                "event_type": request_event_type(request.url.path),
            },
        )
        return response
