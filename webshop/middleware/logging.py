import time
import uuid

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from webshop.core.config import settings
from webshop.core.metrics import HTTP_REQUEST_DURATION_SECONDS, HTTP_REQUESTS_TOTAL

REQUEST_ID_HEADER = "X-Request-ID"


def _route_path(request: Request) -> str:
    # templated route path, e.g. /orders/{order_id}
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


def _observe(method: str, path: str, status_code: int, duration: float) -> None:
    HTTP_REQUESTS_TOTAL.labels(
        service=settings.SERVICE_NAME,
        method=method,
        path=path,
        status_code=str(status_code),
    ).inc()
    HTTP_REQUEST_DURATION_SECONDS.labels(
        service=settings.SERVICE_NAME,
        method=method,
        path=path,
    ).observe(duration)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Tags every log line of a request with its id and records one access entry."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        started = time.perf_counter()

        with logger.contextualize(request_id=request_id):
            response = await call_next(request)
            duration = time.perf_counter() - started

            logger.bind(
                method=request.method,
                request_path=request.url.path,
                status_code=response.status_code,
                process_time_ms=round(duration * 1000, 2),
            ).info("http_request_processed")
            _observe(request.method, _route_path(request), response.status_code, duration)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
