import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from video_api.core.trace import set_trace_id

alog = logging.getLogger("access")

TRACE_HEADER = "X-Request-Id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a trace id per request and emit one access record."""

    async def dispatch(self, request: Request, call_next):
        trace_id = set_trace_id(request.headers.get(TRACE_HEADER))
        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            response.headers[TRACE_HEADER] = trace_id
            return response
        finally:
            dur_ms = int((time.perf_counter() - start) * 1000)
            alog.info(
                "access",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "query": str(request.url.query)
                    if request.url.query else "",
                    "status": status,
                    "latency_ms": dur_ms,
                    "client_ip": request.client.host
                    if request.client else None,
                },
            )
