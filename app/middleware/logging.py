import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("access")

class LoggingMiddleware(BaseHTTPMiddleware):
    """One access-log line per request, written once the response is ready"""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        client = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                f"{request.method} {request.url.path} - Client: {client} - "
                f"failed after {time.perf_counter() - started:.4f}s"
            )
            raise

        elapsed = time.perf_counter() - started

        # Filled in by AuthMiddleware further down the stack
        me = getattr(request.state, "me", None)
        logger.info(
            f"{request.method} {request.url.path} - Status: {response.status_code} - "
            f"Client: {client} - Customer: {me.id if me else '-'} - Time: {elapsed:.4f}s"
        )

        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        return response
