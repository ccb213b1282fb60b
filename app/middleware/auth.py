import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.exceptions import StoreUnavailableError
from app.schemas.session.session import Identity

logger = logging.getLogger(__name__)

class AuthMiddleware(BaseHTTPMiddleware):
    """Resolve the session cookie into ``request.state.me``.

    A missing, unknown or expired token leaves ``me`` as None; routes decide
    whether they need an identity. The session store is only read here.
    """

    def __init__(self, app, cookie_name: str = "authToken"):
        super().__init__(app)
        self.cookie_name = cookie_name

    async def dispatch(self, request: Request, call_next):
        request.state.me = None
        token = request.cookies.get(self.cookie_name)
        request.state.auth_token = token

        if token:
            store = request.app.state.session_store
            try:
                session = await store.get(token)
            except StoreUnavailableError as e:
                logger.error(f"Session lookup failed on {request.method} {request.url.path}")
                return JSONResponse(
                    status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                    content={"detail": e.detail},
                )

            if session is not None:
                request.state.me = Identity(id=session.customer_id)

        return await call_next(request)
