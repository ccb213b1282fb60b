from typing import Optional
from fastapi import APIRouter, Depends, Request, Response, status

from app.api.dependencies import get_current_identity, get_customer_session_manager, get_settings
from app.core.config import Settings
from app.schemas.customer.customer import CustomerCredentials, CustomerResponse
from app.schemas.session.session import Identity
from app.services.customer.session_manager import CustomerSessionManager

router = APIRouter()

@router.post("/sign-up", response_model=CustomerResponse)
async def sign_up(
    credentials: CustomerCredentials,
    manager: CustomerSessionManager = Depends(get_customer_session_manager),
):
    """Create a customer account"""
    return await manager.sign_up(credentials.email, credentials.password)

@router.post("/sign-in", response_model=CustomerResponse)
async def sign_in(
    credentials: CustomerCredentials,
    response: Response,
    manager: CustomerSessionManager = Depends(get_customer_session_manager),
    settings: Settings = Depends(get_settings),
):
    """Start a session and hand its token back as an HttpOnly cookie"""
    result = await manager.sign_in(credentials.email, credentials.password)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=result.token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.COOKIE_SAMESITE,
        domain=settings.COOKIE_DOMAIN,
    )
    return result.customer

@router.get("/authenticate", response_model=Optional[CustomerResponse])
async def authenticate(
    me: Optional[Identity] = Depends(get_current_identity),
    manager: CustomerSessionManager = Depends(get_customer_session_manager),
):
    """Current customer, or null when the request carries no valid session"""
    if me is None:
        return None
    return await manager.resolve_identity(me.id)

@router.get("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    request: Request,
    me: Optional[Identity] = Depends(get_current_identity),
    manager: CustomerSessionManager = Depends(get_customer_session_manager),
    settings: Settings = Depends(get_settings),
):
    """End the current session; succeeds whatever state the token is in"""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    await manager.sign_out(me.id if me else None, token)

    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        domain=settings.COOKIE_DOMAIN,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.COOKIE_SAMESITE,
    )
    return response
