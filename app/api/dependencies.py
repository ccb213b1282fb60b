from typing import Optional
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.database import get_async_session
from app.core.security import CredentialVerifier
from app.schemas.session.session import Identity
from app.services.customer.customer_service import CustomerService
from app.services.customer.session_manager import CustomerSessionManager
from app.services.session.session_store import SessionStore

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store

def get_credential_verifier(request: Request) -> CredentialVerifier:
    return request.app.state.credential_verifier

def get_customer_session_manager(
    session: AsyncSession = Depends(get_async_session),
    store: SessionStore = Depends(get_session_store),
    verifier: CredentialVerifier = Depends(get_credential_verifier),
) -> CustomerSessionManager:
    return CustomerSessionManager(CustomerService(session), store, verifier)

def get_current_identity(request: Request) -> Optional[Identity]:
    """Identity resolved by AuthMiddleware, or None for anonymous requests"""
    return getattr(request.state, "me", None)
