from typing import Optional
from pydantic import BaseModel

class CustomerCredentials(BaseModel):
    """Sign-up / sign-in body; blank fields are reported by the service as a 400"""
    email: Optional[str] = None
    password: Optional[str] = None

class CustomerResponse(BaseModel):
    """Public customer view, never carries the password hash or session tokens"""
    id: int
    email: str

    class Config:
        from_attributes = True

class SignInResult(BaseModel):
    customer: CustomerResponse
    token: str
