from typing import Iterable
from fastapi import HTTPException, status

class BaseAppException(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)

class ValidationError(BaseAppException):
    def __init__(self, detail: str = "Validation error"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

    @classmethod
    def missing(cls, fields: Iterable[str]) -> "ValidationError":
        return cls(f"Missing required fields: {', '.join(fields)}")

class NotFoundError(BaseAppException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

class AlreadyExistsError(BaseAppException):
    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class InvalidCredentialsError(BaseAppException):
    def __init__(self, detail: str = "Email and password do not match"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)

class UnauthorizedError(BaseAppException):
    def __init__(self, detail: str = "Unauthorized request"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)

class StoreUnavailableError(BaseAppException):
    def __init__(self, detail: str = "Session store unavailable"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)


def missing_required(**fields) -> None:
    """Raise ValidationError naming every field that is None or blank"""
    missing = [
        name for name, value in fields.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise ValidationError.missing(missing)
