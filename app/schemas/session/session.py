from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field

class SessionData(BaseModel):
    """Payload kept in the session store under the opaque token"""
    model_config = ConfigDict(populate_by_name=True)

    customer_id: str = Field(alias="customerId")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="createdAt",
    )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str) -> "SessionData":
        return cls.model_validate_json(raw)

class Identity(BaseModel):
    """Request-scoped identity attached by the authentication middleware"""
    id: str
