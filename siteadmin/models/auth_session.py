from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel

class UserSession(SQLModel, table=True):
    """Server-side record behind every issued session token."""
    __tablename__ = "user_session"

    id: Optional[int] = Field(default=None, primary_key=True)
    sid: str = Field(unique=True, index=True)  # Token id carried in the JWT
    user_id: int = Field(foreign_key="user.id", index=True)
    expires_at: datetime
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
