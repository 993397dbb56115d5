from typing import Optional
from datetime import datetime
from enum import Enum
from sqlmodel import Field, SQLModel

class Role(str, Enum):
    ADMIN = "admin"  # Full dashboard access
    USER = "user"  # Regular account

class UserBase(SQLModel):
    name: str
    email: str = Field(unique=True, index=True)
    image: Optional[str] = None

class User(UserBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    password_hash: str

    # Stored as plain text so an unknown value can be detected and denied
    role: str = Field(default=Role.USER.value, index=True)

    # Moderation
    banned: bool = Field(default=False)
    ban_reason: Optional[str] = None

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

class UserRead(UserBase):
    id: int
    role: str
    banned: bool
    ban_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime

class UserCreate(SQLModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=8)
    role: Role = Role.USER
