from typing import Optional
from datetime import datetime
from sqlmodel import Field, SQLModel

class MediaBase(SQLModel):
    filename: str
    url: str
    mimetype: str = Field(index=True)
    size: int  # in bytes
    width: Optional[int] = None
    height: Optional[int] = None

class Media(MediaBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    uploaded_by: Optional[int] = Field(default=None, foreign_key="user.id", ondelete="SET NULL", index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)

class MediaCreate(SQLModel):
    filename: str = Field(min_length=1)
    url: str = Field(min_length=1)
    mimetype: str = Field(min_length=1)
    size: int = Field(ge=0)
    width: Optional[int] = Field(default=None, ge=0)
    height: Optional[int] = Field(default=None, ge=0)
