from typing import Optional
from datetime import datetime
from enum import Enum
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import Text

class OptionGroup(str, Enum):
    GENERAL = "general"
    SEO = "seo"
    AI = "ai"
    SYSTEM = "system"

class Option(SQLModel, table=True):
    """Key-value site configuration."""
    id: Optional[int] = Field(default=None, primary_key=True)
    key: str = Field(unique=True, index=True)
    value: Optional[str] = Field(default=None, sa_column=Column(Text))
    group: OptionGroup = Field(default=OptionGroup.GENERAL)
    type: str = Field(default="string")  # "string" or "json"
    is_public: bool = Field(default=False)
    description: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
