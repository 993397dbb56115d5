from typing import Optional, Any, Dict
from datetime import datetime
from enum import Enum
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import JSON, Text

class PostType(str, Enum):
    ARTICLE = "article"
    PAGE = "page"
    PRODUCT = "product"

class PostStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"

class Post(SQLModel, table=True):
    """Articles, pages and products share this table, split by `type`."""
    id: Optional[int] = Field(default=None, primary_key=True)
    type: PostType = Field(default=PostType.ARTICLE, index=True)

    # Content
    title: str = Field(index=True)
    slug: str = Field(unique=True, index=True)  # URL-friendly title
    content: Optional[str] = Field(default=None, sa_column=Column(Text))
    excerpt: Optional[str] = None
    status: PostStatus = Field(default=PostStatus.DRAFT, index=True)

    # Relations
    category_id: Optional[int] = Field(default=None, foreign_key="category.id", ondelete="SET NULL", index=True)
    author_id: Optional[int] = Field(default=None, foreign_key="user.id", ondelete="SET NULL", index=True)

    # Images
    cover_image: Optional[str] = None
    thumbnail: Optional[str] = None

    # Free-form attributes (price, SKU, ...); `metadata` is reserved on SQLModel classes
    meta: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column("metadata", JSON))

    published_at: Optional[datetime] = Field(default=None, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

class PostCreate(SQLModel):
    title: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    content: Optional[str] = None
    excerpt: Optional[str] = None
    status: PostStatus = PostStatus.DRAFT
    category_id: Optional[int] = None
    cover_image: Optional[str] = None
    thumbnail: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None

class PostUpdate(SQLModel):
    title: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = None
    excerpt: Optional[str] = None
    status: Optional[PostStatus] = None
    category_id: Optional[int] = None
    cover_image: Optional[str] = None
    thumbnail: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None

class PostListItem(SQLModel):
    id: int
    type: PostType
    title: str
    slug: str
    status: PostStatus
    thumbnail: Optional[str] = None
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    author_name: Optional[str] = None
    category_name: Optional[str] = None
