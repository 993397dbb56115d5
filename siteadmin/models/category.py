from typing import Optional, List
from datetime import datetime
from sqlmodel import Field, SQLModel

class CategoryBase(SQLModel):
    name: str
    slug: Optional[str] = Field(default=None, unique=True, index=True)
    description: Optional[str] = None

    # 0 marks a root node; no foreign key so deleting a parent leaves children as they are
    parent_id: int = Field(default=0, index=True)
    sort_order: int = Field(default=0, index=True)
    is_active: bool = Field(default=True, index=True)

class Category(CategoryBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

class CategoryCreate(SQLModel):
    name: str = Field(min_length=1)
    slug: Optional[str] = None
    description: Optional[str] = None
    parent_id: int = Field(default=0, ge=0)
    sort_order: int = 0
    is_active: bool = True

class CategoryUpdate(SQLModel):
    name: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = None
    description: Optional[str] = None
    parent_id: Optional[int] = Field(default=None, ge=0)
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None

class CategoryRead(CategoryBase):
    id: int
    created_at: datetime
    updated_at: datetime
    count: int = 0  # Posts referencing this category

class CategoryTreeItem(CategoryRead):
    children: List["CategoryTreeItem"] = []

CategoryTreeItem.model_rebuild()
