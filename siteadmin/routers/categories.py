from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from siteadmin.core.middleware import AuthContext, auth_middleware
from siteadmin.db.session import get_session
from siteadmin.models.category import CategoryCreate, CategoryRead, CategoryTreeItem, CategoryUpdate
from siteadmin.services.category import CategoryService, ROOT_ID

router = APIRouter()


def get_category_service(session: Session = Depends(get_session)) -> CategoryService:
    return CategoryService(session)


@router.get("/", response_model=List[CategoryRead])
def list_categories(
    parent_id: Optional[int] = Query(None, ge=0, alias="parentId"),
    service: CategoryService = Depends(get_category_service),
):
    """
    All categories with post counts, or every descendant of ``parentId``.
    """
    return service.list_categories(parent_id)


@router.get("/tree", response_model=List[CategoryTreeItem])
def get_category_tree(
    root_id: int = Query(ROOT_ID, ge=0, alias="rootId"),
    service: CategoryService = Depends(get_category_service),
):
    return service.get_tree(root_id)


@router.get("/{category_id}", response_model=CategoryRead)
def get_category(category_id: int, service: CategoryService = Depends(get_category_service)):
    category = service.get_category(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.post("/", response_model=CategoryRead, status_code=201)
def create_category(
    data: CategoryCreate,
    ctx: AuthContext = Depends(auth_middleware),
    service: CategoryService = Depends(get_category_service),
):
    return service.create_category(data)


@router.put("/{category_id}", response_model=CategoryRead)
def update_category(
    category_id: int,
    data: CategoryUpdate,
    ctx: AuthContext = Depends(auth_middleware),
    service: CategoryService = Depends(get_category_service),
):
    category = service.update_category(category_id, data)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.delete("/{category_id}")
def delete_category(
    category_id: int,
    ctx: AuthContext = Depends(auth_middleware),
    service: CategoryService = Depends(get_category_service),
):
    """Delete one category. Its children and posts are left in place."""
    if not service.delete_category(category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    return {"id": category_id}
