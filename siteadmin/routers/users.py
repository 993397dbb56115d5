from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session
from pydantic import BaseModel

from siteadmin.core.middleware import AuthContext, admin_middleware
from siteadmin.db.session import get_session
from siteadmin.models.user import Role, UserCreate, UserRead
from siteadmin.services.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, Page
from siteadmin.services.user import UserService

router = APIRouter()


class RoleUpdate(BaseModel):
    role: Role

class BanUpdate(BaseModel):
    banned: bool
    reason: Optional[str] = None


def get_user_service(session: Session = Depends(get_session)) -> UserService:
    return UserService(session)


def _forbid_self(ctx: AuthContext, user_id: int, action: str) -> None:
    if ctx.user.id == user_id:
        raise HTTPException(status_code=400, detail=f"You cannot {action} your own account")


@router.get("/", response_model=Page[UserRead])
def read_users(
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, alias="pageSize"),
    search: Optional[str] = None,
    sort: Literal["createdAt", "name", "email"] = "createdAt",
    order: Literal["asc", "desc"] = "desc",
    ctx: AuthContext = Depends(admin_middleware),
    service: UserService = Depends(get_user_service),
):
    """
    Retrieve users. Only for admins.
    """
    return service.list_users(page=page, page_size=page_size, search=search, sort=sort, order=order)


@router.get("/{user_id}", response_model=UserRead)
def read_user(
    user_id: int,
    ctx: AuthContext = Depends(admin_middleware),
    service: UserService = Depends(get_user_service),
):
    user = service.get_user_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("/", response_model=UserRead, status_code=201)
def create_user(
    data: UserCreate,
    ctx: AuthContext = Depends(admin_middleware),
    service: UserService = Depends(get_user_service),
):
    return service.create_user(data)


@router.put("/{user_id}/role", response_model=UserRead)
def update_user_role(
    user_id: int,
    data: RoleUpdate,
    ctx: AuthContext = Depends(admin_middleware),
    service: UserService = Depends(get_user_service),
):
    if data.role is not Role.ADMIN:
        _forbid_self(ctx, user_id, "demote")
    user = service.update_user_role(user_id, data.role)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/{user_id}/ban", response_model=UserRead)
def toggle_ban_user(
    user_id: int,
    data: BanUpdate,
    ctx: AuthContext = Depends(admin_middleware),
    service: UserService = Depends(get_user_service),
):
    if data.banned:
        _forbid_self(ctx, user_id, "ban")
    user = service.set_banned(user_id, data.banned, data.reason)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    ctx: AuthContext = Depends(admin_middleware),
    service: UserService = Depends(get_user_service),
):
    _forbid_self(ctx, user_id, "delete")
    if not service.delete_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return {"id": user_id}
