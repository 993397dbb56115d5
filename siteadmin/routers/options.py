from typing import Dict, List, Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from pydantic import BaseModel

from siteadmin.core.middleware import (
    AuthContext,
    admin_middleware,
    optional_auth_middleware,
    parse_role,
    role_satisfies,
)
from siteadmin.db.session import get_session
from siteadmin.models.option import Option, OptionGroup
from siteadmin.models.user import Role
from siteadmin.services.option import OptionService

router = APIRouter()


class OptionUpdate(BaseModel):
    key: str
    value: str


def get_option_service(session: Session = Depends(get_session)) -> OptionService:
    return OptionService(session)


@router.get("/", response_model=Dict[str, str])
def get_options(
    keys: Optional[List[str]] = Query(None),
    ctx: AuthContext = Depends(optional_auth_middleware),
    service: OptionService = Depends(get_option_service),
):
    """Option values by key. Private options are only returned to admins."""
    is_admin = ctx.is_authenticated and role_satisfies(parse_role(ctx.user.role), Role.ADMIN)
    return service.get_options(keys, include_private=is_admin)


@router.get("/all", response_model=List[Option])
def list_options(
    group: Optional[OptionGroup] = None,
    ctx: AuthContext = Depends(admin_middleware),
    service: OptionService = Depends(get_option_service),
):
    return service.list_options(group)


@router.put("/", response_model=Option)
def update_option(
    data: OptionUpdate,
    ctx: AuthContext = Depends(admin_middleware),
    service: OptionService = Depends(get_option_service),
):
    return service.update_option(data.key, data.value)


@router.put("/bulk")
def update_options(
    values: Dict[str, str],
    ctx: AuthContext = Depends(admin_middleware),
    service: OptionService = Depends(get_option_service),
):
    updated = service.update_options(values)
    return {"success": True, "updated": updated}
