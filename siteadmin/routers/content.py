"""
Routers for the three post kinds.

``build_content_router`` produces the same five actions for articles, pages and
products; each router is bound to its ``PostType`` so one kind's endpoints can
never touch another kind's rows.
"""
from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from siteadmin.core.middleware import AuthContext, auth_middleware
from siteadmin.db.session import get_session
from siteadmin.models.post import Post, PostCreate, PostListItem, PostType, PostUpdate
from siteadmin.services.content import ContentService, LABELS
from siteadmin.services.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, Page

StatusFilter = Literal["draft", "published", "archived", "all"]


def build_content_router(kind: PostType) -> APIRouter:
    router = APIRouter()
    not_found = f"{LABELS[kind]} not found"

    def get_content_service(session: Session = Depends(get_session)) -> ContentService:
        return ContentService(session, kind)

    @router.get("/", response_model=Page[PostListItem])
    def list_items(
        page: int = Query(1, ge=1),
        page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, alias="pageSize"),
        title: Optional[str] = None,
        status: StatusFilter = "all",
        ctx: AuthContext = Depends(auth_middleware),
        service: ContentService = Depends(get_content_service),
    ):
        return service.list_posts(page=page, page_size=page_size, title=title, status=status)

    @router.get("/{post_id}", response_model=Post)
    def get_item(
        post_id: int,
        ctx: AuthContext = Depends(auth_middleware),
        service: ContentService = Depends(get_content_service),
    ):
        post = service.get_post(post_id)
        if not post:
            raise HTTPException(status_code=404, detail=not_found)
        return post

    @router.post("/", response_model=Post, status_code=201)
    def create_item(
        data: PostCreate,
        ctx: AuthContext = Depends(auth_middleware),
        service: ContentService = Depends(get_content_service),
    ):
        return service.create_post(data, author=ctx.user)

    @router.put("/{post_id}", response_model=Post)
    def update_item(
        post_id: int,
        data: PostUpdate,
        ctx: AuthContext = Depends(auth_middleware),
        service: ContentService = Depends(get_content_service),
    ):
        post = service.update_post(post_id, data)
        if not post:
            raise HTTPException(status_code=404, detail=not_found)
        return post

    @router.delete("/{post_id}")
    def delete_item(
        post_id: int,
        ctx: AuthContext = Depends(auth_middleware),
        service: ContentService = Depends(get_content_service),
    ):
        if not service.delete_post(post_id):
            raise HTTPException(status_code=404, detail=not_found)
        return {"id": post_id}

    return router


posts_router = build_content_router(PostType.ARTICLE)
pages_router = build_content_router(PostType.PAGE)
products_router = build_content_router(PostType.PRODUCT)
