"""
Articles, pages and products.

All three live in the ``post`` table; a ``ContentService`` is bound to one
``PostType`` and never reads or writes rows of another type.
"""
import logging
from datetime import datetime
from typing import List, Optional
from fastapi import HTTPException
from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, func

from siteadmin.models.category import Category
from siteadmin.models.post import Post, PostCreate, PostListItem, PostStatus, PostType, PostUpdate
from siteadmin.models.user import User
from siteadmin.services.pagination import paginate

logger = logging.getLogger(__name__)

STATUS_ALL = "all"

LABELS = {
    PostType.ARTICLE: "Post",
    PostType.PAGE: "Page",
    PostType.PRODUCT: "Product",
}


class ContentService:
    def __init__(self, session: Session, kind: PostType):
        self.session = session
        self.kind = kind

    @property
    def label(self) -> str:
        return LABELS[self.kind]

    def list_posts(
        self,
        page: int = 1,
        page_size: int = 10,
        title: Optional[str] = None,
        status: str = STATUS_ALL,
    ) -> dict:
        conditions = [Post.type == self.kind]
        if title:
            conditions.append(Post.title.like(f"%{title}%"))
        if status != STATUS_ALL:
            conditions.append(Post.status == PostStatus(status))

        total = self.session.exec(select(func.count(Post.id)).where(*conditions)).one()

        # Pages are listed by last edit, everything else by creation
        newest = Post.updated_at if self.kind == PostType.PAGE else Post.created_at
        query = (
            select(Post, User.name, Category.name)
            .join(User, Post.author_id == User.id, isouter=True)
            .join(Category, Post.category_id == Category.id, isouter=True)
            .where(*conditions)
            .order_by(desc(newest), desc(Post.id))
        )
        result = paginate(self.session, query, page, page_size, total)

        data: List[PostListItem] = []
        for post, author_name, category_name in result["rows"]:
            data.append(PostListItem(
                **post.model_dump(include=set(PostListItem.model_fields) - {"author_name", "category_name"}),
                author_name=author_name,
                category_name=category_name,
            ))
        return {"data": data, "pagination": result["pagination"]}

    def get_post(self, post_id: int) -> Optional[Post]:
        return self.session.exec(
            select(Post).where(Post.id == post_id, Post.type == self.kind)
        ).first()

    def _check_slug_available(self, slug: str, exclude_id: Optional[int] = None) -> None:
        # The slug column is unique across every post type
        existing = self.session.exec(select(Post).where(Post.slug == slug)).first()
        if existing and existing.id != exclude_id:
            raise HTTPException(status_code=400, detail="Slug already exists")

    def _check_category(self, category_id: Optional[int]) -> None:
        if category_id is not None and not self.session.get(Category, category_id):
            raise HTTPException(status_code=400, detail="Category not found")

    def _commit(self, post: Post) -> Post:
        self.session.add(post)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise HTTPException(status_code=400, detail="Slug already exists")
        self.session.refresh(post)
        return post

    def create_post(self, data: PostCreate, author: Optional[User] = None) -> Post:
        self._check_slug_available(data.slug)
        self._check_category(data.category_id)

        now = datetime.utcnow()
        post = Post(
            **data.model_dump(),
            type=self.kind,
            author_id=author.id if author else None,
            published_at=now if data.status == PostStatus.PUBLISHED else None,
            created_at=now,
            updated_at=now,
        )
        post = self._commit(post)
        logger.info("Created %s %s (%s)", self.kind.value, post.id, post.status.value)
        return post

    def update_post(self, post_id: int, data: PostUpdate) -> Optional[Post]:
        post = self.get_post(post_id)
        if not post:
            return None

        changes = data.model_dump(exclude_unset=True)
        for field in ("title", "slug", "status"):
            if field in changes and changes[field] is None:
                del changes[field]
        if "slug" in changes:
            self._check_slug_available(changes["slug"], exclude_id=post.id)
        if "category_id" in changes:
            self._check_category(changes["category_id"])

        for field, value in changes.items():
            setattr(post, field, value)

        if "status" in changes:
            if post.status == PostStatus.PUBLISHED:
                post.published_at = post.published_at or datetime.utcnow()
            else:
                post.published_at = None

        post.updated_at = datetime.utcnow()
        post = self._commit(post)
        logger.info("Updated %s %s", self.kind.value, post.id)
        return post

    def delete_post(self, post_id: int) -> bool:
        post = self.get_post(post_id)
        if not post:
            return False
        self.session.delete(post)
        self.session.commit()
        logger.info("Deleted %s %s", self.kind.value, post_id)
        return True
