"""
Category tree service.

Categories form a tree through ``parent_id`` (0 is the root). The table has no
foreign key on ``parent_id`` so the tree is maintained here: writes reject
unknown parents and cycles, reads never visit a node twice.
"""
import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Set
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, func

from siteadmin.models.category import (
    Category,
    CategoryCreate,
    CategoryRead,
    CategoryTreeItem,
    CategoryUpdate,
)
from siteadmin.models.post import Post

logger = logging.getLogger(__name__)

ROOT_ID = 0


def group_by_parent(categories: Iterable[CategoryRead]) -> Dict[int, List[CategoryRead]]:
    groups: Dict[int, List[CategoryRead]] = defaultdict(list)
    for category in categories:
        groups[category.parent_id].append(category)
    return groups


def collect_descendants(categories: Iterable[CategoryRead], parent_id: int) -> List[CategoryRead]:
    """
    Every category whose parent chain reaches ``parent_id``, nearest levels first.

    Starts from the direct children and keeps adding children of the nodes found
    so far until a pass finds nothing new. A node reached twice means the data
    holds a cycle; it is skipped and logged.
    """
    by_parent = group_by_parent(categories)
    seen: Set[int] = {parent_id}
    found: List[CategoryRead] = []
    frontier = [parent_id]
    while frontier:
        next_frontier = []
        for node_id in frontier:
            for child in by_parent.get(node_id, []):
                if child.id in seen:
                    logger.warning("Category cycle detected: %s reached again under %s", child.id, node_id)
                    continue
                seen.add(child.id)
                found.append(child)
                next_frontier.append(child.id)
        frontier = next_frontier
    return found


def build_tree(categories: Iterable[CategoryRead], root_id: int = ROOT_ID) -> List[CategoryTreeItem]:
    """Nest a flat category list under ``root_id`` via ``children``."""
    by_parent = group_by_parent(categories)
    seen: Set[int] = {root_id}

    def _build(parent_id: int) -> List[CategoryTreeItem]:
        items = []
        for child in by_parent.get(parent_id, []):
            if child.id in seen:
                continue
            seen.add(child.id)
            items.append(CategoryTreeItem(**child.model_dump(), children=_build(child.id)))
        return items

    return _build(root_id)


def _post_count():
    """Correlated count of posts filed under the outer query's category."""
    return (
        select(func.count(Post.id))
        .where(Post.category_id == Category.id)
        .correlate(Category)
        .scalar_subquery()
        .label("count")
    )


class CategoryService:
    def __init__(self, session: Session):
        self.session = session

    def list_categories(self, parent_id: Optional[int] = None) -> List[CategoryRead]:
        """
        All categories with their post ``count``, or only the transitive
        descendants of ``parent_id`` when one is given.
        """
        rows = self.session.exec(
            select(Category, _post_count()).order_by(Category.sort_order, Category.id)
        ).all()
        categories = [CategoryRead(**category.model_dump(), count=count) for category, count in rows]
        if parent_id is None:
            return categories
        return collect_descendants(categories, parent_id)

    def get_tree(self, root_id: int = ROOT_ID) -> List[CategoryTreeItem]:
        return build_tree(self.list_categories(), root_id)

    def get_category(self, category_id: int) -> Optional[CategoryRead]:
        row = self.session.exec(
            select(Category, _post_count()).where(Category.id == category_id)
        ).first()
        if not row:
            return None
        category, count = row
        return CategoryRead(**category.model_dump(), count=count)

    def _check_slug_available(self, slug: Optional[str], exclude_id: Optional[int] = None) -> None:
        if not slug:
            return
        existing = self.session.exec(select(Category).where(Category.slug == slug)).first()
        if existing and existing.id != exclude_id:
            raise HTTPException(status_code=400, detail="Slug already exists")

    def _check_parent(self, parent_id: int, category_id: Optional[int] = None) -> None:
        if parent_id == ROOT_ID:
            return
        if parent_id == category_id:
            raise HTTPException(status_code=400, detail="A category cannot be its own parent")

        parent = self.session.get(Category, parent_id)
        if not parent:
            raise HTTPException(status_code=400, detail="Parent category not found")
        if category_id is None:
            return

        # Walk up from the new parent; meeting the moved node means a cycle
        visited: Set[int] = set()
        current = parent
        while current and current.parent_id != ROOT_ID and current.id not in visited:
            visited.add(current.id)
            if current.parent_id == category_id:
                raise HTTPException(
                    status_code=400,
                    detail="A category cannot be moved under one of its descendants",
                )
            current = self.session.get(Category, current.parent_id)

    def _commit(self, category: Category) -> Category:
        self.session.add(category)
        try:
            self.session.commit()
        except IntegrityError:
            # Concurrent insert won the slug race
            self.session.rollback()
            raise HTTPException(status_code=400, detail="Slug already exists")
        self.session.refresh(category)
        return category

    def create_category(self, data: CategoryCreate) -> Category:
        name = data.name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Name is required")
        slug = data.slug.strip() if data.slug else None

        self._check_slug_available(slug)
        self._check_parent(data.parent_id)

        category = Category(
            name=name,
            slug=slug or None,
            description=data.description,
            parent_id=data.parent_id,
            sort_order=data.sort_order,
            is_active=data.is_active,
        )
        category = self._commit(category)
        logger.info("Created category %s (parent %s)", category.id, category.parent_id)
        return category

    def update_category(self, category_id: int, data: CategoryUpdate) -> Optional[Category]:
        category = self.session.get(Category, category_id)
        if not category:
            return None

        changes = data.model_dump(exclude_unset=True)
        if "name" in changes:
            name = (changes["name"] or "").strip()
            if not name:
                raise HTTPException(status_code=400, detail="Name is required")
            changes["name"] = name
        if "slug" in changes:
            changes["slug"] = changes["slug"].strip() if changes["slug"] else None
            self._check_slug_available(changes["slug"], exclude_id=category_id)
        if changes.get("parent_id") is not None:
            self._check_parent(changes["parent_id"], category_id=category_id)

        for field, value in changes.items():
            if value is None and field in ("parent_id", "sort_order", "is_active"):
                continue
            setattr(category, field, value)

        category.updated_at = datetime.utcnow()
        category = self._commit(category)
        logger.info("Updated category %s", category.id)
        return category

    def delete_category(self, category_id: int) -> bool:
        """
        Delete a single category. Children keep their ``parent_id``; posts that
        referenced it are detached (``category_id`` set to NULL).
        """
        category = self.session.get(Category, category_id)
        if not category:
            return False

        posts = self.session.exec(select(Post).where(Post.category_id == category_id)).all()
        for post in posts:
            post.category_id = None
            self.session.add(post)

        self.session.delete(category)
        self.session.commit()
        logger.info("Deleted category %s, detached %d posts", category_id, len(posts))
        return True
