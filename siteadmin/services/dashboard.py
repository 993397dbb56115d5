from typing import List, Dict, Any
from pydantic import BaseModel
from sqlalchemy import desc
from sqlmodel import Session, select, func

from siteadmin.models.category import Category
from siteadmin.models.job import Job
from siteadmin.models.post import Post, PostType
from siteadmin.models.user import User

RECENT_LIMIT = 5


class DashboardCounts(BaseModel):
    users: int
    posts: int
    pages: int
    products: int
    jobs: int
    categories: int


class DashboardStats(BaseModel):
    counts: DashboardCounts
    recentPosts: List[Dict[str, Any]]
    recentJobs: List[Dict[str, Any]]


class DashboardService:
    """Read-only overview numbers. Each count is its own query."""

    def __init__(self, session: Session):
        self.session = session

    def _count_posts(self, kind: PostType) -> int:
        return self.session.exec(select(func.count(Post.id)).where(Post.type == kind)).first() or 0

    def get_stats(self) -> DashboardStats:
        counts = DashboardCounts(
            users=self.session.exec(select(func.count(User.id))).first() or 0,
            posts=self._count_posts(PostType.ARTICLE),
            pages=self._count_posts(PostType.PAGE),
            products=self._count_posts(PostType.PRODUCT),
            jobs=self.session.exec(select(func.count(Job.id))).first() or 0,
            categories=self.session.exec(select(func.count(Category.id))).first() or 0,
        )

        recent_posts = self.session.exec(
            select(Post, User.name)
            .join(User, Post.author_id == User.id, isouter=True)
            .order_by(desc(Post.updated_at), desc(Post.id))
            .limit(RECENT_LIMIT)
        ).all()

        recent_posts_data = []
        for post, author_name in recent_posts:
            recent_posts_data.append({
                "id": post.id,
                "title": post.title,
                "type": post.type.value,
                "status": post.status.value,
                "updated_at": post.updated_at.isoformat(),
                "author_name": author_name,
            })

        recent_jobs = self.session.exec(
            select(Job).order_by(desc(Job.created_at), desc(Job.id)).limit(RECENT_LIMIT)
        ).all()

        recent_jobs_data = [
            {
                "id": job.id,
                "title": job.title,
                "status": job.status.value,
                "created_at": job.created_at.isoformat(),
            }
            for job in recent_jobs
        ]

        return DashboardStats(counts=counts, recentPosts=recent_posts_data, recentJobs=recent_jobs_data)
