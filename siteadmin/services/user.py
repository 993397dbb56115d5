import logging
from datetime import datetime
from typing import Optional
from fastapi import HTTPException
from sqlalchemy import asc, desc, or_
from sqlmodel import Session, select, func

from siteadmin.core.security import get_password_hash
from siteadmin.models.auth_session import UserSession
from siteadmin.models.job import Job
from siteadmin.models.media import Media
from siteadmin.models.post import Post
from siteadmin.models.user import User, Role, UserCreate
from siteadmin.services.auth import find_user_by_email, normalize_email
from siteadmin.services.pagination import paginate

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "createdAt": User.created_at,
    "name": User.name,
    "email": User.email,
}


class UserService:
    def __init__(self, session: Session):
        self.session = session

    def list_users(
        self,
        page: int = 1,
        page_size: int = 10,
        search: Optional[str] = None,
        sort: str = "createdAt",
        order: str = "desc",
    ) -> dict:
        conditions = []
        if search:
            conditions.append(or_(User.name.like(f"%{search}%"), User.email.like(f"%{search}%")))

        total = self.session.exec(select(func.count(User.id)).where(*conditions)).one()
        direction = asc if order == "asc" else desc
        query = (
            select(User)
            .where(*conditions)
            .order_by(direction(SORT_COLUMNS[sort]), direction(User.id))
        )
        result = paginate(self.session, query, page, page_size, total)
        return {"data": result["rows"], "pagination": result["pagination"]}

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def create_user(self, data: UserCreate) -> User:
        if find_user_by_email(self.session, data.email):
            raise HTTPException(status_code=400, detail="Email already registered")

        user = User(
            name=data.name,
            email=normalize_email(data.email),
            password_hash=get_password_hash(data.password),
            role=data.role.value,
        )
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        logger.info("Admin created user %s", user.id)
        return user

    def update_user_role(self, user_id: int, role: Role) -> Optional[User]:
        user = self.get_user_by_id(user_id)
        if not user:
            return None
        user.role = role.value
        user.updated_at = datetime.utcnow()
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        logger.info("User %s role set to %s", user_id, role.value)
        return user

    def set_banned(self, user_id: int, banned: bool, reason: Optional[str] = None) -> Optional[User]:
        user = self.get_user_by_id(user_id)
        if not user:
            return None
        user.banned = banned
        user.ban_reason = reason if banned else None
        user.updated_at = datetime.utcnow()
        self.session.add(user)

        if banned:
            # Banned users lose every open session
            for user_session in self.session.exec(select(UserSession).where(UserSession.user_id == user_id)).all():
                self.session.delete(user_session)

        self.session.commit()
        self.session.refresh(user)
        logger.info("User %s banned=%s", user_id, banned)
        return user

    def delete_user(self, user_id: int) -> bool:
        user = self.get_user_by_id(user_id)
        if not user:
            return False
        # Authored content survives with no author
        for post in self.session.exec(select(Post).where(Post.author_id == user_id)).all():
            post.author_id = None
            self.session.add(post)
        for job in self.session.exec(select(Job).where(Job.author_id == user_id)).all():
            job.author_id = None
            self.session.add(job)
        for media in self.session.exec(select(Media).where(Media.uploaded_by == user_id)).all():
            media.uploaded_by = None
            self.session.add(media)
        for user_session in self.session.exec(select(UserSession).where(UserSession.user_id == user_id)).all():
            self.session.delete(user_session)
        self.session.delete(user)
        self.session.commit()
        logger.info("Deleted user %s", user_id)
        return True
