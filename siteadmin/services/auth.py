import logging
from datetime import datetime, timedelta
from typing import Optional, Tuple
from sqlmodel import Session, select, func
from fastapi import HTTPException, status

from siteadmin.core.config import settings
from siteadmin.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    new_session_id,
    verify_password,
)
from siteadmin.models.user import User, Role
from siteadmin.models.auth_session import UserSession

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def find_user_by_email(session: Session, email: str) -> Optional[User]:
    """Case-insensitive exact match; the address is never treated as a pattern."""
    return session.exec(
        select(User).where(func.lower(User.email) == normalize_email(email))
    ).first()


class AuthService:
    """Sign-up, sign-in, sign-out and session lookup."""

    def __init__(self, session: Session):
        self.session = session

    def get_user_by_email(self, email: str) -> Optional[User]:
        return find_user_by_email(self.session, email)

    def sign_up(self, name: str, email: str, password: str) -> User:
        if self.get_user_by_email(email):
            raise HTTPException(status_code=400, detail="Email already registered")

        role = Role.USER
        if settings.FIRST_USER_IS_ADMIN:
            existing = self.session.exec(select(func.count(User.id))).first() or 0
            if existing == 0:
                role = Role.ADMIN

        user = User(
            name=name,
            email=normalize_email(email),
            password_hash=get_password_hash(password),
            role=role.value,
        )
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        logger.info("Registered user %s with role %s", user.id, user.role)
        return user

    def authenticate_user(self, email: str, password: str) -> Tuple[Optional[User], Optional[str]]:
        user = self.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            return None, "Invalid email or password"
        if user.banned:
            return None, "This account has been banned"
        return user, None

    def sign_in(
        self,
        email: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Tuple[User, UserSession, str]:
        user, error_message = self.authenticate_user(email, password)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=error_message,
                headers={"WWW-Authenticate": "Bearer"},
            )

        self._purge_expired_sessions(user.id)

        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        user_session = UserSession(
            sid=new_session_id(),
            user_id=user.id,
            expires_at=datetime.utcnow() + expires_delta,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self.session.add(user_session)
        self.session.commit()
        self.session.refresh(user_session)

        token = create_access_token({"sub": str(user.id), "sid": user_session.sid}, expires_delta=expires_delta)
        return user, user_session, token

    def get_session(self, token: Optional[str]) -> Optional[Tuple[User, UserSession]]:
        """Resolve a session token to (user, session), or None when it is not valid."""
        if not token:
            return None
        payload = decode_access_token(token)
        if not payload or not payload.get("sid"):
            return None

        user_session = self.session.exec(
            select(UserSession).where(UserSession.sid == payload["sid"])
        ).first()
        if not user_session:
            return None
        if user_session.expires_at < datetime.utcnow():
            self.session.delete(user_session)
            self.session.commit()
            return None

        user = self.session.get(User, user_session.user_id)
        if not user or user.banned or str(user.id) != str(payload.get("sub")):
            return None
        return user, user_session

    def _purge_expired_sessions(self, user_id: int) -> None:
        expired = self.session.exec(
            select(UserSession).where(
                UserSession.user_id == user_id,
                UserSession.expires_at < datetime.utcnow(),
            )
        ).all()
        for user_session in expired:
            self.session.delete(user_session)
        if expired:
            logger.info("Removed %d expired sessions for user %s", len(expired), user_id)

    def sign_out(self, user_session: UserSession) -> None:
        self.session.delete(user_session)
        self.session.commit()

    def revoke_user_sessions(self, user_id: int) -> int:
        sessions = self.session.exec(select(UserSession).where(UserSession.user_id == user_id)).all()
        for user_session in sessions:
            self.session.delete(user_session)
        self.session.commit()
        return len(sessions)
