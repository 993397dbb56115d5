from typing import Optional
from datetime import datetime
from fastapi import APIRouter, Depends, Request, Response
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session
from pydantic import BaseModel, Field

from siteadmin.core.config import settings
from siteadmin.core.middleware import AuthContext, auth_middleware, optional_auth_middleware
from siteadmin.db.session import get_session
from siteadmin.models.user import UserRead
from siteadmin.services.auth import AuthService

router = APIRouter()


class Token(BaseModel):
    access_token: str
    token_type: str

class SignUpRequest(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=8)

class SignInRequest(BaseModel):
    email: str
    password: str

class SessionInfo(BaseModel):
    id: int
    expires_at: datetime
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

class SignInResponse(Token):
    user: UserRead

class SessionResponse(BaseModel):
    user: Optional[UserRead] = None
    session: Optional[SessionInfo] = None


def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    return AuthService(session)


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
    )


@router.post("/sign-up", response_model=UserRead, status_code=201)
def sign_up(data: SignUpRequest, service: AuthService = Depends(get_auth_service)):
    return service.sign_up(data.name, data.email, data.password)


@router.post("/sign-in", response_model=SignInResponse)
def sign_in(
    data: SignInRequest,
    request: Request,
    response: Response,
    service: AuthService = Depends(get_auth_service),
):
    user, _, token = service.sign_in(
        data.email,
        data.password,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    _set_session_cookie(response, token)
    return {"access_token": token, "token_type": "bearer", "user": user}


@router.post("/token", response_model=Token)
def login_for_access_token(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
    service: AuthService = Depends(get_auth_service),
):
    _, _, token = service.sign_in(
        form_data.username,
        form_data.password,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    return {"access_token": token, "token_type": "bearer"}


@router.post("/sign-out")
def sign_out(
    response: Response,
    ctx: AuthContext = Depends(auth_middleware),
    service: AuthService = Depends(get_auth_service),
):
    service.sign_out(ctx.session)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Signed out"}


@router.get("/session", response_model=SessionResponse)
def read_session(ctx: AuthContext = Depends(optional_auth_middleware)):
    """Current user and session, both null for anonymous callers."""
    if not ctx.is_authenticated:
        return SessionResponse()
    return SessionResponse(
        user=UserRead.model_validate(ctx.user, from_attributes=True),
        session=SessionInfo.model_validate(ctx.session, from_attributes=True),
    )
