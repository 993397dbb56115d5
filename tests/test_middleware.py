import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from siteadmin.core.errors import Forbidden, Unauthenticated, forbidden_handler, unauthenticated_handler
from siteadmin.core.middleware import (
    AuthContext,
    admin_middleware,
    auth_middleware,
    optional_auth_middleware,
    parse_role,
    role_middleware,
    role_satisfies,
)
from siteadmin.db.session import get_session
from siteadmin.models.user import Role
from siteadmin.services.auth import AuthService
from conftest import PASSWORD, make_user


@pytest.fixture()
def gated_app(session):
    gated = FastAPI()
    gated.dependency_overrides[get_session] = lambda: session
    gated.add_exception_handler(Unauthenticated, unauthenticated_handler)
    gated.add_exception_handler(Forbidden, forbidden_handler)

    @gated.get("/open")
    def open_action(ctx: AuthContext = Depends(optional_auth_middleware)):
        return {"user": ctx.user.email if ctx.user else None}

    @gated.get("/authed")
    def authed_action(ctx: AuthContext = Depends(auth_middleware)):
        return {"user": ctx.user.email, "session": ctx.session.sid}

    @gated.get("/users-only")
    def user_action(ctx: AuthContext = Depends(role_middleware(Role.USER))):
        return {"user": ctx.user.email}

    @gated.get("/admin")
    def admin_action(ctx: AuthContext = Depends(admin_middleware)):
        return {"user": ctx.user.email}

    return gated


def bearer(session, user):
    _, _, token = AuthService(session).sign_in(user.email, PASSWORD)
    return {"Authorization": f"Bearer {token}"}


def test_anonymous_caller(gated_app):
    client = TestClient(gated_app)
    assert client.get("/open").json() == {"user": None}
    r = client.get("/authed")
    assert r.status_code == 401
    assert r.json()["detail"] == "Not authenticated"
    assert client.get("/admin").status_code == 401


def test_admin_gate_rejects_user_role(gated_app, session, regular_user):
    client = TestClient(gated_app, headers=bearer(session, regular_user))
    assert client.get("/authed").status_code == 200
    assert client.get("/users-only").status_code == 200
    r = client.get("/admin")
    assert r.status_code == 403
    assert r.json()["detail"] == "Insufficient permissions"


def test_admin_gate_accepts_admin_role(gated_app, session, admin_user):
    client = TestClient(gated_app, headers=bearer(session, admin_user))
    assert client.get("/admin").json() == {"user": admin_user.email}
    assert client.get("/open").json() == {"user": admin_user.email}
    # Roles are matched exactly
    assert client.get("/users-only").status_code == 403


def test_context_carries_session(gated_app, session, regular_user):
    client = TestClient(gated_app, headers=bearer(session, regular_user))
    body = client.get("/authed").json()
    assert body["user"] == regular_user.email
    assert body["session"]


def test_unknown_stored_role_is_denied(gated_app, session):
    odd = make_user(session, "odd@example.com")
    odd.role = "Admin "
    session.add(odd)
    session.commit()

    client = TestClient(gated_app, headers=bearer(session, odd))
    assert client.get("/admin").status_code == 403
    assert client.get("/users-only").status_code == 403
    assert client.get("/authed").status_code == 200


def test_invalid_token_treated_as_anonymous(gated_app):
    client = TestClient(gated_app, headers={"Authorization": "Bearer not-a-token"})
    assert client.get("/open").json() == {"user": None}
    assert client.get("/authed").status_code == 401


def test_browser_redirects(gated_app, session, regular_user):
    html = {"accept": "text/html"}
    client = TestClient(gated_app)
    r = client.get("/authed", headers=html, follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/sign-in?redirect=%2Fauthed"

    client = TestClient(gated_app, headers=bearer(session, regular_user))
    r = client.get("/admin", headers=html, follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/403"


def test_role_helpers():
    assert parse_role("admin") is Role.ADMIN
    assert parse_role("user") is Role.USER
    assert parse_role("root") is None
    assert parse_role(None) is None

    assert role_satisfies(Role.ADMIN, Role.ADMIN)
    assert not role_satisfies(Role.USER, Role.ADMIN)
    assert not role_satisfies(None, Role.ADMIN)
    assert role_satisfies(Role.USER, Role.USER)
    assert not role_satisfies(None, Role.USER)
