import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine
from sqlmodel.pool import StaticPool

import siteadmin.models  # noqa: F401
from siteadmin.core.security import get_password_hash
from siteadmin.db.session import get_session
from siteadmin.main import app
from siteadmin.models.user import User, Role
from siteadmin.services.auth import AuthService

PASSWORD = "correct-horse-battery"


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(autouse=True)
def override_session(session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
def client():
    """Anonymous client."""
    return TestClient(app)


def make_user(session: Session, email: str, role: Role = Role.USER, name: str = None) -> User:
    user = User(
        name=name or email.split("@")[0],
        email=email,
        password_hash=get_password_hash(PASSWORD),
        role=role.value,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def client_for(session: Session, user: User) -> TestClient:
    _, _, token = AuthService(session).sign_in(user.email, PASSWORD)
    return TestClient(app, headers={"Authorization": f"Bearer {token}"})


@pytest.fixture()
def admin_user(session):
    return make_user(session, "admin@example.com", Role.ADMIN, name="Admin")


@pytest.fixture()
def regular_user(session):
    return make_user(session, "writer@example.com", Role.USER, name="Writer")


@pytest.fixture()
def admin_client(session, admin_user):
    return client_for(session, admin_user)


@pytest.fixture()
def user_client(session, regular_user):
    return client_for(session, regular_user)
