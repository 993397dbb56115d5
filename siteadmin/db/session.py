import logging
from typing import Iterator
from sqlalchemy.engine import make_url
from sqlmodel import SQLModel, Session, create_engine

from siteadmin.core.config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str):
    # SQLite connections are shared across the threadpool that runs sync routes
    is_sqlite = make_url(database_url).get_backend_name() == "sqlite"
    connect_args = {"check_same_thread": False} if is_sqlite else {}
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=not is_sqlite)


engine = build_engine(settings.DATABASE_URL)


def get_session() -> Iterator[Session]:
    """One session per request."""
    with Session(engine) as session:
        yield session


def create_db_and_tables() -> None:
    import siteadmin.models  # noqa: F401  registers every table on the metadata
    SQLModel.metadata.create_all(engine)
    logger.info("Database tables ready on %s", engine.url.render_as_string(hide_password=True))
