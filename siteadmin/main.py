import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from siteadmin.core.config import settings
from siteadmin.core.errors import Forbidden, Unauthenticated, forbidden_handler, unauthenticated_handler
from siteadmin.db.session import create_db_and_tables
from siteadmin.routers import auth, categories, content, dashboard, jobs, media, options, users

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    logger.info("%s started", settings.PROJECT_NAME)
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        lifespan=lifespan,
        description="Admin API for posts, pages, products, jobs, media, categories, options and users",
    )

    app.add_exception_handler(Unauthenticated, unauthenticated_handler)
    app.add_exception_handler(Forbidden, forbidden_handler)

    @app.get("/")
    def read_root():
        return {"message": f"Welcome to {settings.PROJECT_NAME}. Visit /docs for Swagger UI."}

    app.include_router(auth.router, prefix="/api/v1/auth", tags=["auth"])
    app.include_router(dashboard.router, prefix="/api/v1/dashboard", tags=["dashboard"])
    app.include_router(categories.router, prefix="/api/v1/categories", tags=["categories"])
    app.include_router(content.posts_router, prefix="/api/v1/posts", tags=["posts"])
    app.include_router(content.pages_router, prefix="/api/v1/pages", tags=["pages"])
    app.include_router(content.products_router, prefix="/api/v1/products", tags=["products"])
    app.include_router(jobs.router, prefix="/api/v1/jobs", tags=["jobs"])
    app.include_router(media.router, prefix="/api/v1/media", tags=["media"])
    app.include_router(options.router, prefix="/api/v1/options", tags=["options"])
    app.include_router(users.router, prefix="/api/v1/users", tags=["users"])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
