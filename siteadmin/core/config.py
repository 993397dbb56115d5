from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    PROJECT_NAME: str = "Site Admin API"
    DATABASE_URL: str = "sqlite:///./siteadmin.db"
    SECRET_KEY: str = "supersecretkey_change_me_in_production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7 # 1 week

    # Session transport
    SESSION_COOKIE_NAME: str = "siteadmin_session"
    SIGN_IN_PATH: str = "/sign-in"
    FORBIDDEN_PATH: str = "/403"

    # Bootstrap: first account to sign up gets the admin role
    FIRST_USER_IS_ADMIN: bool = True

    LOG_LEVEL: str = Field("INFO", validation_alias="LOG_LEVEL")
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
