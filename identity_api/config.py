from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = Field(default=8080, validation_alias=AliasChoices("app_port", "port"))

    database_url: str = "postgresql+psycopg://app:app@db:5432/app"
    # create missing tables on startup
    db_auto_create: bool = True
    redis_url: str = "redis://redis:6379/0"

    jwt_secret: str = "dev-secret-change-me-before-deploying"
    jwt_issuer: str = "identity-api"
    jwt_audience: str = "identity-api"
    jwt_expires_minutes: int = 300

    bcrypt_rounds: int = 12

    # "creator": only the org creator may add members
    # "any": any authenticated user may (legacy behaviour)
    member_add_policy: Literal["creator", "any"] = "creator"

    log_level: str = "info"
    log_format: Literal["json", "console"] = "json"

    # rate limiting (redis)
    rate_limit_enabled: bool = True
    rate_limit_register_per_min: int = 20
    rate_limit_login_per_min: int = 30

settings = Settings()
