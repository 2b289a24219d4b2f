from functools import lru_cache
import os
from typing import Annotated, Any, Literal
import warnings

from pydantic import BeforeValidator, ValidationInfo, computed_field, field_validator
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_list(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    if isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Translation Catalog API"
    DEBUG: bool = False

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "changethis"
    POSTGRES_DB: str = "app"

    # Startup wait in scripts/backend_pre_start.py
    DB_CONNECT_ATTEMPTS: int = 60 * 5
    DB_CONNECT_WAIT_SECONDS: float = 1.0

    @field_validator("POSTGRES_PASSWORD", mode="after")
    @classmethod
    def validate_postgres_password(cls, v: str, info: ValidationInfo) -> str:
        """Validate that POSTGRES_PASSWORD is changed in production."""
        env = (
            info.data.get("ENVIRONMENT")
            if info.data
            else os.getenv("ENVIRONMENT", "local")
        )
        if v == "changethis" and env == "production":
            raise ValueError(
                "POSTGRES_PASSWORD must be changed from default value in production. "
                "Set a strong, unique password via the POSTGRES_PASSWORD environment variable."
            )
        if v == "changethis" and env != "local":
            warnings.warn(
                "POSTGRES_PASSWORD is set to default value 'changethis'. "
                "Consider using a strong, unique password.",
                UserWarning,
                stacklevel=2,
            )
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> MultiHostUrl:
        """Build PostgreSQL connection URI for SQLAlchemy."""
        return MultiHostUrl.build(
            scheme="postgresql+psycopg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_SERVER,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        )

    # Seed data applied by scripts/initial_data.py
    SEED_LOCALE_CODES: Annotated[list[str] | str, BeforeValidator(parse_list)] = [
        "en",
        "fr",
        "es",
    ]
    SEED_TAG_NAMES: Annotated[list[str] | str, BeforeValidator(parse_list)] = [
        "web",
        "mobile",
        "desktop",
    ]


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
