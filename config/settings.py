"""Application settings using Pydantic Settings."""

from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    mongodb_url: str = Field(
        "mongodb://localhost:27017/exercise_tracker",
        validation_alias=AliasChoices("db_uri", "mongodb_url"),
    )
    database_name: Optional[str] = None

    # Application Configuration
    app_name: str = "Exercise Tracker"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS Configuration
    cors_origins: List[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @property
    def db_name(self) -> str:
        """Database name, taken from the connection URL path when not set explicitly."""
        if self.database_name:
            return self.database_name
        path = self.mongodb_url.split("?")[0].split("//", 1)[-1]
        if "/" in path:
            name = path.split("/")[-1]
            if name:
                return name
        return "exercise_tracker"


@lru_cache
def get_settings() -> Settings:
    return Settings()
