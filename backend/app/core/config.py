from typing import Literal

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from nikkedex.constants import CHARACTER_DETAIL_URL, CHARACTER_LIST_URL, PRYDWEN_BASE_URL


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "nikkedex"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite:///./nikkedex.db"

    CHARACTER_LIST_URL: str = CHARACTER_LIST_URL
    CHARACTER_DETAIL_URL: str = CHARACTER_DETAIL_URL
    PRYDWEN_BASE_URL: str = PRYDWEN_BASE_URL
    HTTP_TIMEOUT: float = 10.0
    SYNC_CONCURRENCY: int = 5

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


settings = Settings()  # type: ignore
