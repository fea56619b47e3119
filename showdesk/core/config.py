
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Showdesk API"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Tokens are issued by the identity provider; we only verify them
    JWT_SECRET: str = "changeme"
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str | None = None
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "showdesk"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: str = ""

    # Object storage (served by the app under MEDIA_URL)
    MEDIA_ROOT: str = "media"
    MEDIA_URL: str = "/media"
    STORAGE_BUCKET: str = "show-assets"
    PUBLIC_BASE_URL: str = "http://localhost:8000"
    MAX_UPLOAD_BYTES: int = 20 * 1024 * 1024

    # LLM gateway
    AI_GATEWAY_URL: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    AI_GATEWAY_API_KEY: str = ""
    AI_DEFAULT_MODEL: str = "google/gemini-3-flash-preview"
    AI_ALT_TEXT_MODEL: str = "google/gemini-2.5-flash"
    AI_DEFAULT_MAX_WORDS: int = 150
    AI_TIMEOUT_SECONDS: int = 60

    THEATER_NAME: str = "Stadstheater Zoetermeer"

    # "standard" = 10 criteria, "extended" adds metaDescription and cropSlider
    CHECKLIST_VARIANT: Literal["standard", "extended"] = "standard"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    def assemble_db_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

settings = Settings()
settings.DATABASE_URL = settings.assemble_db_url()
