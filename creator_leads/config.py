import logging
from typing import List, Literal
from pathlib import Path
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    ENV: Literal["development", "staging", "production"] = Field("development")
    PORT: int = Field(8000)
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    # Storage
    DATABASE_URL: str = Field(default="sqlite:///./creator_leads.db")
    DATABASE_ECHO: bool = Field(default=False)

    # Identity injected by the upstream auth layer
    ACCOUNT_HEADER: str = Field(default="X-Account-Id")

    # Templates
    SEED_DEFAULT_TEMPLATES: bool = Field(default=True)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(filename)s:%(lineno)d - %(levelname)s - %(message)s"
    )

    @field_validator("LOG_LEVEL", mode="after")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept level names in any case, reject unknown ones"""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

try:
    settings = Settings()
except ValidationError as e:
    logging.getLogger(__name__).error("Env validation failed:\n%s", e.json(indent=2))
    raise
