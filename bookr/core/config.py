from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "BookR API"
    VERSION: str = "v1"
    DESCRIPTION: str = "A book recommendation directory"

    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # --- JWT ---
    JWT_SECRET: str = "change-me-in-production-0123456789abcdef"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    TOKEN_ISSUER: str = "bookr"
    TOKEN_AUDIENCE: str = "bookr:users"

    # --- Store ---
    SEED_FIXTURES: bool = True
    INVITE_BASE_URL: str = "https://bookr.example.com/invite"

    # --- Cover recognition (Gemini) ---
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TIMEOUT_SECONDS: float = 30.0

    # --- HTTP ---
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"
    ALLOWED_HOSTS: str = "*"
    MAX_REQUEST_SIZE: int = 10 * 1024 * 1024

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
