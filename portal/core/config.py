from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    PROJECT_NAME: str = "Student Portal"
    VERSION: str = "1.0.0"

    # Backend API
    API_BASE_URL: str = "http://localhost:8000/api"
    REQUEST_TIMEOUT: float = 30.0  # seconds

    # Routine cache
    CACHE_ENABLED: bool = True
    CACHE_TTL: int = 5 * 60  # 5 minutes

    # Local draft storage
    DRAFT_STORAGE_DIR: str = ".portal/drafts"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env")

settings = Settings()
