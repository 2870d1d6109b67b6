from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', case_sensitive=True, extra='ignore')

    HOST: str = '0.0.0.0'
    PORT: int = 3000
    LOCAL_STORAGE_PATH: str = 'uploads'
    # when unset, download links are built from the inbound request's scheme and host
    PUBLIC_BASE_URL: Optional[str] = None
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB, applies to both upload paths
    CORS_ORIGINS: List[str] = ['*']
    LOG_LEVEL: str = 'INFO'


@lru_cache
def get_settings() -> Settings:
    return Settings()
