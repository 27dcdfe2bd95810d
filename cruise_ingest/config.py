from pydantic_settings import BaseSettings
import os


class Settings(BaseSettings):
    LOG_LEVEL: str = "INFO"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024
    EXPORT_FILE_PREFIX: str = "easyseas"

    class Config:
        env_prefix = "CRUISE_INGEST_"
        env_file = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), ".env")


settings = Settings()
