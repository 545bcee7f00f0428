"""
Entity Metadata Toolkit - settings
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application Info
    APP_NAME: str = "Entity Metadata Toolkit"
    APP_VERSION: str = "0.3.0"
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    # Canonical text layout (must match across tools that hash entities)
    CANONICAL_INDENT: str = "    "
    CANONICAL_LINE_TERMINATOR: str = "\n"
    CANONICAL_KEY_SEPARATOR: str = " : "

    # Diff
    DIFF_ARRAY_ORDER_INSIGNIFICANT: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
