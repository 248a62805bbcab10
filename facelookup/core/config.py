"""Configuration settings for the face lookup handlers."""
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    These settings are loaded from environment variables with the following precedence:
    1. Environment variables
    2. .env file
    3. Default values

    Attributes:
        TABLE_NAME: DynamoDB table holding person records
        COLLECTION_NAME: Rekognition collection faces are indexed into
        QUERY_MODE: "search" matches query images without touching the collection,
            "index" adds them to the collection first
        SCAN_FOLLOW_PAGES: Follow DynamoDB scan pagination when looking up records
    """
    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="",
    )

    # Core Settings
    PROJECT_NAME: str = "Face Lookup Service"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "production"

    # AWS Settings
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""
    AWS_REGION: str = "us-east-1"

    # Resources, checked when first used
    TABLE_NAME: str = ""
    COLLECTION_NAME: str = ""

    # Query pipeline settings
    QUERY_MODE: Literal["search", "index"] = "search"
    FACE_MATCH_THRESHOLD: float = Field(80.0, ge=0, le=100)
    SCAN_FOLLOW_PAGES: bool = True
    IMAGE_FETCH_TIMEOUT: Optional[float] = None

    # HTTP server settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    LOG_LEVEL: str = "INFO"


settings = Settings()
