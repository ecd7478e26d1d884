from functools import lru_cache
import os

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Service information
    SERVICE_NAME: str = "intent-chat-service"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    # FastAPI / uvicorn configuration
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 4000

    # Logging configuration
    LOG_LEVEL: str = "INFO"

    # Document store configuration
    STORE_BACKEND: str = "mongodb"
    MONGODB_URI: str = "mongodb://localhost:27017"
    DATABASE_NAME: str = "intent_chat"
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = 5000
    TRAINING_DATA_COLLECTION: str = "trainingData"

    # Classifier configuration
    LANGUAGE: str = "en"
    FORCE_NER: bool = True
    CLASSIFIER_THRESHOLD: float = 0.5

    @field_validator("STORE_BACKEND")
    @classmethod
    def validate_store_backend(cls, v: str) -> str:
        """Only the MongoDB and in-memory document stores are available."""
        v = v.lower()
        if v not in ("mongodb", "memory"):
            raise ValueError("STORE_BACKEND must be either 'mongodb' or 'memory'")
        return v

    @field_validator("MONGODB_URI")
    @classmethod
    def validate_mongodb_uri(cls, v: str) -> str:
        """Validate that the MongoDB URI is properly formatted."""
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError("MONGODB_URI must be a valid MongoDB connection string")
        return v

    @field_validator("CLASSIFIER_THRESHOLD")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("CLASSIFIER_THRESHOLD must be between 0 and 1")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return v


def load_env_file() -> None:
    """Load environment variables from .env file if it exists."""
    env_path = os.path.join(os.getcwd(), ".env")
    if os.path.exists(env_path):
        load_dotenv(dotenv_path=env_path)


@lru_cache
def get_settings() -> Settings:
    """
    Create and cache application settings.

    Returns:
        Settings: Application settings instance
    """
    load_env_file()
    return Settings()
