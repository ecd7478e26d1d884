"""
Tests for application settings.
"""
import pytest
from pydantic import ValidationError

from chatbot.config import Settings


class TestSettings:
    """Test defaults and validation of settings."""

    def test_defaults(self, monkeypatch):
        for name in ("PORT", "STORE_BACKEND", "LANGUAGE", "FORCE_NER", "TRAINING_DATA_COLLECTION"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.PORT == 4000
        assert settings.STORE_BACKEND == "mongodb"
        assert settings.LANGUAGE == "en"
        assert settings.FORCE_NER is True
        assert settings.TRAINING_DATA_COLLECTION == "trainingData"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("STORE_BACKEND", "MEMORY")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.PORT == 8080
        assert settings.STORE_BACKEND == "memory"
        assert settings.LOG_LEVEL == "DEBUG"

    @pytest.mark.parametrize("field, value", [
        ("STORE_BACKEND", "redis"),
        ("MONGODB_URI", "postgres://localhost"),
        ("CLASSIFIER_THRESHOLD", 1.5),
        ("LOG_LEVEL", "LOUD"),
    ])
    def test_rejects_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})
