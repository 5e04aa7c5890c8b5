"""
HRMS Backend — Settings Tests
==============================
"""

import pytest
from pydantic import ValidationError

from hrms.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("MONGO_URI", "MONGO_DB_NAME", "MONGO_COLLECTION", "BACKEND_PORT", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.mongo_uri == "mongodb://localhost:27017/fiber-hrms"
        assert settings.mongo_db_name == "fiber-hrms"
        assert settings.mongo_collection == "employees"
        assert settings.mongo_connect_timeout == 30
        assert settings.backend_port == 3000
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MONGO_URI", "mongodb://db.internal:27017")
        monkeypatch.setenv("BACKEND_PORT", "8080")
        monkeypatch.setenv("MONGO_CONNECT_TIMEOUT", "5")

        settings = Settings(_env_file=None)

        assert settings.mongo_uri == "mongodb://db.internal:27017"
        assert settings.backend_port == 8080
        assert settings.mongo_connect_timeout_ms == 5000

    def test_log_level_is_normalised(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError, match="Invalid log_level"):
            Settings(_env_file=None, log_level="verbose")

    def test_cors_origins_list(self):
        settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
