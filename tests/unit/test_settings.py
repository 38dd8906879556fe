"""Unit tests for settings validation and engine construction."""

import pytest
from pydantic import ValidationError
from sqlalchemy.pool import StaticPool

from businesshub.config.settings import Settings
from businesshub.core.exceptions import ConfigurationError
from businesshub.db.database import create_db_engine


class TestProductionValidation:
    """Production refuses insecure defaults."""

    def test_default_secret_rejected_in_production(self):
        with pytest.raises(ValidationError, match="jwt_secret_key"):
            Settings(app_env="production", debug=False, cors_allowed_origins=["https://example.com"])

    def test_wildcard_cors_rejected_in_production(self):
        with pytest.raises(ValidationError, match="cors_allowed_origins"):
            Settings(
                app_env="production",
                debug=False,
                jwt_secret_key="prod-secret",
                cors_allowed_origins=["*"],
            )

    def test_secure_production_settings_accepted(self):
        settings = Settings(
            app_env="production",
            debug=False,
            jwt_secret_key="prod-secret",
            cors_allowed_origins=["https://example.com"],
        )

        assert settings.is_production
        assert not settings.is_development

    def test_sqlite_detection(self):
        assert Settings(database_url="sqlite://").is_sqlite
        assert not Settings(database_url="postgresql://u:p@db/hub").is_sqlite


class TestEngineFactory:
    """Test database engine construction."""

    def test_empty_url_is_configuration_error(self, settings):
        with pytest.raises(ConfigurationError, match="database_url"):
            create_db_engine("", settings)

    def test_in_memory_engine_shares_one_connection(self, settings):
        engine = create_db_engine("sqlite://", settings)

        assert isinstance(engine.pool, StaticPool)
