"""Unit tests for the setup script's default data."""

import importlib.util
from pathlib import Path
from unittest.mock import patch

import pytest

from businesshub.models import Category, ContentString, Service, SiteSetting

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "setup_database.py"


@pytest.fixture
def setup_script():
    spec = importlib.util.spec_from_file_location("setup_database", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestSeed:
    """Test seeding defaults."""

    def test_seeds_defaults_once(self, db_session, settings, setup_script):
        with patch.object(setup_script, "get_settings", return_value=settings):
            setup_script.seed(db_session)
            setup_script.seed(db_session)

        assert db_session.query(Category).count() == len(setup_script.DEFAULT_CATEGORIES)
        assert db_session.query(SiteSetting).count() == len(setup_script.DEFAULT_SITE_SETTINGS)
        assert db_session.query(ContentString).count() == len(setup_script.DEFAULT_CONTENT_STRINGS)
        assert db_session.query(Service).count() == len(setup_script.DEFAULT_SERVICES)

    def test_content_strings_have_spanish(self, db_session, settings, setup_script):
        with patch.object(setup_script, "get_settings", return_value=settings):
            setup_script.seed(db_session)

        home = db_session.query(ContentString).filter(ContentString.string_key == "header.navigation.home").one()
        assert home.translate("es") == "Inicio"
        assert home.translate("fr") == "Home"
