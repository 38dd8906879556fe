"""Unit tests for slug, sanitizing and format helpers."""

import pytest

from businesshub.core.text import (
    is_valid_email,
    is_valid_phone,
    is_valid_slug,
    is_valid_url,
    sanitize_text,
    slugify,
)


class TestSlugify:
    """Test slug generation."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Joe's Pizza & Pasta", "joe-s-pizza-pasta"),
            ("  Leading and trailing  ", "leading-and-trailing"),
            ("Café 42!", "caf-42"),
            ("---", ""),
        ],
    )
    def test_slugify(self, value, expected):
        assert slugify(value) == expected

    def test_slugify_output_is_valid_slug(self):
        assert is_valid_slug(slugify("Best Burgers In Town"))

    def test_rejects_uppercase_slug(self):
        assert is_valid_slug("Best-Burgers") is False
        assert is_valid_slug("") is False


class TestSanitizeText:
    """Test input sanitizing."""

    def test_strips_tags(self):
        assert sanitize_text("<b>Hello</b> <script>x</script>world") == "Hello xworld"

    def test_strips_javascript_scheme(self):
        assert sanitize_text("javascript:alert(1)") == "alert(1)"

    def test_strips_event_handlers(self):
        assert "onclick" not in sanitize_text('click onclick="steal()" here')

    def test_none_passthrough(self):
        assert sanitize_text(None) is None


class TestFormatChecks:
    """Test email, URL and phone validation."""

    def test_email(self):
        assert is_valid_email("jane@example.com")
        assert not is_valid_email("not-an-email")
        assert not is_valid_email(None)

    def test_url(self):
        assert is_valid_url("https://facebook.com/acme")
        assert not is_valid_url("ftp://example.com")
        assert not is_valid_url("facebook.com")

    def test_phone(self):
        assert is_valid_phone("+1 (555) 123-4567")
        assert not is_valid_phone("call me")
