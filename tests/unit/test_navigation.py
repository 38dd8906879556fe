"""Unit tests for menu item ordering and social media links."""

import pytest

from businesshub.core.exceptions import ConflictError, ValidationFailedError
from businesshub.services import navigation


def _menu(db, name, position="header"):
    return navigation.create_menu_item(db, {"name": name, "url": f"/{name.lower()}", "position": position})


def _orders(db, position="header"):
    return [(item.name, item.order) for item in navigation.list_menu_items(db, position=position)]


class TestMenuOrdering:
    """Menu items keep a dense 1..N order within each position."""

    def test_new_items_append(self, db_session):
        _menu(db_session, "Home")
        _menu(db_session, "About")
        _menu(db_session, "Terms", position="footer")

        assert _orders(db_session) == [("Home", 1), ("About", 2)]
        assert _orders(db_session, "footer") == [("Terms", 1)]

    def test_delete_renumbers(self, db_session):
        home = _menu(db_session, "Home")
        _menu(db_session, "About")
        _menu(db_session, "Contact")

        navigation.delete_menu_item(db_session, home.id)

        assert _orders(db_session) == [("About", 1), ("Contact", 2)]

    def test_move_swaps_neighbours(self, db_session):
        _menu(db_session, "Home")
        about = _menu(db_session, "About")

        navigation.move_menu_item(db_session, about.id, "up")

        assert _orders(db_session) == [("About", 1), ("Home", 2)]

    def test_move_past_edge(self, db_session):
        home = _menu(db_session, "Home")

        with pytest.raises(ValidationFailedError):
            navigation.move_menu_item(db_session, home.id, "up")

    def test_reorder(self, db_session):
        home = _menu(db_session, "Home")
        about = _menu(db_session, "About")
        contact = _menu(db_session, "Contact")

        navigation.reorder_menu(db_session, "header", [contact.id, home.id, about.id])

        assert _orders(db_session) == [("Contact", 1), ("Home", 2), ("About", 3)]

    def test_reorder_requires_every_item(self, db_session):
        home = _menu(db_session, "Home")
        _menu(db_session, "About")

        with pytest.raises(ValidationFailedError):
            navigation.reorder_menu(db_session, "header", [home.id])

    def test_changing_position_appends(self, db_session):
        home = _menu(db_session, "Home")
        _menu(db_session, "About")
        _menu(db_session, "Terms", position="footer")

        navigation.update_menu_item(db_session, home.id, {"position": "footer"})

        assert _orders(db_session) == [("About", 1)]
        assert _orders(db_session, "footer") == [("Terms", 1), ("Home", 2)]

    def test_invalid_position(self, db_session):
        with pytest.raises(ValidationFailedError):
            _menu(db_session, "Home", position="sidebar")


class TestSocialLinks:
    """Test social media link rules."""

    @staticmethod
    def _link(db, platform="facebook", **extra):
        data = {
            "platform": platform,
            "url": f"https://{platform}.com/businesshub",
            "display_name": platform.title(),
            "icon_class": f"fab fa-{platform}",
        }
        data.update(extra)
        return navigation.create_social_link(db, data)

    def test_sort_order_appends_from_zero(self, db_session):
        first = self._link(db_session, "facebook")
        second = self._link(db_session, "instagram")

        assert (first.sort_order, second.sort_order) == (0, 1)

    def test_one_link_per_platform(self, db_session):
        self._link(db_session, "facebook")

        with pytest.raises(ConflictError):
            self._link(db_session, "facebook")

    def test_unsupported_platform(self, db_session):
        with pytest.raises(ValidationFailedError):
            self._link(db_session, "myspace")

    def test_invalid_url(self, db_session):
        with pytest.raises(ValidationFailedError):
            self._link(db_session, "twitter", url="not a url")

    def test_bulk_deactivate(self, db_session):
        link = self._link(db_session, "youtube")

        result = navigation.bulk_social_action(db_session, [link.id, 404], "deactivate")

        assert result.success == 1
        assert result.errors == [{"id": 404, "error": "Social media link not found"}]
        assert navigation.list_social_links(db_session, active_only=True) == []
