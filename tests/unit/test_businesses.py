"""Unit tests for business listing queries and admin operations."""

import pytest

from businesshub.core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
)
from businesshub.models import Business, BusinessStatus
from businesshub.services import businesses as business_service


class TestSlugs:
    """Test slug generation."""

    def test_slug_from_title(self, db_session):
        assert business_service.unique_slug(db_session, "Night Owl Cafe!") == "night-owl-cafe"

    def test_slug_suffixed_when_taken(self, db_session, make_business):
        make_business(slug="corner-bakery")
        make_business(slug="corner-bakery-2")

        assert business_service.unique_slug(db_session, "Corner Bakery") == "corner-bakery-3"

    def test_create_assigns_unique_slug(self, db_session, owner_user):
        first = business_service.create_business(db_session, {"title": "Corner Bakery"}, owner=owner_user)
        second = business_service.create_business(db_session, {"title": "Corner Bakery"}, owner=owner_user)

        assert first.slug == "corner-bakery"
        assert second.slug == "corner-bakery-2"
        assert first.status == BusinessStatus.PENDING.value
        assert first.submitted_by == owner_user.id

    def test_admin_slug_clash(self, db_session, make_business, admin_user):
        make_business(slug="taken")
        business = make_business()

        with pytest.raises(ConflictError):
            business_service.update_business(db_session, business.placeid, {"slug": "taken"}, admin_user)


class TestListing:
    """Public listings only show approved businesses."""

    def test_filters(self, db_session, make_business, make_category):
        bakeries = make_category("Bakeries")
        make_business(title="Corner Bakery", category=bakeries, city="Springfield")
        make_business(title="Hidden Bakery", category=bakeries, status=BusinessStatus.PENDING.value)
        make_business(title="Night Owl Cafe", city="Shelbyville", featured=True)

        items, total = business_service.list_businesses(db_session, category_slug="bakeries")
        assert [b.title for b in items] == ["Corner Bakery"]
        assert total == 1

        items, _ = business_service.list_businesses(db_session, city="springfield")
        assert [b.title for b in items] == ["Corner Bakery"]

        items, _ = business_service.list_businesses(db_session, featured=True)
        assert [b.title for b in items] == ["Night Owl Cafe"]

        items, total = business_service.list_businesses(db_session, category_slug="nope")
        assert (items, total) == ([], 0)

    def test_search_matches_category_name(self, db_session, make_business, make_category):
        make_business(title="Corner Shop", category=make_category("Bakeries"))

        results = business_service.search_businesses(db_session, "baker")

        assert [b.title for b in results] == ["Corner Shop"]

    def test_search_requires_query(self, db_session):
        with pytest.raises(ValidationFailedError):
            business_service.search_businesses(db_session, "  ")

    def test_pending_slug_not_public(self, db_session, make_business):
        make_business(slug="secret", status=BusinessStatus.PENDING.value)

        with pytest.raises(NotFoundError):
            business_service.get_by_slug(db_session, "secret")


class TestOwnership:
    """Test who may edit a listing."""

    def test_non_owner_cannot_update(self, db_session, make_business, owner_user, regular_user):
        business = make_business(owner=owner_user)

        with pytest.raises(PermissionDeniedError):
            business_service.update_business(db_session, business.placeid, {"title": "Mine"}, regular_user)

    def test_owner_cannot_set_admin_fields(self, db_session, make_business, owner_user):
        business = make_business(owner=owner_user)

        updated = business_service.update_business(
            db_session, business.placeid, {"featured": True, "phone": "555-0100"}, owner_user
        )

        assert updated.featured is False
        assert updated.phone == "555-0100"


class TestBulkDelete:
    """Test bulk deletion messages and limits."""

    def test_all_deleted(self, db_session, make_business):
        ids = [make_business().placeid, make_business().placeid]

        result = business_service.bulk_delete(db_session, ids)

        assert result["deleted_count"] == 2
        assert result["message"] == "Successfully deleted all 2 business(es)"
        assert db_session.query(Business).count() == 0

    def test_partial(self, db_session, make_business):
        keep = make_business()
        gone = make_business()

        result = business_service.bulk_delete(db_session, [gone.placeid, "missing"])

        assert result["deleted_count"] == 1
        assert result["total_requested"] == 2
        assert result["errors"] == ["Business missing not found"]
        assert result["message"].startswith("Partially successful")
        assert db_session.get(Business, keep.placeid) is not None

    def test_none_deleted(self, db_session):
        result = business_service.bulk_delete(db_session, ["a", "b"])

        assert result["deleted_count"] == 0
        assert result["message"].startswith("Failed to delete any businesses")

    @pytest.mark.parametrize("ids", [[], ["ok", ""], [f"id{i}" for i in range(101)]])
    def test_invalid_requests(self, db_session, ids):
        with pytest.raises(ValidationFailedError):
            business_service.bulk_delete(db_session, ids)


class TestPhotosAndStats:
    """Test photo removal and dashboard counters."""

    def test_remove_photos(self, db_session, make_business):
        business = make_business(images=["https://img.test/a.jpg", "https://img.test/b.jpg"])

        updated = business_service.remove_photos(db_session, business.placeid, ["https://img.test/a.jpg"])

        assert updated.images == ["https://img.test/b.jpg"]

    def test_remove_unknown_photo(self, db_session, make_business):
        business = make_business(images=[])

        with pytest.raises(NotFoundError):
            business_service.remove_photos(db_session, business.placeid, ["https://img.test/x.jpg"])

    def test_dashboard_stats(self, db_session, make_business, admin_user):
        make_business()
        make_business(status=BusinessStatus.PENDING.value, featured=True)

        stats = business_service.dashboard_stats(db_session)

        assert stats["total_businesses"] == 2
        assert stats["pending_businesses"] == 1
        assert stats["featured_businesses"] == 1
        assert stats["total_users"] == 1
