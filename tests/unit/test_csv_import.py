"""Unit tests for CSV business import."""

import pytest

from businesshub.core.exceptions import ValidationFailedError
from businesshub.models import Business, BusinessStatus, Category
from businesshub.services import csv_import
from businesshub.services.csv_import import ImportOptions

VALID_CSV = (
    "Title,PlaceID,City,Email,Phone,Category,Images,Featured\n"
    "Corner Bakery,pl_1,Springfield,hello@corner.test,+1 555 123 4567,Bakeries,"
    "https://img.test/a.jpg|https://img.test/b.jpg,yes\n"
    "Night Owl Cafe,pl_2,Shelbyville,,,Cafes,,\n"
)


class TestParse:
    """Test header normalization and required columns."""

    def test_headers_lowercased_and_empty_cells_none(self):
        headers, rows = csv_import.parse_csv(VALID_CSV.encode("utf-8"))

        assert headers[:3] == ["title", "placeid", "city"]
        assert rows[1]["email"] is None
        assert len(rows) == 2

    def test_missing_required_column(self):
        with pytest.raises(ValidationFailedError, match="placeid"):
            csv_import.parse_csv(b"title,city\nBakery,Springfield\n")

    def test_empty_file(self):
        with pytest.raises(ValidationFailedError):
            csv_import.parse_csv(b"")

    def test_preview_limits_rows(self):
        content = "title,placeid\n" + "".join(f"Shop {i},p{i}\n" for i in range(8))

        result = csv_import.preview(content)

        assert result["total_rows"] == 8
        assert len(result["rows"]) == 5


class TestValidate:
    """Test per-row validation."""

    def test_valid_file(self):
        result = csv_import.validate_csv(VALID_CSV)

        assert result.success is True
        assert result.total_rows == 2
        assert result.errors == []

    def test_duplicate_placeid_in_file(self):
        result = csv_import.validate_csv("title,placeid\nA,p1\nB,p1\n")

        assert result.success is False
        assert result.errors[0].row == 3
        assert result.errors[0].field == "placeid"

    def test_invalid_email_is_error(self):
        result = csv_import.validate_csv("title,placeid,email\nA,p1,not-an-email\n")

        assert [(e.row, e.field) for e in result.errors] == [(2, "email")]

    def test_odd_phone_is_warning(self):
        result = csv_import.validate_csv("title,placeid,phone\nA,p1,call me\n")

        assert result.success is True
        assert [w.field for w in result.warnings] == ["phone"]

    def test_missing_title(self):
        result = csv_import.validate_csv("title,placeid\n,p1\n")

        assert result.errors[0].field == "title"


class TestImport:
    """Test writing imported businesses."""

    def test_creates_approved_businesses(self, db_session):
        result = csv_import.import_businesses(db_session, VALID_CSV)

        assert result.created == 2
        bakery = db_session.get(Business, "pl_1")
        assert bakery.status == BusinessStatus.APPROVED.value
        assert bakery.submitted_by == csv_import.IMPORT_SOURCE
        assert bakery.slug == "corner-bakery"
        assert bakery.featured is True
        assert bakery.images == ["https://img.test/a.jpg", "https://img.test/b.jpg"]
        assert bakery.category.name == "Bakeries"
        assert db_session.query(Category).count() == 2

    def test_validate_only_writes_nothing(self, db_session):
        result = csv_import.import_businesses(db_session, VALID_CSV, ImportOptions(validate_only=True))

        assert result.success is True
        assert result.created == 0
        assert db_session.query(Business).count() == 0

    def test_existing_placeid_is_error_by_default(self, db_session, make_business):
        make_business(placeid="pl_1")

        result = csv_import.import_businesses(db_session, VALID_CSV)

        assert result.created == 1
        assert result.success is False
        assert result.errors[0].message == "Business already exists"

    def test_skip_duplicates(self, db_session, make_business):
        make_business(placeid="pl_1")

        result = csv_import.import_businesses(db_session, VALID_CSV, ImportOptions(skip_duplicates=True))

        assert result.success is True
        assert result.duplicates_skipped == 1
        assert result.created == 1

    def test_update_duplicates(self, db_session, make_business):
        make_business(title="Old Name", placeid="pl_1")

        result = csv_import.import_businesses(db_session, VALID_CSV, ImportOptions(update_duplicates=True))

        assert result.updated == 1
        business = db_session.get(Business, "pl_1")
        db_session.refresh(business)
        assert business.title == "Corner Bakery"
        assert business.city == "Springfield"

    def test_invalid_rows_skipped(self, db_session):
        content = "title,placeid,website\nGood,p1,https://good.test\nBad,p2,ftp:/nope\n"

        result = csv_import.import_businesses(db_session, content)

        assert result.created == 1
        assert result.success is False
        assert db_session.get(Business, "p2") is None

    def test_category_names_with_same_slug_share_a_category(self, db_session):
        content = (
            "placeid,title,category\n"
            "p1,First Shop,Health & Beauty\n"
            "p2,Second Shop,Health-Beauty\n"
            "p3,Third Shop,Cafes\n"
        )

        result = csv_import.import_businesses(db_session, content)

        assert result.success is True
        assert result.created == 3
        first = db_session.get(Business, "p1")
        second = db_session.get(Business, "p2")
        assert first.category_id == second.category_id
        assert db_session.query(Category).count() == 2

    def test_category_name_without_ascii_gets_generated_slug(self, db_session):
        result = csv_import.import_businesses(db_session, "placeid,title,category\np1,Sushi Bar,日本\n")

        assert result.created == 1
        category = db_session.get(Business, "p1").category
        assert category.name == "日本"
        assert category.slug.startswith("category-")

    def test_unusable_category_fails_only_its_row(self, db_session):
        content = (
            "placeid,title,category\n"
            "p1,First Shop,<b></b>\n"
            "p2,Second Shop,Cafes\n"
        )

        result = csv_import.import_businesses(db_session, content)

        assert result.success is False
        assert [(e.row, e.field) for e in result.errors] == [(2, "category")]
        assert result.created == 1
        assert db_session.get(Business, "p1") is None
        assert db_session.get(Business, "p2") is not None
