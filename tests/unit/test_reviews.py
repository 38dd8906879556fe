"""Unit tests for review submission, moderation and rating aggregation."""

import pytest

from businesshub.core.exceptions import NotFoundError, ValidationFailedError
from businesshub.models import ModerationStatus
from businesshub.services import reviews as review_service


@pytest.fixture
def business(make_business):
    return make_business(title="Rating Bakery")


def _submit(db, business, rating, **kwargs):
    kwargs.setdefault("author_name", "Ann")
    kwargs.setdefault("author_email", "ann@example.com")
    return review_service.create_review(db, business.placeid, rating, "Lovely bread.", **kwargs)


class TestCreateReview:
    """Test review submission rules."""

    def test_new_review_is_pending(self, db_session, business):
        review = _submit(db_session, business, 5)

        assert review.status == ModerationStatus.PENDING.value
        assert review.author_email == "ann@example.com"

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_rating_out_of_range(self, db_session, business, rating):
        with pytest.raises(ValidationFailedError):
            _submit(db_session, business, rating)

    def test_anonymous_review_needs_valid_email(self, db_session, business):
        with pytest.raises(ValidationFailedError, match="email"):
            _submit(db_session, business, 4, author_email="nope")

    def test_content_too_long(self, db_session, business):
        with pytest.raises(ValidationFailedError):
            review_service.create_review(
                db_session, business.placeid, 4, "x" * 2001,
                author_name="Ann", author_email="ann@example.com",
            )

    def test_logged_in_user_fills_author(self, db_session, business, regular_user):
        review = review_service.create_review(
            db_session, business.placeid, 3, "Fine.", user=regular_user
        )

        assert review.user_id == regular_user.id
        assert review.author_email == regular_user.email

    def test_unknown_business(self, db_session):
        with pytest.raises(NotFoundError):
            review_service.create_review(
                db_session, "missing", 4, "Hi", author_name="Ann", author_email="ann@example.com"
            )


class TestRatingAggregation:
    """average_rating and total_reviews only count approved reviews."""

    def test_pending_reviews_do_not_count(self, db_session, business):
        _submit(db_session, business, 5)
        db_session.refresh(business)

        assert business.total_reviews == 0
        assert business.average_rating == 0

    def test_approve_and_reject_recalculate(self, db_session, business, admin_user):
        first = _submit(db_session, business, 5)
        second = _submit(db_session, business, 4)
        third = _submit(db_session, business, 4)

        for review in (first, second, third):
            review_service.moderate_review(db_session, review.id, "approved", admin_user)
        db_session.refresh(business)
        assert business.total_reviews == 3
        assert business.average_rating == pytest.approx(4.33)

        review_service.moderate_review(db_session, first.id, "rejected", admin_user, notes="spam")
        db_session.refresh(business)
        assert business.total_reviews == 2
        assert business.average_rating == pytest.approx(4.0)

    def test_delete_recalculates(self, db_session, business, admin_user):
        review = _submit(db_session, business, 2)
        review_service.moderate_review(db_session, review.id, "approved", admin_user)

        review_service.delete_review(db_session, review.id)
        db_session.refresh(business)

        assert business.total_reviews == 0
        assert business.average_rating == 0


class TestMassAction:
    """Test bulk moderation."""

    def test_partial_failure(self, db_session, business, admin_user):
        review = _submit(db_session, business, 5)

        result = review_service.mass_action(db_session, [review.id, 9999], "approve", admin_user)

        assert result.success == 1
        assert result.failed == 1
        assert result.status_code == 207
        db_session.refresh(business)
        assert business.total_reviews == 1

    def test_more_than_fifty_rejected(self, db_session, admin_user):
        with pytest.raises(ValidationFailedError):
            review_service.mass_action(db_session, list(range(1, 52)), "approve", admin_user)

    def test_invalid_action(self, db_session, admin_user):
        with pytest.raises(ValidationFailedError):
            review_service.mass_action(db_session, [1], "archive", admin_user)
