"""Unit tests for account registration and administration."""

import pytest

from businesshub.core.exceptions import AuthenticationError, PermissionDeniedError, ValidationFailedError
from businesshub.models import User, UserRole
from businesshub.services import users as user_service

TEST_PASSWORD = "secret123"


class TestRegistration:
    """Test register_user and authenticate."""

    def test_register_normalizes_email(self, db_session):
        user = user_service.register_user(db_session, " Sam@Example.COM ", "secret123", "Sam", "Lee")

        assert user.email == "sam@example.com"
        assert user.role == UserRole.USER.value
        assert user.password_hash != "secret123"

    def test_configured_admin_email_gets_admin_role(self, db_session):
        user = user_service.register_user(
            db_session, "boss@example.com", "secret123", "Big", "Boss", admin_emails=["BOSS@example.com"]
        )

        assert user.role == UserRole.ADMIN.value

    def test_duplicate_email(self, db_session, regular_user):
        with pytest.raises(ValidationFailedError, match="already exists"):
            user_service.register_user(db_session, regular_user.email, "secret123", "Jane", "Again")

    def test_short_password(self, db_session):
        with pytest.raises(ValidationFailedError):
            user_service.register_user(db_session, "sam@example.com", "123", "Sam", "Lee")

    def test_authenticate(self, db_session, regular_user):
        user = user_service.authenticate(db_session, regular_user.email, TEST_PASSWORD)

        assert user.id == regular_user.id
        assert user.last_login is not None

    def test_wrong_password(self, db_session, regular_user):
        with pytest.raises(AuthenticationError):
            user_service.authenticate(db_session, regular_user.email, "wrong-password")

    def test_suspended_account(self, db_session, make_user):
        user = make_user(role=UserRole.SUSPENDED.value)

        with pytest.raises(PermissionDeniedError):
            user_service.authenticate(db_session, user.email, TEST_PASSWORD)


class TestAdministration:
    """Test admin-side account management."""

    def test_cannot_delete_last_admin(self, db_session, admin_user):
        with pytest.raises(ValidationFailedError, match="last admin"):
            user_service.delete_user(db_session, admin_user.id)

    def test_cannot_demote_last_admin(self, db_session, admin_user):
        with pytest.raises(ValidationFailedError):
            user_service.update_user(db_session, admin_user.id, {"role": "user"})

    def test_mass_action_skips_acting_admin(self, db_session, admin_user, make_user, regular_user):
        make_user(email="second-admin@example.com", role=UserRole.ADMIN.value)

        result = user_service.mass_action(
            db_session, [admin_user.id, regular_user.id], "suspend", admin_user.id
        )

        assert result.success == 1
        assert result.errors == [{"id": admin_user.id, "error": "Cannot suspend your own account"}]
        db_session.refresh(regular_user)
        assert regular_user.role == UserRole.SUSPENDED.value

    def test_mass_delete_of_every_admin_refused(self, db_session, admin_user, make_user, regular_user):
        other = make_user(email="second-admin@example.com", role=UserRole.ADMIN.value)

        with pytest.raises(ValidationFailedError, match="all admin"):
            user_service.mass_action(db_session, [admin_user.id, other.id], "delete", regular_user.id)

    def test_mass_delete_including_self_removes_other_admin(self, db_session, admin_user, make_user):
        other = make_user(email="second-admin@example.com", role=UserRole.ADMIN.value)

        result = user_service.mass_action(db_session, [admin_user.id, other.id], "delete", admin_user.id)

        assert result.success == 1
        assert result.errors == [{"id": admin_user.id, "error": "Cannot delete your own account"}]
        assert db_session.get(User, other.id) is None
        assert user_service.count_admins(db_session) == 1

    def test_activate_restores_owner_role(self, db_session, admin_user, make_user, make_business):
        user = make_user(role=UserRole.SUSPENDED.value)
        make_business(owner=user)

        user_service.mass_action(db_session, [user.id], "activate", admin_user.id)

        db_session.refresh(user)
        assert user.role == UserRole.BUSINESS_OWNER.value

    def test_assign_businesses_promotes_user(self, db_session, regular_user, make_business):
        business = make_business()

        result = user_service.assign_businesses(db_session, regular_user.id, [business.placeid, "missing"])

        assert result.success == 1
        assert result.failed == 1
        db_session.refresh(business)
        db_session.refresh(regular_user)
        assert business.owner_id == regular_user.id
        assert regular_user.role == UserRole.BUSINESS_OWNER.value

    def test_ensure_admin_promotes_existing_account(self, db_session, regular_user):
        user_service.ensure_admin(db_session, regular_user.email, "ignored-password")

        assert db_session.get(User, regular_user.id).role == UserRole.ADMIN.value
