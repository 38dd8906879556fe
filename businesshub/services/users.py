"""
User accounts: registration, login, profile and admin management.
"""

from typing import Any, Iterable, Optional

import structlog
from sqlalchemy import func
from sqlalchemy.orm import Session

from businesshub.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
)
from businesshub.core.security import hash_password, verify_password
from businesshub.core.text import is_valid_email, sanitize_text
from businesshub.db.database import utcnow
from businesshub.models import Business, User, UserRole
from businesshub.services.bulk import BulkResult

logger = structlog.get_logger(__name__)

MIN_PASSWORD_LENGTH = 6
PROFILE_FIELDS = ("first_name", "last_name", "profile_image_url")
ADMIN_EDITABLE_FIELDS = PROFILE_FIELDS + ("email", "role")
USER_MASS_ACTIONS = ("suspend", "activate", "delete")
ROLES = tuple(role.value for role in UserRole)


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _check_password(password: str) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailedError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )


def _check_role(role: str) -> None:
    if role not in ROLES:
        raise ValidationFailedError(f"Invalid role '{role}'", {"allowed": list(ROLES)})


def get_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == _normalize_email(email)).first()


def count_admins(db: Session) -> int:
    return db.query(func.count(User.id)).filter(User.role == UserRole.ADMIN.value).scalar()


# =============================================================================
# Authentication
# =============================================================================


def register_user(
    db: Session,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    admin_emails: Iterable[str] = (),
) -> User:
    """
    Create a new account.

    Names are sanitized and the email lower-cased. The account gets the admin
    role only when its email appears in ``admin_emails``.

    Raises:
        ValidationFailedError: Missing fields, bad email, short password, duplicate email
    """
    email = _normalize_email(email)
    first_name = sanitize_text(first_name) or ""
    last_name = sanitize_text(last_name) or ""

    if not email or not first_name or not last_name:
        raise ValidationFailedError("Email, password, first name and last name are required")
    if not is_valid_email(email):
        raise ValidationFailedError("Invalid email address", {"email": email})
    _check_password(password)

    if get_user_by_email(db, email) is not None:
        raise ValidationFailedError("An account with this email already exists")

    admins = {_normalize_email(e) for e in admin_emails}
    role = UserRole.ADMIN.value if email in admins else UserRole.USER.value

    user = User(
        email=email,
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("user_registered", user_id=user.id, role=role)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Check credentials and stamp last_login.

    Raises:
        AuthenticationError: Unknown email or wrong password
        PermissionDeniedError: Account is suspended
    """
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password or "", user.password_hash):
        logger.warning("login_failed", email=_normalize_email(email))
        raise AuthenticationError("Invalid email or password")

    if user.is_suspended:
        logger.warning("login_suspended_account", user_id=user.id)
        raise PermissionDeniedError("Account is suspended")

    user.last_login = utcnow()
    db.commit()
    db.refresh(user)

    logger.info("user_logged_in", user_id=user.id)
    return user


def update_profile(db: Session, user: User, data: dict[str, Any]) -> User:
    """Update the caller's own profile. Role and email are not editable here."""
    for field in PROFILE_FIELDS:
        if field in data and data[field] is not None:
            value = sanitize_text(data[field]) if field != "profile_image_url" else data[field]
            if field in ("first_name", "last_name") and not value:
                raise ValidationFailedError(f"{field} cannot be empty")
            setattr(user, field, value)

    db.commit()
    db.refresh(user)
    logger.info("profile_updated", user_id=user.id)
    return user


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    if not verify_password(current_password or "", user.password_hash):
        raise ValidationFailedError("Current password is incorrect")
    _check_password(new_password)

    user.password_hash = hash_password(new_password)
    db.commit()
    logger.info("password_changed", user_id=user.id)


# =============================================================================
# Admin management
# =============================================================================


def list_users(db: Session, role: Optional[str] = None, search: Optional[str] = None) -> list[User]:
    query = db.query(User)
    if role:
        query = query.filter(User.role == role)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            User.email.ilike(pattern)
            | User.first_name.ilike(pattern)
            | User.last_name.ilike(pattern)
        )
    return query.order_by(User.created_at.desc()).all()


def create_user(
    db: Session,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    role: str = UserRole.USER.value,
) -> User:
    """Admin-side account creation with an explicit role."""
    _check_role(role)
    user = register_user(db, email, password, first_name, last_name)
    if user.role != role:
        user.role = role
        db.commit()
        db.refresh(user)
    logger.info("user_created_by_admin", user_id=user.id, role=role)
    return user


def update_user(db: Session, user_id: str, data: dict[str, Any]) -> User:
    user = get_user(db, user_id)

    if "role" in data and data["role"] is not None:
        _check_role(data["role"])
        if (
            user.is_admin
            and data["role"] != UserRole.ADMIN.value
            and count_admins(db) <= 1
        ):
            raise ValidationFailedError("Cannot remove the admin role from the last admin")

    if "email" in data and data["email"] is not None:
        email = _normalize_email(data["email"])
        if not is_valid_email(email):
            raise ValidationFailedError("Invalid email address", {"email": email})
        existing = get_user_by_email(db, email)
        if existing is not None and existing.id != user.id:
            raise ConflictError("An account with this email already exists")
        data = {**data, "email": email}

    for field in ADMIN_EDITABLE_FIELDS:
        if field in data and data[field] is not None:
            setattr(user, field, data[field])

    db.commit()
    db.refresh(user)
    logger.info("user_updated", user_id=user.id)
    return user


def delete_user(db: Session, user_id: str) -> None:
    """
    Delete an account. Owned businesses become unclaimed.

    Raises:
        ValidationFailedError: When deleting the last admin
    """
    user = get_user(db, user_id)
    if user.is_admin and count_admins(db) <= 1:
        raise ValidationFailedError("Cannot delete the last admin user")

    db.delete(user)
    db.commit()
    logger.info("user_deleted", user_id=user_id)


def reset_password(db: Session, user_id: str, new_password: str) -> None:
    user = get_user(db, user_id)
    _check_password(new_password)
    user.password_hash = hash_password(new_password)
    db.commit()
    logger.info("password_reset_by_admin", user_id=user_id)


def mass_action(db: Session, user_ids: list[str], action: str, acting_user_id: str) -> BulkResult:
    """
    Suspend, activate or delete several accounts.

    The acting admin is never affected, and a delete may not remove every admin.
    """
    if action not in USER_MASS_ACTIONS:
        raise ValidationFailedError(
            f"Invalid action '{action}'", {"allowed": list(USER_MASS_ACTIONS)}
        )
    if not user_ids:
        raise ValidationFailedError("user_ids must be a non-empty list")

    if action in ("delete", "suspend"):
        targeted_admins = (
            db.query(func.count(User.id))
            .filter(
                User.id.in_(user_ids),
                User.id != acting_user_id,
                User.role == UserRole.ADMIN.value,
            )
            .scalar()
        )
        if targeted_admins and targeted_admins >= count_admins(db):
            raise ValidationFailedError(f"Cannot {action} all admin users")

    result = BulkResult()
    for user_id in user_ids:
        user = db.get(User, user_id)
        if user is None:
            result.add_failure(user_id, "User not found")
            continue
        if user_id == acting_user_id and action != "activate":
            result.add_failure(user_id, f"Cannot {action} your own account")
            continue

        if action == "suspend":
            user.role = UserRole.SUSPENDED.value
        elif action == "activate":
            if user.is_suspended:
                user.role = (
                    UserRole.BUSINESS_OWNER.value if user.businesses else UserRole.USER.value
                )
        else:
            db.delete(user)
        result.add_success()

    db.commit()
    logger.info("users_mass_action", action=action, success=result.success, failed=result.failed)
    return result


def assign_businesses(db: Session, user_id: str, business_ids: list[str]) -> BulkResult:
    """Make the user owner of each listed business."""
    user = get_user(db, user_id)
    if not business_ids:
        raise ValidationFailedError("business_ids must be a non-empty list")

    result = BulkResult()
    for business_id in business_ids:
        business = db.get(Business, business_id)
        if business is None:
            result.add_failure(business_id, "Business not found")
            continue
        business.owner_id = user.id
        result.add_success()

    if result.success and user.role == UserRole.USER.value:
        user.role = UserRole.BUSINESS_OWNER.value

    db.commit()
    logger.info("businesses_assigned", user_id=user_id, assigned=result.success, failed=result.failed)
    return result


def ensure_admin(db: Session, email: str, password: str) -> User:
    """Create the bootstrap admin if missing; promote an existing account."""
    user = get_user_by_email(db, email)
    if user is None:
        user = User(
            email=_normalize_email(email),
            password_hash=hash_password(password),
            first_name="Site",
            last_name="Admin",
            role=UserRole.ADMIN.value,
        )
        db.add(user)
        logger.info("bootstrap_admin_created", email=user.email)
    elif not user.is_admin:
        user.role = UserRole.ADMIN.value
        logger.info("bootstrap_admin_promoted", user_id=user.id)

    db.commit()
    db.refresh(user)
    return user
