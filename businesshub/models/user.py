"""
User Model

Directory accounts: visitors who review and submit listings, business
owners, and administrators.
"""
import enum
import uuid

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from businesshub.db.database import Base, utcnow


class UserRole(str, enum.Enum):
    """Account role"""
    ADMIN = "admin"
    USER = "user"
    BUSINESS_OWNER = "business_owner"
    SUSPENDED = "suspended"


class User(Base):
    """Directory account"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(256), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    profile_image_url = Column(String(500), nullable=True)

    role = Column(String(20), default=UserRole.USER.value, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    last_login = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    businesses = relationship("Business", back_populates="owner", foreign_keys="Business.owner_id")
    reviews = relationship("Review", back_populates="user")
    ownership_claims = relationship(
        "OwnershipClaim",
        back_populates="user",
        foreign_keys="OwnershipClaim.user_id",
        cascade="all, delete-orphan",
    )
    featured_requests = relationship(
        "FeaturedRequest",
        back_populates="user",
        foreign_keys="FeaturedRequest.user_id",
        cascade="all, delete-orphan",
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def is_suspended(self) -> bool:
        return self.role == UserRole.SUSPENDED.value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
