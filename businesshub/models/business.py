"""
Business Model

A directory listing, keyed by its place id.
"""
import enum

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from businesshub.db.database import Base, utcnow


class BusinessStatus(str, enum.Enum):
    """Moderation status of a listing"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Business(Base):
    """Directory listing"""
    __tablename__ = "businesses"

    placeid = Column(String(255), primary_key=True)
    slug = Column(String(255), unique=True, nullable=False, index=True)

    # ==================== DESCRIPTION ====================
    title = Column(String(255), nullable=False)
    subtitle = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)

    # ==================== LOCATION ====================
    address = Column(String(500), nullable=True)
    city = Column(String(100), nullable=True, index=True)
    state = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    # ==================== CONTACT ====================
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    website = Column(String(500), nullable=True)

    # ==================== MEDIA & EXTRAS ====================
    hours = Column(JSON, nullable=True)  # {"monday": "9:00-17:00", ...}
    images = Column(JSON, default=list)  # list of URLs
    logo = Column(String(500), nullable=True)
    faqs = Column(JSON, default=list)  # [{"question": ..., "answer": ...}]

    # ==================== FLAGS ====================
    featured = Column(Boolean, default=False, index=True)
    verified = Column(Boolean, default=False)
    status = Column(String(20), default=BusinessStatus.PENDING.value, index=True)

    # ==================== SEO ====================
    meta_title = Column(String(255), nullable=True)
    meta_description = Column(String(500), nullable=True)

    # ==================== RATINGS (derived from approved reviews) ====================
    average_rating = Column(Float, default=0.0)
    total_reviews = Column(Integer, default=0)

    # ==================== RELATIONS ====================
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    submitted_by = Column(String(100), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    category = relationship("Category", back_populates="businesses")
    owner = relationship("User", back_populates="businesses", foreign_keys=[owner_id])
    reviews = relationship("Review", back_populates="business", cascade="all, delete-orphan")
    leads = relationship("Lead", back_populates="business", cascade="all, delete-orphan")
    ownership_claims = relationship(
        "OwnershipClaim", back_populates="business", cascade="all, delete-orphan"
    )
    featured_requests = relationship(
        "FeaturedRequest", back_populates="business", cascade="all, delete-orphan"
    )
    service_links = relationship(
        "BusinessService", back_populates="business", cascade="all, delete-orphan"
    )

    @property
    def category_name(self):
        return self.category.name if self.category else None

    @property
    def category_slug(self):
        return self.category.slug if self.category else None

    def __repr__(self):
        return f"<Business {self.placeid}: {self.title}>"
