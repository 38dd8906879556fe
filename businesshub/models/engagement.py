"""
Engagement Models

Everything visitors and owners attach to a listing: reviews, contact-form
leads, ownership claims and featured-listing requests. Claims and featured
requests share the pending -> approved/rejected moderation workflow.
"""
import enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from businesshub.db.database import Base, utcnow


class ModerationStatus(str, enum.Enum):
    """Workflow status for reviews, claims and featured requests"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeadStatus(str, enum.Enum):
    """Lead status in the owner's pipeline"""
    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    CONVERTED = "converted"
    CLOSED = "closed"


class Review(Base):
    """Visitor review; only approved reviews count toward the rating"""
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    business_id = Column(String(255), ForeignKey("businesses.placeid"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)

    author_name = Column(String(100), nullable=True)
    author_email = Column(String(255), nullable=True)
    rating = Column(Integer, nullable=False)
    title = Column(String(255), nullable=True)
    content = Column(Text, nullable=False)

    status = Column(String(20), default=ModerationStatus.PENDING.value, index=True)
    admin_notes = Column(Text, nullable=True)
    reviewed_by = Column(String(36), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    business = relationship("Business", back_populates="reviews")
    user = relationship("User", back_populates="reviews")

    @property
    def business_title(self):
        return self.business.title if self.business else None

    def __repr__(self):
        return f"<Review {self.id} {self.rating}* [{self.status}]>"


class Lead(Base):
    """Contact-form submission addressed to a business"""
    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, index=True)
    business_id = Column(String(255), ForeignKey("businesses.placeid"), nullable=False, index=True)

    sender_name = Column(String(200), nullable=False)
    sender_email = Column(String(255), nullable=False)
    sender_phone = Column(String(50), nullable=True)
    message = Column(Text, nullable=False)

    status = Column(String(20), default=LeadStatus.NEW.value, index=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    business = relationship("Business", back_populates="leads")

    @property
    def business_title(self):
        return self.business.title if self.business else None

    def __repr__(self):
        return f"<Lead {self.id} -> {self.business_id} [{self.status}]>"


class OwnershipClaim(Base):
    """Request by a user to be recognised as the owner of a listing"""
    __tablename__ = "ownership_claims"

    id = Column(Integer, primary_key=True, index=True)
    business_id = Column(String(255), ForeignKey("businesses.placeid"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    message = Column(Text, nullable=False)
    status = Column(String(20), default=ModerationStatus.PENDING.value, index=True)
    admin_message = Column(Text, nullable=True)
    reviewed_by = Column(String(36), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    business = relationship("Business", back_populates="ownership_claims")
    user = relationship("User", back_populates="ownership_claims", foreign_keys=[user_id])

    @property
    def business_title(self):
        return self.business.title if self.business else None

    @property
    def user_email(self):
        return self.user.email if self.user else None

    def __repr__(self):
        return f"<OwnershipClaim {self.id} {self.user_id} -> {self.business_id} [{self.status}]>"


class FeaturedRequest(Base):
    """Owner request to have a listing promoted as featured"""
    __tablename__ = "featured_requests"

    id = Column(Integer, primary_key=True, index=True)
    business_id = Column(String(255), ForeignKey("businesses.placeid"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    message = Column(Text, nullable=True)
    status = Column(String(20), default=ModerationStatus.PENDING.value, index=True)
    admin_message = Column(Text, nullable=True)
    reviewed_by = Column(String(36), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    business = relationship("Business", back_populates="featured_requests")
    user = relationship("User", back_populates="featured_requests", foreign_keys=[user_id])

    @property
    def business_title(self):
        return self.business.title if self.business else None

    def __repr__(self):
        return f"<FeaturedRequest {self.id} {self.business_id} [{self.status}]>"
