"""
Service Catalogue Models

Services a business can offer (Teeth Cleaning, Oil Change, ...) with their
own SEO landing content, linked to businesses many-to-many.
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from businesshub.db.database import Base, utcnow


class Service(Base):
    """Catalogue entry; inactive services are hidden from public listings"""
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)
    seo_title = Column(String(255), nullable=True)
    seo_description = Column(String(500), nullable=True)
    content = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    business_links = relationship("BusinessService", back_populates="service", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Service {self.slug}>"


class BusinessService(Base):
    """A service offered by one business"""
    __tablename__ = "business_services"
    __table_args__ = (UniqueConstraint("business_id", "service_id", name="uq_business_service"),)

    id = Column(Integer, primary_key=True, index=True)
    business_id = Column(String(255), ForeignKey("businesses.placeid", ondelete="CASCADE"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services.id", ondelete="CASCADE"), nullable=False, index=True)
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)

    business = relationship("Business", back_populates="service_links")
    service = relationship("Service", back_populates="business_links")

    def __repr__(self):
        return f"<BusinessService {self.business_id} -> {self.service_id}>"
