"""
Category and City Models

Taxonomy used to browse the directory.
"""
from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from businesshub.db.database import Base, utcnow


class Category(Base):
    """Business category (Restaurants, Plumbers, ...)"""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    slug = Column(String(120), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    icon = Column(String(100), nullable=True)
    color = Column(String(20), nullable=True)
    page_title = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)

    businesses = relationship("Business", back_populates="category")

    def __repr__(self):
        return f"<Category {self.slug}>"


class City(Base):
    """
    City metadata. Business counts are derived from Business.city; a row only
    exists once an admin describes or pre-registers the city.
    """
    __tablename__ = "cities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    slug = Column(String(120), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<City {self.name}>"
