"""
CMS Models

Static pages, navigation menu items, social media links and key/value
site settings managed from the admin back-office.
"""
import enum

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from businesshub.db.database import Base, utcnow


class PageStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class MenuPosition(str, enum.Enum):
    HEADER = "header"
    FOOTER = "footer"
    FOOTER1 = "footer1"
    FOOTER2 = "footer2"


class SocialPlatform(str, enum.Enum):
    FACEBOOK = "facebook"
    TWITTER = "twitter"
    INSTAGRAM = "instagram"
    LINKEDIN = "linkedin"
    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    PINTEREST = "pinterest"
    SNAPCHAT = "snapchat"
    WHATSAPP = "whatsapp"


class Page(Base):
    """CMS page served at /pages/{slug} once published"""
    __tablename__ = "pages"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    content = Column(Text, nullable=False, default="")
    seo_title = Column(String(255), nullable=True)
    seo_description = Column(String(500), nullable=True)
    status = Column(String(20), default=PageStatus.DRAFT.value, index=True)
    author_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    published_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Page {self.slug} [{self.status}]>"


class MenuItem(Base):
    """Navigation link; `order` is contiguous within a position"""
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    url = Column(String(500), nullable=False)
    position = Column(String(20), nullable=False, index=True)
    order = Column(Integer, nullable=False, default=0)
    target = Column(String(20), default="_self")
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<MenuItem {self.position}#{self.order} {self.name}>"


class SocialMediaLink(Base):
    """Footer/header social profile link, one per platform"""
    __tablename__ = "social_media_links"

    id = Column(Integer, primary_key=True, index=True)
    platform = Column(String(30), unique=True, nullable=False)
    url = Column(String(500), nullable=False)
    display_name = Column(String(100), nullable=False)
    icon_class = Column(String(100), nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<SocialMediaLink {self.platform}>"


class SiteSetting(Base):
    """Key/value configuration with a JSON value"""
    __tablename__ = "site_settings"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(100), unique=True, nullable=False, index=True)
    value = Column(JSON, nullable=True)
    description = Column(Text, nullable=True)
    category = Column(String(50), default="general", index=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<SiteSetting {self.key}>"


class ContentString(Base):
    """UI text with a default value and per-language translations"""
    __tablename__ = "content_strings"

    id = Column(Integer, primary_key=True, index=True)
    string_key = Column(String(255), unique=True, nullable=False, index=True)
    default_value = Column(Text, nullable=False)
    translations = Column(JSON, nullable=False, default=dict)
    category = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=True)
    is_html = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def translate(self, language: str) -> str:
        return (self.translations or {}).get(language) or self.default_value

    def __repr__(self):
        return f"<ContentString {self.string_key}>"
