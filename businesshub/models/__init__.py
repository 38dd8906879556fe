"""
BusinessHub Database Models
"""
from businesshub.models.user import User, UserRole
from businesshub.models.category import Category, City
from businesshub.models.business import Business, BusinessStatus
from businesshub.models.engagement import (
    Review,
    Lead,
    OwnershipClaim,
    FeaturedRequest,
    ModerationStatus,
    LeadStatus,
)
from businesshub.models.content import (
    Page,
    MenuItem,
    SocialMediaLink,
    SiteSetting,
    ContentString,
    PageStatus,
    MenuPosition,
    SocialPlatform,
)
from businesshub.models.service import Service, BusinessService

__all__ = [
    "User",
    "UserRole",
    "Category",
    "City",
    "Business",
    "BusinessStatus",
    "Review",
    "Lead",
    "OwnershipClaim",
    "FeaturedRequest",
    "ModerationStatus",
    "LeadStatus",
    "Page",
    "MenuItem",
    "SocialMediaLink",
    "SiteSetting",
    "ContentString",
    "PageStatus",
    "MenuPosition",
    "SocialPlatform",
    "Service",
    "BusinessService",
]
