"""Pydantic models for API requests and responses.

This module defines all the request/response schemas for the BusinessHub API.
Business rules (claim message length, last-admin protection, ...) live in
the services; these models only check shape and simple bounds.
"""

from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Enums and Types
# =============================================================================

RoleType = Literal["admin", "user", "business_owner", "suspended"]
BusinessStatusType = Literal["pending", "approved", "rejected"]
DecisionType = Literal["approved", "rejected"]
LeadStatusType = Literal["new", "contacted", "qualified", "converted", "closed"]
PageStatusType = Literal["draft", "published"]
MenuPositionType = Literal["header", "footer", "footer1", "footer2"]
DirectionType = Literal["up", "down"]
ToggleActionType = Literal["activate", "deactivate", "delete"]


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str = Field(..., description="Human-readable result")


class BulkResultResponse(BaseModel):
    """Outcome of a bulk operation (HTTP 207 when any item failed)."""

    success: int = Field(..., description="Items processed successfully")
    failed: int = Field(..., description="Items that failed")
    errors: list[dict[str, Any]] = Field(default_factory=list, description="Per-item errors")


# =============================================================================
# Auth & User Models
# =============================================================================


class RegisterRequest(BaseModel):
    """Request model for creating an account."""

    email: EmailStr = Field(..., description="Login email", json_schema_extra={"example": "jane@example.com"})
    password: str = Field(..., min_length=6, max_length=128, description="Password (6+ characters)")
    first_name: str = Field(..., min_length=1, max_length=100, description="First name")
    last_name: str = Field(..., min_length=1, max_length=100, description="Last name")


class LoginRequest(BaseModel):
    email: str = Field(..., description="Login email")
    password: str = Field(..., description="Password")


class UserResponse(BaseModel):
    """Public view of an account (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="Email address")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    profile_image_url: Optional[str] = Field(None, description="Avatar URL")
    role: str = Field(..., description="admin, user, business_owner or suspended")
    created_at: Optional[datetime] = Field(None, description="Account creation time")
    last_login: Optional[datetime] = Field(None, description="Last successful login")


class AuthResponse(BaseModel):
    """Login/registration result with a bearer token."""

    user: UserResponse
    access_token: str = Field(..., description="JWT to send as 'Authorization: Bearer <token>'")
    token_type: str = Field(default="bearer")


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    profile_image_url: Optional[str] = Field(None, max_length=500)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., description="Current password")
    new_password: str = Field(..., min_length=6, max_length=128, description="New password")


class AdminUserCreate(RegisterRequest):
    role: RoleType = Field(default="user", description="Role to assign")


class AdminUserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    profile_image_url: Optional[str] = Field(None, max_length=500)
    role: Optional[RoleType] = None


class PasswordResetRequest(BaseModel):
    new_password: str = Field(..., min_length=6, max_length=128)


class UserMassActionRequest(BaseModel):
    user_ids: list[str] = Field(..., min_length=1, description="Target user IDs")
    action: Literal["suspend", "activate", "delete"] = Field(..., description="Action to apply")


class AssignBusinessesRequest(BaseModel):
    business_ids: list[str] = Field(..., min_length=1, description="Businesses to hand to the user")


# =============================================================================
# Business Models
# =============================================================================


class FaqItem(BaseModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)


class BusinessFields(BaseModel):
    """Fields an owner may set on a listing."""

    subtitle: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    address: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    website: Optional[str] = Field(None, max_length=500)
    hours: Optional[dict[str, Any]] = Field(None, description="Opening hours keyed by weekday")
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    images: Optional[list[str]] = Field(None, description="Photo URLs")
    logo: Optional[str] = Field(None, max_length=500)
    faqs: Optional[list[FaqItem]] = None
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = Field(None, max_length=500)
    category_id: Optional[int] = Field(None, description="Category ID")


class BusinessCreate(BusinessFields):
    """Request model for submitting a listing."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Business name",
        json_schema_extra={"example": "Blue Door Bakery"},
    )
    placeid: Optional[str] = Field(None, max_length=255, description="External place ID (generated when omitted)")


class BusinessUpdate(BusinessFields):
    title: Optional[str] = Field(None, min_length=1, max_length=255)


class AdminBusinessCreate(BusinessCreate):
    featured: bool = False
    verified: bool = False
    status: BusinessStatusType = "approved"
    owner_id: Optional[str] = None


class AdminBusinessUpdate(BusinessUpdate):
    featured: Optional[bool] = None
    verified: Optional[bool] = None
    status: Optional[BusinessStatusType] = None
    owner_id: Optional[str] = None
    slug: Optional[str] = Field(None, pattern=r"^[a-z0-9-]+$")


class BusinessResponse(BaseModel):
    """Response model for a listing."""

    model_config = ConfigDict(from_attributes=True)

    placeid: str = Field(..., description="Business ID")
    slug: str = Field(..., description="URL slug")
    title: str
    subtitle: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    hours: Optional[Any] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    images: list[str] = Field(default_factory=list)
    logo: Optional[str] = None
    faqs: list[dict[str, Any]] = Field(default_factory=list)
    featured: bool = False
    verified: bool = False
    status: str
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    average_rating: float = Field(0.0, description="Mean of approved review ratings")
    total_reviews: int = Field(0, description="Number of approved reviews")
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    category_slug: Optional[str] = None
    owner_id: Optional[str] = None
    submitted_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BusinessListResponse(BaseModel):
    businesses: list[BusinessResponse] = Field(..., description="Page of businesses")
    total: int = Field(..., description="Total matching businesses")
    limit: int
    offset: int


class BulkDeleteRequest(BaseModel):
    business_ids: list[str] = Field(..., description="Business IDs to delete (1-100)")


class BulkDeleteResponse(BaseModel):
    message: str = Field(..., description="Summary of the outcome")
    deleted_count: int = Field(..., description="Businesses actually deleted")
    total_requested: int = Field(..., description="IDs received")
    errors: list[str] = Field(default_factory=list, description="Per-ID failures")


class MassCategoryRequest(BaseModel):
    business_ids: list[str] = Field(..., min_length=1)
    category_id: int


class PhotoDeleteRequest(BaseModel):
    photo_url: str = Field(..., min_length=1)


class BulkPhotoDeleteRequest(BaseModel):
    photo_urls: list[str] = Field(..., min_length=1)


class FaqReplaceRequest(BaseModel):
    faqs: list[FaqItem] = Field(default_factory=list)


class FeaturedToggleRequest(BaseModel):
    featured: bool


class SubmissionReviewRequest(BaseModel):
    status: DecisionType


class StatsResponse(BaseModel):
    """Admin dashboard counters."""

    total_businesses: int
    approved_businesses: int
    pending_businesses: int
    featured_businesses: int
    total_users: int
    total_categories: int
    total_reviews: int
    pending_reviews: int
    total_leads: int
    pending_claims: int
    pending_featured_requests: int


# =============================================================================
# Category & City Models
# =============================================================================


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, json_schema_extra={"example": "Bakeries"})
    slug: Optional[str] = Field(None, pattern=r"^[a-z0-9-]+$", description="Generated from name when omitted")
    description: Optional[str] = None
    icon: Optional[str] = Field(None, max_length=100)
    color: Optional[str] = Field(None, max_length=20)
    page_title: Optional[str] = Field(None, max_length=255)


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, pattern=r"^[a-z0-9-]+$")
    description: Optional[str] = None
    icon: Optional[str] = Field(None, max_length=100)
    color: Optional[str] = Field(None, max_length=20)
    page_title: Optional[str] = Field(None, max_length=255)


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    page_title: Optional[str] = None
    business_count: Optional[int] = Field(None, description="Approved businesses in the category")


class CategoryBusinessesResponse(BaseModel):
    category: CategoryResponse
    businesses: list[BusinessResponse]


class CityResponse(BaseModel):
    name: str
    slug: str
    description: Optional[str] = None
    business_count: int = 0


class CityCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class CityUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100, description="New name")
    description: Optional[str] = None


class CityUpdateResponse(BaseModel):
    name: str
    slug: str
    description: Optional[str] = None
    businesses_updated: int


# =============================================================================
# Review Models
# =============================================================================


class ReviewFields(BaseModel):
    rating: int = Field(..., ge=1, le=5, description="Star rating 1-5")
    title: Optional[str] = Field(None, max_length=255)
    content: str = Field(..., min_length=1, max_length=2000)


class PublicReviewCreate(ReviewFields):
    """Anonymous review submitted from a listing page."""

    author_name: str = Field(..., min_length=1, max_length=100)
    author_email: EmailStr


class UserReviewCreate(ReviewFields):
    """Review submitted by a logged-in user."""

    business_id: str = Field(..., min_length=1)


class ReviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    business_id: str
    business_title: Optional[str] = None
    user_id: Optional[str] = None
    author_name: Optional[str] = None
    rating: int
    title: Optional[str] = None
    content: str
    status: str
    admin_notes: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class ReviewModerationRequest(BaseModel):
    admin_notes: Optional[str] = Field(None, max_length=2000)


class ReviewMassActionRequest(BaseModel):
    review_ids: list[int] = Field(..., min_length=1, max_length=50)
    action: Literal["approve", "reject", "delete"]


# =============================================================================
# Lead Models
# =============================================================================


class LeadCreate(BaseModel):
    """Contact-form submission."""

    business_id: str = Field(..., min_length=1)
    sender_name: str = Field(..., min_length=1, max_length=200)
    sender_email: EmailStr
    sender_phone: Optional[str] = Field(None, max_length=50)
    message: str = Field(..., min_length=1, max_length=5000)


class LeadCreatedResponse(BaseModel):
    message: str
    lead_id: int


class LeadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    business_id: str
    business_title: Optional[str] = None
    sender_name: str
    sender_email: str
    sender_phone: Optional[str] = None
    message: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LeadStatusUpdate(BaseModel):
    status: LeadStatusType


class LeadBulkDeleteRequest(BaseModel):
    lead_ids: list[int] = Field(..., min_length=1)


class LeadMassStatusRequest(BaseModel):
    lead_ids: list[int] = Field(..., min_length=1)
    status: LeadStatusType


# =============================================================================
# Ownership Claim & Featured Request Models
# =============================================================================


class ClaimCreate(BaseModel):
    business_id: str = Field(..., min_length=1)
    message: str = Field(..., description="Proof of ownership (50+ characters)")


class ClaimResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    business_id: str
    business_title: Optional[str] = None
    user_id: str
    user_email: Optional[str] = None
    message: str
    status: str
    admin_message: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class DecisionRequest(BaseModel):
    status: DecisionType
    admin_message: Optional[str] = Field(None, max_length=2000)


class FeaturedRequestCreate(BaseModel):
    business_id: str = Field(..., min_length=1)
    message: Optional[str] = Field(None, max_length=2000)


class FeaturedRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    business_id: str
    business_title: Optional[str] = None
    user_id: str
    message: Optional[str] = None
    status: str
    admin_message: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


# =============================================================================
# CMS Models
# =============================================================================


class PageCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, pattern=r"^[a-z0-9-]+$", description="Generated from title when omitted")
    content: str = Field(default="")
    seo_title: Optional[str] = Field(None, max_length=255)
    seo_description: Optional[str] = Field(None, max_length=500)
    status: PageStatusType = "draft"


class PageUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, pattern=r"^[a-z0-9-]+$")
    content: Optional[str] = None
    seo_title: Optional[str] = Field(None, max_length=255)
    seo_description: Optional[str] = Field(None, max_length=500)
    status: Optional[PageStatusType] = None


class PageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    content: str
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    status: str
    author_id: Optional[str] = None
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MenuItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    url: str = Field(..., min_length=1, max_length=500)
    position: MenuPositionType = "header"
    target: Literal["_self", "_blank"] = "_self"
    is_active: bool = True


class MenuItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    url: Optional[str] = Field(None, min_length=1, max_length=500)
    position: Optional[MenuPositionType] = None
    target: Optional[Literal["_self", "_blank"]] = None
    is_active: Optional[bool] = None


class MenuItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    url: str
    position: str
    order: int
    target: Optional[str] = None
    is_active: bool


class MoveRequest(BaseModel):
    direction: DirectionType


class MenuReorderRequest(BaseModel):
    position: MenuPositionType
    ordered_ids: list[int] = Field(..., min_length=1)


class MenuBulkActionRequest(BaseModel):
    menu_item_ids: list[int] = Field(..., min_length=1)
    action: ToggleActionType


class SocialLinkCreate(BaseModel):
    platform: str = Field(..., description="facebook, twitter, instagram, linkedin, youtube, tiktok, pinterest, snapchat or whatsapp")
    url: str = Field(..., max_length=500)
    display_name: str = Field(..., min_length=1, max_length=100)
    icon_class: str = Field(..., min_length=1, max_length=100)
    sort_order: Optional[int] = Field(None, ge=0)
    is_active: bool = True


class SocialLinkUpdate(BaseModel):
    platform: Optional[str] = None
    url: Optional[str] = Field(None, max_length=500)
    display_name: Optional[str] = Field(None, min_length=1, max_length=100)
    icon_class: Optional[str] = Field(None, min_length=1, max_length=100)
    sort_order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class SocialLinkBulkItem(SocialLinkUpdate):
    id: int


class SocialLinkResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    platform: str
    url: str
    display_name: str
    icon_class: str
    sort_order: int
    is_active: bool


class SocialReorderRequest(BaseModel):
    ordered_ids: list[int] = Field(..., min_length=1)


class SocialBulkActionRequest(BaseModel):
    link_ids: list[int] = Field(..., min_length=1)
    action: ToggleActionType


class SocialBulkUpdateRequest(BaseModel):
    updates: list[SocialLinkBulkItem] = Field(..., min_length=1)


class SiteSettingUpsert(BaseModel):
    value: Any = Field(..., description="Any JSON value")
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=50)


class SiteSettingPatch(BaseModel):
    value: Optional[Any] = None
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=50)


class SiteSettingBulkItem(SiteSettingUpsert):
    key: str = Field(..., min_length=1, max_length=100)


class SiteSettingBulkRequest(BaseModel):
    settings: list[SiteSettingBulkItem] = Field(..., min_length=1)


class SiteSettingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    key: str
    value: Any = None
    description: Optional[str] = None
    category: str
    updated_at: Optional[datetime] = None


class ContentStringCreate(BaseModel):
    string_key: str = Field(..., min_length=1, max_length=255, examples=["header.navigation.home"])
    default_value: str = Field(..., min_length=1)
    translations: dict[str, str] = Field(default_factory=dict, description="Language code to text")
    category: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    is_html: bool = False


class ContentStringUpdate(BaseModel):
    default_value: Optional[str] = Field(None, min_length=1)
    translations: Optional[dict[str, str]] = None
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    is_html: Optional[bool] = None


class ContentStringBulkRequest(BaseModel):
    strings: list[ContentStringCreate] = Field(..., min_length=1)


class ContentStringResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    string_key: str
    default_value: str
    translations: dict[str, str] = Field(default_factory=dict)
    category: str
    description: Optional[str] = None
    is_html: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ContentStringBulkResponse(BaseModel):
    success: bool = True
    imported: int
    strings: list[ContentStringResponse]


class ContentValuesResponse(BaseModel):
    success: bool = True
    updated: int
    missing: list[str] = Field(default_factory=list)
    message: str


class ContentCategoryCount(BaseModel):
    category: str
    count: int


class ContentStatsResponse(BaseModel):
    total_strings: int
    categories_count: int
    recent_updates: int = Field(..., description="Strings changed in the last 7 days")
    categories: list[ContentCategoryCount]


# =============================================================================
# Service Catalogue Models
# =============================================================================


class ServiceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, pattern=r"^[a-z0-9-]+$", description="Generated from name when omitted")
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    seo_title: Optional[str] = Field(None, max_length=255)
    seo_description: Optional[str] = Field(None, max_length=500)
    content: Optional[str] = None
    is_active: bool = True


class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, pattern=r"^[a-z0-9-]+$")
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    seo_title: Optional[str] = Field(None, max_length=255)
    seo_description: Optional[str] = Field(None, max_length=500)
    content: Optional[str] = None
    is_active: Optional[bool] = None


class ServiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    description: Optional[str] = None
    category: Optional[str] = None
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    content: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BusinessServiceCreate(BaseModel):
    service_id: int


class BusinessServiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    business_id: str
    service_id: int
    is_active: bool
    created_at: Optional[datetime] = None


# =============================================================================
# Import Models
# =============================================================================


class ImportIssueResponse(BaseModel):
    row: int = Field(..., description="CSV line number (header is row 1)")
    field: str
    value: Any = None
    message: str


class ImportResultResponse(BaseModel):
    success: bool
    total_rows: int
    created: int = 0
    updated: int = 0
    duplicates_skipped: int = 0
    errors: list[ImportIssueResponse] = Field(default_factory=list)
    warnings: list[ImportIssueResponse] = Field(default_factory=list)


class ImportPreviewResponse(BaseModel):
    headers: list[str]
    rows: list[dict[str, Optional[str]]]
    total_rows: int


# =============================================================================
# Health Models
# =============================================================================


class HealthStatus(BaseModel):
    """Individual service health status."""

    status: Literal["healthy", "unhealthy", "degraded"] = Field(
        ..., description="Service status"
    )
    latency_ms: Optional[float] = Field(None, description="Response latency in milliseconds")
    message: Optional[str] = Field(None, description="Additional status message")


class HealthCheckResponse(BaseModel):
    """Response model for health check endpoint."""

    status: Literal["healthy", "unhealthy", "degraded"] = Field(
        ..., description="Overall system status"
    )
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(..., description="Check timestamp")
    services: dict[str, HealthStatus] = Field(
        default_factory=dict,
        description="Individual service statuses",
    )
    uptime_seconds: Optional[float] = Field(None, description="Server uptime in seconds")


# =============================================================================
# Error Models
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")
    detail: Optional[Any] = Field(None, description="Additional error details")
    path: Optional[str] = Field(None, description="Request path that caused the error")
    timestamp: datetime = Field(default_factory=_now, description="Error timestamp")


class ValidationErrorDetail(BaseModel):
    """Details for validation errors."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Validation error message")
    value: Optional[Any] = Field(None, description="Invalid value provided")


class ValidationErrorResponse(BaseModel):
    """Response for validation errors."""

    error: str = Field(default="validation_error", description="Error type")
    message: str = Field(default="Request validation failed", description="Error message")
    errors: list[ValidationErrorDetail] = Field(..., description="List of validation errors")
    timestamp: datetime = Field(default_factory=_now, description="Error timestamp")
