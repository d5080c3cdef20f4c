"""Global site settings schemas."""
from datetime import datetime
from typing import Literal
from app.models.user import BusinessType
from app.schemas.common import CamelModel

FontSize = Literal["small", "medium", "large"]
BorderRadius = Literal["none", "small", "medium", "large"]


class SiteSettingsResponse(CamelModel):
    business_name: str
    business_type: str
    business_description: str
    contact_email: str
    contact_phone: str
    website: str
    address: str
    logo: str
    favicon: str
    primary_color: str
    secondary_color: str
    accent_color: str
    background_color: str
    text_color: str
    font_family: str
    font_size: str
    border_radius: str
    enable_polls: bool
    enable_bookings: bool
    enable_events: bool
    meta_title: str
    meta_description: str
    meta_keywords: str
    facebook: str
    instagram: str
    twitter: str
    linkedin: str
    is_initialized: bool
    updated_at: datetime | None = None


class SiteSettingsUpdate(CamelModel):
    """All optional; only provided fields are written."""
    business_name: str | None = None
    business_type: BusinessType | None = None
    business_description: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    website: str | None = None
    address: str | None = None
    logo: str | None = None
    favicon: str | None = None
    primary_color: str | None = None
    secondary_color: str | None = None
    accent_color: str | None = None
    background_color: str | None = None
    text_color: str | None = None
    font_family: str | None = None
    font_size: FontSize | None = None
    border_radius: BorderRadius | None = None
    enable_polls: bool | None = None
    enable_bookings: bool | None = None
    enable_events: bool | None = None
    meta_title: str | None = None
    meta_description: str | None = None
    meta_keywords: str | None = None
    facebook: str | None = None
    instagram: str | None = None
    twitter: str | None = None
    linkedin: str | None = None


class SettingsInitialize(CamelModel):
    business_name: str
    business_type: BusinessType = BusinessType.venue
