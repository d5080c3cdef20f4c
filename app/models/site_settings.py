"""Global site settings: at most one row, never created by a plain read."""
from sqlalchemy import Column, Integer, String, Text, Boolean
from sqlalchemy.sql import func
from app.database import Base, UTCDateTime

# Column defaults, also returned by reads while no row exists
SITE_DEFAULTS = {
    "business_name": "MyEvents",
    "business_type": "restaurant",
    "business_description": "Event Management & Booking System",
    "contact_email": "",
    "contact_phone": "",
    "website": "",
    "address": "",
    "logo": "",
    "favicon": "",
    "primary_color": "#7c3aed",
    "secondary_color": "#3b82f6",
    "accent_color": "#ec4899",
    "background_color": "#ffffff",
    "text_color": "#1f2937",
    "font_family": "Inter, system-ui, sans-serif",
    "font_size": "medium",
    "border_radius": "medium",
    "enable_polls": True,
    "enable_bookings": True,
    "enable_events": True,
    "meta_title": "",
    "meta_description": "",
    "meta_keywords": "",
    "facebook": "",
    "instagram": "",
    "twitter": "",
    "linkedin": "",
    "is_initialized": False,
}


def _setting(type_, key: str) -> Column:
    return Column(type_, nullable=False, default=SITE_DEFAULTS[key])


class SiteSettings(Base):
    __tablename__ = "site_settings"

    id = Column(Integer, primary_key=True)

    # Business information
    business_name = _setting(String(255), "business_name")
    business_type = _setting(String(50), "business_type")
    business_description = _setting(Text, "business_description")
    contact_email = _setting(String(255), "contact_email")
    contact_phone = _setting(String(50), "contact_phone")
    website = _setting(String(500), "website")
    address = _setting(String(500), "address")

    # Branding (URLs)
    logo = _setting(String(1000), "logo")
    favicon = _setting(String(1000), "favicon")

    # Theme
    primary_color = _setting(String(20), "primary_color")
    secondary_color = _setting(String(20), "secondary_color")
    accent_color = _setting(String(20), "accent_color")
    background_color = _setting(String(20), "background_color")
    text_color = _setting(String(20), "text_color")
    font_family = _setting(String(255), "font_family")
    font_size = _setting(String(10), "font_size")  # small, medium, large
    border_radius = _setting(String(10), "border_radius")  # none, small, medium, large

    # Feature toggles
    enable_polls = _setting(Boolean, "enable_polls")
    enable_bookings = _setting(Boolean, "enable_bookings")
    enable_events = _setting(Boolean, "enable_events")

    # SEO
    meta_title = _setting(String(255), "meta_title")
    meta_description = _setting(Text, "meta_description")
    meta_keywords = _setting(Text, "meta_keywords")

    # Social
    facebook = _setting(String(500), "facebook")
    instagram = _setting(String(500), "instagram")
    twitter = _setting(String(500), "twitter")
    linkedin = _setting(String(500), "linkedin")

    is_initialized = _setting(Boolean, "is_initialized")

    created_at = Column(UTCDateTime(timezone=True), server_default=func.now())
    updated_at = Column(UTCDateTime(timezone=True), server_default=func.now(), onupdate=func.now())
