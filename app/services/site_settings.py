"""Global settings singleton.

Reads never write: when no row exists, get_site_settings returns SITE_DEFAULTS.
A row is only persisted by update_site_settings or initialize_site_settings.
"""
from sqlalchemy.orm import Session
from app.models.site_settings import SITE_DEFAULTS, SiteSettings
from app.schemas.site_settings import SettingsInitialize, SiteSettingsResponse, SiteSettingsUpdate


def _stored(db: Session) -> SiteSettings | None:
    return db.query(SiteSettings).order_by(SiteSettings.id).first()


def get_site_settings(db: Session) -> SiteSettingsResponse:
    row = _stored(db)
    if row is None:
        return SiteSettingsResponse(**SITE_DEFAULTS)
    return SiteSettingsResponse.model_validate(row)


def update_site_settings(db: Session, data: SiteSettingsUpdate) -> SiteSettingsResponse:
    values = data.model_dump(exclude_unset=True, exclude_none=True, mode="json")
    row = _stored(db)
    if row is None:
        row = SiteSettings(**values)
        db.add(row)
    else:
        for key, value in values.items():
            setattr(row, key, value)
    db.commit()
    db.refresh(row)
    return SiteSettingsResponse.model_validate(row)


def initialize_site_settings(db: Session, data: SettingsInitialize) -> SiteSettingsResponse:
    """Seed business identity once; a row that is already initialized is left untouched."""
    business_type = data.business_type.value
    seeded = {
        "business_name": data.business_name,
        "business_type": business_type,
        "meta_title": data.business_name,
        "business_description": f"{data.business_name} - Event Management & Booking System",
        "is_initialized": True,
    }
    row = _stored(db)
    if row is None:
        row = SiteSettings(**seeded)
        db.add(row)
    elif not row.is_initialized:
        for key, value in seeded.items():
            setattr(row, key, value)
    db.commit()
    db.refresh(row)
    return SiteSettingsResponse.model_validate(row)
