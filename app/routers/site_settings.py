"""Global site settings: public read, admin write."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import require_admin
from app.models.user import User
from app.schemas.site_settings import SettingsInitialize, SiteSettingsResponse, SiteSettingsUpdate
from app.services.site_settings import get_site_settings, initialize_site_settings, update_site_settings

log = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SiteSettingsResponse)
def read_settings(db: Session = Depends(get_db)):
    return get_site_settings(db)


@router.put("")
def write_settings(
    data: SiteSettingsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    settings = update_site_settings(db, data)
    log.info("Site settings updated by %s", current_user.id)
    return {"message": "Settings updated successfully", "settings": settings}


@router.post("/initialize")
def initialize_settings(
    data: SettingsInitialize,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    settings = initialize_site_settings(db, data)
    return {"message": "Settings initialized", "settings": settings}
