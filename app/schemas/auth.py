"""Auth, setup and account schemas."""
from datetime import datetime
from pydantic import EmailStr, field_validator
from app.config import get_settings
from app.models.user import BusinessType, UserRole
from app.schemas.common import CamelModel

DELETE_ACCOUNT_PHRASE = "DELETE MY ACCOUNT"


def _clean_name(v: str) -> str:
    v = (v or "").strip()[:100]
    if not v:
        raise ValueError("Name is required")
    return v


def _check_password(v: str) -> str:
    min_len = get_settings().min_password_length
    if len(v or "") < min_len:
        raise ValueError(f"Password must be at least {min_len} characters long")
    return v


class SetupRequest(CamelModel):
    """First admin account; only accepted while no users exist."""
    name: str
    email: EmailStr
    password: str
    business_name: str = ""
    business_type: BusinessType = BusinessType.restaurant

    clean_name = field_validator("name")(_clean_name)
    check_password = field_validator("password")(_check_password)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()


class UserCreate(SetupRequest):
    """Additional team member created by an admin."""
    role: UserRole = UserRole.staff


class UserLogin(CamelModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()


class UserResponse(CamelModel):
    id: str
    name: str
    email: str
    role: UserRole
    business_name: str = ""
    business_type: BusinessType | None = None
    is_setup_complete: bool = False
    created_at: datetime | None = None


class Token(CamelModel):
    message: str
    token: str
    user: UserResponse


class SetupStatus(CamelModel):
    is_setup_complete: bool


class DeleteAccountRequest(CamelModel):
    password: str
    confirmation: str
