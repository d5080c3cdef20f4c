"""Authentication, first-run setup, team users, backup and account deletion."""
import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user, require_admin
from app.errors import BadRequestError, UnauthorizedError
from app.models.user import User, UserRole
from app.schemas.auth import (
    DELETE_ACCOUNT_PHRASE,
    DeleteAccountRequest,
    SetupRequest,
    SetupStatus,
    Token,
    UserCreate,
    UserLogin,
    UserResponse,
)
from app.schemas.backup import BackupDocument, ImportSummary
from app.services.account import delete_account
from app.services.auth import create_access_token, get_password_hash, verify_password
from app.services.backup import export_backup, import_backup

log = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(user: User, message: str) -> Token:
    token = create_access_token(user.id, user.email, user.role)
    return Token(message=message, token=token, user=UserResponse.model_validate(user))


def _create_user(db: Session, data: SetupRequest, role: UserRole, is_setup_complete: bool) -> User:
    if db.query(User).filter(User.email == data.email).first():
        raise BadRequestError("User already exists with this email")
    user = User(
        name=data.name,
        email=data.email,
        hashed_password=get_password_hash(data.password),
        business_name=data.business_name.strip(),
        business_type=data.business_type,
        role=role,
        is_setup_complete=is_setup_complete,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError("User already exists with this email")
    db.refresh(user)
    return user


@router.get("/check-setup", response_model=SetupStatus)
def check_setup(db: Session = Depends(get_db)):
    return SetupStatus(is_setup_complete=db.query(User).first() is not None)


@router.post("/setup", response_model=Token, status_code=201)
def setup(data: SetupRequest, db: Session = Depends(get_db)):
    """Create the first admin. Only allowed while the system has no users."""
    if db.query(User).first() is not None:
        raise BadRequestError("Setup has already been completed")
    user = _create_user(db, data, UserRole.admin, is_setup_complete=True)
    log.info("Initial admin created: id=%s email=%s", user.id, user.email)
    return _token_response(user, "Setup completed successfully")


@router.post("/login", response_model=Token)
def login(request: Request, data: UserLogin, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == data.email).first()
    if not user or not verify_password(data.password, user.hashed_password):
        ip = request.client.host if request.client else None
        log.warning("Failed login attempt for email=%s ip=%s", data.email, ip)
        raise UnauthorizedError("Invalid credentials")
    return _token_response(user, "Login successful")


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return UserResponse.model_validate(current_user)


@router.post("/users", response_model=UserResponse, status_code=201)
def create_team_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Admin adds another user (admin, manager or staff). The new user owns their own polls and venues."""
    user = _create_user(db, data, data.role, is_setup_complete=True)
    log.info("User %s created by admin %s with role=%s", user.id, current_user.id, user.role.value)
    return UserResponse.model_validate(user)


@router.post("/export-backup", response_model=BackupDocument)
def export_backup_route(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return export_backup(db, current_user)


@router.post("/import-backup", response_model=ImportSummary)
def import_backup_route(
    data: BackupDocument,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return import_backup(db, current_user, data)


@router.post("/delete-account")
def delete_account_route(
    data: DeleteAccountRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete the caller and all of their data. Requires the password and the exact confirmation phrase."""
    if not verify_password(data.password, current_user.hashed_password):
        raise UnauthorizedError("Incorrect password")
    if data.confirmation != DELETE_ACCOUNT_PHRASE:
        raise BadRequestError(f'Please type "{DELETE_ACCOUNT_PHRASE}" to confirm')
    deleted = delete_account(db, current_user)
    return {"message": "Account and all associated data deleted", "deleted": deleted}
