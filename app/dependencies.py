"""Shared dependencies: DB session, current user, role gates."""
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.database import get_db
from app.errors import ForbiddenError, UnauthorizedError
from app.models.user import User, UserRole
from app.services.auth import decode_token_with_error

security = HTTPBearer(auto_error=False)


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    if not credentials:
        raise UnauthorizedError("Not authorized, no token")
    token_str = (credentials.credentials or "").strip()
    payload, _ = decode_token_with_error(token_str)
    if not payload:
        raise UnauthorizedError("Not authorized, token failed")
    user_id = payload.get("sub")
    if not user_id or not isinstance(user_id, str):
        raise UnauthorizedError("Invalid token")
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise UnauthorizedError("Not authorized, user not found")
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != UserRole.admin:
        raise ForbiddenError("Access denied. Admin only.")
    return current_user
