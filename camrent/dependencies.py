"""Shared dependencies: DB session, current user, role and privilege guards."""
from typing import Annotated

from fastapi import Depends, HTTPException, Path
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from camrent.database import MAX_ID, get_db
from camrent.models.user import User
from camrent.services.access import can_manage_listings, check_can_create_property, is_admin
from camrent.services.auth import decode_token_with_error

security = HTTPBearer(auto_error=False)

# Path id that fits the INTEGER key columns; larger values fail validation instead of the query
RowId = Annotated[int, Path(le=MAX_ID)]


def _user_from_credentials(db: Session, credentials: HTTPAuthorizationCredentials | None) -> User:
    if not credentials:
        raise HTTPException(status_code=401, detail="Not authenticated")
    token_str = (credentials.credentials or "").strip()
    payload, _ = decode_token_with_error(token_str)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token")
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    return _user_from_credentials(db, credentials)


def get_optional_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User | None:
    """Viewer for public routes; anonymous (or a bad token) resolves to None."""
    if not credentials:
        return None
    try:
        return _user_from_credentials(db, credentials)
    except HTTPException:
        return None


def require_landlord(current_user: User = Depends(get_current_user)) -> User:
    if not can_manage_listings(current_user):
        raise HTTPException(status_code=403, detail="Landlord role required")
    return current_user


def require_listing_privilege(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
) -> User:
    """Landlord must be verified and hold an active subscription (admins bypass)."""
    decision = check_can_create_property(current_user)
    if db.is_modified(current_user):
        # subscription just lapsed; persist the expired status
        db.commit()
    if not decision.allowed:
        raise HTTPException(status_code=403, detail=decision.as_detail())
    return current_user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not is_admin(current_user):
        raise HTTPException(status_code=403, detail="Admin privileges required")
    return current_user
