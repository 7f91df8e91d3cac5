"""Admin overrides: user verification/subscription/role and review moderation."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from camrent.database import get_db
from camrent.dependencies import RowId, require_admin
from camrent.models.user import User
from camrent.routers.auth import user_to_response
from camrent.schemas.admin import AdminUserUpdate
from camrent.schemas.auth import UserResponse
from camrent.schemas.review import ReviewModeration, ReviewResponse
from camrent.services.reviews import moderate_review

router = APIRouter(prefix="/admin", tags=["admin"])


@router.put("/users/{user_id}", response_model=UserResponse)
def update_user(
    user_id: RowId,
    data: AdminUserUpdate,
    db: Session = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    for key, value in data.model_dump(exclude_unset=True).items():
        # only the subscription fields are nullable
        if value is None and key not in ("subscription_type", "subscription_expires_at"):
            continue
        setattr(user, key, value)
    db.commit()
    db.refresh(user)
    return user_to_response(user)


@router.put("/reviews/{review_id}", response_model=ReviewResponse)
def update_review(
    review_id: RowId,
    data: ReviewModeration,
    db: Session = Depends(get_db),
    _admin: User = Depends(require_admin),
):
    return moderate_review(db, review_id, data)
