"""Self-service account management: profile edits, subscription activation, account deletion."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from camrent.database import get_db
from camrent.dependencies import get_current_user
from camrent.models.user import User
from camrent.routers.auth import user_to_response
from camrent.schemas.auth import UserResponse
from camrent.schemas.profile import ProfileUpdate, SubscriptionRequest
from camrent.services.accounts import delete_account, update_profile
from camrent.services.subscriptions import activate_subscription

router = APIRouter(tags=["profile"])


@router.put("/profile", response_model=UserResponse)
def edit_profile(data: ProfileUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return user_to_response(update_profile(db, current_user, data))


@router.delete("/profile")
def delete_profile(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    delete_account(db, current_user)
    return {"status": "deleted"}


@router.post("/subscription", response_model=UserResponse)
def subscribe(data: SubscriptionRequest, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Record a paid monthly/yearly period. Payment capture happens before this call."""
    return user_to_response(activate_subscription(db, current_user, data.subscription_type))
