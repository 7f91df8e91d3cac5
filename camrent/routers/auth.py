"""Accounts: register, login, current user."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from camrent.database import get_db
from camrent.dependencies import get_current_user
from camrent.models.user import User
from camrent.schemas.auth import Token, UserCreate, UserLogin, UserResponse
from camrent.services.access import is_admin, refresh_subscription_status
from camrent.services.accounts import create_user, get_user_by_email
from camrent.services.auth import create_access_token, verify_password

router = APIRouter(prefix="/auth", tags=["auth"])


def user_to_response(user: User) -> UserResponse:
    """UserResponse with the effective admin flag (allow-listed emails count as admin)."""
    response = UserResponse.model_validate(user)
    response.is_admin = is_admin(user)
    return response


@router.post("/register", response_model=Token, status_code=201)
def register(data: UserCreate, db: Session = Depends(get_db)):
    user = create_user(db, data)
    return Token(access_token=create_access_token(user), user=user_to_response(user))


@router.post("/login", response_model=Token)
def login(data: UserLogin, db: Session = Depends(get_db)):
    user = get_user_by_email(db, data.email)
    if not user or not verify_password(data.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return Token(access_token=create_access_token(user), user=user_to_response(user))


@router.get("/user", response_model=UserResponse)
def me(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    refresh_subscription_status(current_user)
    if db.is_modified(current_user):
        db.commit()
    return user_to_response(current_user)
