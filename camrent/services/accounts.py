"""Account lifecycle: registration, profile edits and self-service deletion."""
import logging

from fastapi import HTTPException
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from camrent.models.conversation import Conversation
from camrent.models.favorite import Favorite
from camrent.models.property import Property
from camrent.models.review import Review
from camrent.models.user import User
from camrent.schemas.auth import UserCreate
from camrent.schemas.profile import ProfileUpdate
from camrent.services.auth import get_password_hash

log = logging.getLogger("uvicorn.error")


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def create_user(db: Session, data: UserCreate) -> User:
    email = normalize_email(data.email)
    if get_user_by_email(db, email):
        raise HTTPException(status_code=400, detail="Email already registered")
    user = User(
        email=email,
        hashed_password=get_password_hash(data.password),
        role=data.role,
        first_name=data.first_name.strip(),
        last_name=(data.last_name or "").strip() or None,
        phone_number=data.phone_number,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Email already registered")
    db.refresh(user)
    return user


def update_profile(db: Session, user: User, data: ProfileUpdate) -> User:
    for key, value in data.model_dump(exclude_unset=True).items():
        if key == "first_name" and value is None:
            continue
        setattr(user, key, value)
    db.commit()
    db.refresh(user)
    return user


def delete_account(db: Session, user: User) -> None:
    """Remove the user and everything hanging off them: favourites, conversations they take
    part in (with messages), reviews they wrote, and their listings with those listings'
    inquiries, reviews, favourites and conversations."""
    user_id = user.id
    db.query(Favorite).filter(Favorite.user_id == user_id).delete(synchronize_session=False)
    conversations = (
        db.query(Conversation)
        .filter(or_(Conversation.landlord_id == user_id, Conversation.renter_id == user_id))
        .all()
    )
    for conversation in conversations:
        db.delete(conversation)
    db.flush()
    db.query(Review).filter(Review.reviewer_id == user_id).delete(synchronize_session=False)
    for prop in db.query(Property).filter(Property.landlord_id == user_id).all():
        db.delete(prop)
    db.flush()
    db.delete(user)
    db.commit()
    log.info("Account %s deleted", user_id)
