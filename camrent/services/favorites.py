"""Renter bookmarks."""
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from camrent.models.favorite import Favorite
from camrent.models.property import Property


def get_favorites(db: Session, user_id: int) -> list[Favorite]:
    return (
        db.query(Favorite)
        .filter(Favorite.user_id == user_id)
        .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        .all()
    )


def add_favorite(db: Session, user_id: int, property_id: int) -> Favorite:
    """Idempotent: favouriting twice returns the existing bookmark."""
    if not db.query(Property.id).filter(Property.id == property_id, Property.is_active.is_(True)).first():
        raise HTTPException(status_code=404, detail="Property not found")
    existing = db.query(Favorite).filter(Favorite.user_id == user_id, Favorite.property_id == property_id).first()
    if existing:
        return existing
    favorite = Favorite(user_id=user_id, property_id=property_id)
    db.add(favorite)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return db.query(Favorite).filter(Favorite.user_id == user_id, Favorite.property_id == property_id).one()
    db.refresh(favorite)
    return favorite


def remove_favorite(db: Session, user_id: int, property_id: int) -> None:
    deleted = (
        db.query(Favorite)
        .filter(Favorite.user_id == user_id, Favorite.property_id == property_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        raise HTTPException(status_code=404, detail="Favorite not found")
    db.commit()
