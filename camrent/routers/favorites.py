"""Favourites of the signed-in user."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from camrent.database import get_db
from camrent.dependencies import RowId, get_current_user
from camrent.models.user import User
from camrent.schemas.favorite import FavoriteResponse
from camrent.services.favorites import add_favorite, get_favorites, remove_favorite
from camrent.services.listings import get_property, present_property

router = APIRouter(prefix="/favorites", tags=["favorites"])


def _to_response(db: Session, favorite, viewer: User) -> FavoriteResponse:
    prop = get_property(db, favorite.property_id)
    return FavoriteResponse(
        id=favorite.id,
        property_id=favorite.property_id,
        created_at=favorite.created_at,
        property=present_property(prop, viewer),
    )


@router.get("", response_model=list[FavoriteResponse])
def list_favorites(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    favorites = get_favorites(db, current_user.id)
    result = [_to_response(db, f, current_user) for f in favorites]
    if db.is_modified(current_user):
        db.commit()
    return result


@router.post("/{property_id}", response_model=FavoriteResponse, status_code=201)
def favorite_property(property_id: RowId, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    favorite = add_favorite(db, current_user.id, property_id)
    return _to_response(db, favorite, current_user)


@router.delete("/{property_id}")
def unfavorite_property(property_id: RowId, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    remove_favorite(db, current_user.id, property_id)
    return {"status": "deleted", "property_id": property_id}
