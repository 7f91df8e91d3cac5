"""Review actions addressed by review id."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from camrent.database import get_db
from camrent.dependencies import RowId, get_current_user
from camrent.models.user import User
from camrent.schemas.review import ReviewResponse
from camrent.services.reviews import delete_own_review, mark_helpful

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.delete("/{review_id}")
def delete_review(review_id: RowId, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    delete_own_review(db, review_id, current_user)
    return {"status": "deleted", "id": review_id}


@router.post("/{review_id}/helpful", response_model=ReviewResponse)
def helpful(review_id: RowId, db: Session = Depends(get_db)):
    return mark_helpful(db, review_id)
