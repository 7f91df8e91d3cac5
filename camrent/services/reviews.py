"""Reviews and rating aggregates."""
from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from camrent.models.property import Property
from camrent.models.review import Review
from camrent.models.user import User
from camrent.schemas.review import ReviewCreate, ReviewModeration


def create_review(db: Session, property_id: int, data: ReviewCreate, reviewer: User | None = None) -> Review:
    if not db.query(Property.id).filter(Property.id == property_id).first():
        raise HTTPException(status_code=404, detail="Property not found")
    review = Review(
        property_id=property_id,
        reviewer_id=reviewer.id if reviewer else None,
        **data.model_dump(),
    )
    db.add(review)
    db.commit()
    db.refresh(review)
    return review


def get_reviews_by_property(db: Session, property_id: int) -> list[Review]:
    return (
        db.query(Review)
        .options(joinedload(Review.reviewer))
        .filter(Review.property_id == property_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )


def get_rating_stats(db: Session, property_id: int) -> tuple[float, int]:
    """(average rating rounded to one decimal, review count); (0.0, 0) when unreviewed."""
    avg, count = (
        db.query(func.coalesce(func.avg(Review.rating), 0), func.count(Review.id))
        .filter(Review.property_id == property_id)
        .one()
    )
    return round(float(avg or 0) * 10) / 10, int(count or 0)


def delete_own_review(db: Session, review_id: int, user: User) -> None:
    review = db.query(Review).filter(Review.id == review_id, Review.reviewer_id == user.id).first()
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")
    db.delete(review)
    db.commit()


def _get_review(db: Session, review_id: int) -> Review:
    review = db.query(Review).filter(Review.id == review_id).first()
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")
    return review


def mark_helpful(db: Session, review_id: int) -> Review:
    review = _get_review(db, review_id)
    # Increment in SQL so concurrent votes are not lost
    db.query(Review).filter(Review.id == review_id).update(
        {Review.helpful_count: Review.helpful_count + 1}, synchronize_session=False
    )
    db.commit()
    db.refresh(review)
    return review


def moderate_review(db: Session, review_id: int, data: ReviewModeration) -> Review:
    review = _get_review(db, review_id)
    for key, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(review, key, value)
    db.commit()
    db.refresh(review)
    return review
