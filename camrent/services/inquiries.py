"""Contact-form inquiries about a listing."""
from fastapi import HTTPException
from sqlalchemy.orm import Session

from camrent.models.inquiry import Inquiry
from camrent.models.property import Property
from camrent.schemas.inquiry import InquiryCreate


def create_inquiry(db: Session, prop: Property, data: InquiryCreate) -> Inquiry:
    inquiry = Inquiry(property_id=prop.id, **data.model_dump())
    db.add(inquiry)
    db.commit()
    db.refresh(inquiry)
    return inquiry


def get_inquiries_for_landlord(db: Session, landlord_id: int) -> list[Inquiry]:
    return (
        db.query(Inquiry)
        .join(Property, Inquiry.property_id == Property.id)
        .filter(Property.landlord_id == landlord_id)
        .order_by(Inquiry.created_at.desc(), Inquiry.id.desc())
        .all()
    )


def get_owned_inquiry(db: Session, inquiry_id: int, landlord_id: int) -> Inquiry:
    inquiry = (
        db.query(Inquiry)
        .join(Property, Inquiry.property_id == Property.id)
        .filter(Inquiry.id == inquiry_id, Property.landlord_id == landlord_id)
        .first()
    )
    if not inquiry:
        raise HTTPException(status_code=404, detail="Inquiry not found")
    return inquiry
