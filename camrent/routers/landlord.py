"""Landlord dashboard: own listings and the inquiries they received."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from camrent.database import get_db
from camrent.dependencies import RowId, require_landlord, require_listing_privilege
from camrent.models.user import User
from camrent.schemas.inquiry import InquiryResponse, InquiryStatusUpdate
from camrent.schemas.property import PropertyCreate, PropertyDetail, PropertyUpdate
from camrent.services.inquiries import get_inquiries_for_landlord, get_owned_inquiry
from camrent.services.listings import (
    create_property,
    delete_property,
    get_owned_property,
    get_properties_by_landlord,
    present_property,
    update_property,
)

router = APIRouter(prefix="/landlord", tags=["landlord"])


@router.get("/properties", response_model=list[PropertyDetail])
def my_properties(db: Session = Depends(get_db), current_user: User = Depends(require_landlord)):
    return [present_property(p, current_user) for p in get_properties_by_landlord(db, current_user.id)]


@router.post("/properties", response_model=PropertyDetail, status_code=201)
def add_property(
    data: PropertyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_listing_privilege),
):
    return present_property(create_property(db, current_user, data), current_user)


@router.put("/properties/{property_id}", response_model=PropertyDetail)
def edit_property(
    property_id: RowId,
    data: PropertyUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    prop = get_owned_property(db, property_id, current_user.id)
    return present_property(update_property(db, prop, data), current_user)


@router.delete("/properties/{property_id}")
def remove_property(
    property_id: RowId,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    prop = get_owned_property(db, property_id, current_user.id)
    delete_property(db, prop)
    return {"status": "deleted", "id": property_id}


@router.get("/inquiries", response_model=list[InquiryResponse])
def my_inquiries(db: Session = Depends(get_db), current_user: User = Depends(require_landlord)):
    return get_inquiries_for_landlord(db, current_user.id)


@router.put("/inquiries/{inquiry_id}", response_model=InquiryResponse)
def set_inquiry_status(
    inquiry_id: RowId,
    data: InquiryStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_landlord),
):
    inquiry = get_owned_inquiry(db, inquiry_id, current_user.id)
    inquiry.status = data.status
    db.commit()
    db.refresh(inquiry)
    return inquiry
