"""Public listing search, property detail, and the inquiry/review endpoints hanging off a property."""
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from camrent.config import get_settings
from camrent.database import get_db
from camrent.dependencies import RowId, get_optional_user
from camrent.models.user import User
from camrent.schemas.inquiry import InquiryCreate, InquiryResponse
from camrent.schemas.property import PropertyDetail, PropertyFilters, PropertyListResponse
from camrent.schemas.review import RatingStats, ReviewCreate, ReviewResponse
from camrent.services.inquiries import create_inquiry
from camrent.services.listings import get_property, list_properties, present_property
from camrent.services.notifications import inquiry_notification_args, send_inquiry_notification
from camrent.services.reviews import create_review, get_rating_stats, get_reviews_by_property

router = APIRouter(prefix="/properties", tags=["properties"])

# query parameter -> camelCase alias still sent by older clients
_FILTER_PARAMS = {
    "region_id": "regionId",
    "division_id": "divisionId",
    "property_type": "propertyType",
    "contract_type": "contractType",
    "min_price": "minPrice",
    "max_price": "maxPrice",
    "rooms": "rooms",
    "page": "page",
    "limit": "limit",
}


def property_filters(request: Request) -> PropertyFilters:
    """Build search filters from the query string. Empty values and "all" mean no filter."""
    params = request.query_params
    raw: dict = {}
    for name, alias in _FILTER_PARAMS.items():
        value = params.get(name, params.get(alias))
        if value is None:
            continue
        value = value.strip()
        if value and value.lower() != "all":
            raw[name] = value
    amenities: list[str] = []
    for value in params.getlist("amenities"):
        amenities.extend(part.strip() for part in value.split(",") if part.strip())
    raw["amenities"] = amenities
    raw.setdefault("limit", get_settings().default_page_size)
    try:
        return PropertyFilters.model_validate(raw)
    except ValidationError as e:
        raise RequestValidationError(
            [{**err, "loc": ("query", *err["loc"])} for err in e.errors(include_url=False, include_context=False)]
        )


@router.get("", response_model=PropertyListResponse)
def search_properties(
    filters: PropertyFilters = Depends(property_filters),
    db: Session = Depends(get_db),
    viewer: User | None = Depends(get_optional_user),
):
    limit = min(filters.limit, get_settings().max_page_size)
    props, total = list_properties(db, filters, max_limit=limit)
    result = PropertyListResponse(
        properties=[present_property(p, viewer) for p in props],
        total=total,
        page=filters.page,
        limit=limit,
    )
    if viewer is not None and db.is_modified(viewer):
        db.commit()
    return result


def _get_property_or_404(db: Session, property_id: int):
    prop = get_property(db, property_id)
    if not prop:
        raise HTTPException(status_code=404, detail="Property not found")
    return prop


@router.get("/{property_id}", response_model=PropertyDetail)
def property_detail(
    property_id: RowId,
    db: Session = Depends(get_db),
    viewer: User | None = Depends(get_optional_user),
):
    prop = _get_property_or_404(db, property_id)
    average_rating, review_count = get_rating_stats(db, prop.id)
    detail = present_property(prop, viewer, average_rating=average_rating, review_count=review_count)
    if viewer is not None and db.is_modified(viewer):
        db.commit()
    return detail


@router.post("/{property_id}/inquiries", response_model=InquiryResponse, status_code=201)
def submit_inquiry(
    property_id: RowId,
    data: InquiryCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    prop = get_property(db, property_id)
    if not prop or not prop.is_active:
        raise HTTPException(status_code=404, detail="Property not found")
    inquiry = create_inquiry(db, prop, data)
    background_tasks.add_task(send_inquiry_notification, *inquiry_notification_args(prop, inquiry))
    return inquiry


@router.get("/{property_id}/reviews", response_model=list[ReviewResponse])
def list_reviews(property_id: RowId, db: Session = Depends(get_db)):
    return get_reviews_by_property(db, property_id)


@router.post("/{property_id}/reviews", response_model=ReviewResponse, status_code=201)
def submit_review(
    property_id: RowId,
    data: ReviewCreate,
    db: Session = Depends(get_db),
    viewer: User | None = Depends(get_optional_user),
):
    return create_review(db, property_id, data, reviewer=viewer)


@router.get("/{property_id}/rating-stats", response_model=RatingStats)
def rating_stats(property_id: RowId, db: Session = Depends(get_db)):
    average_rating, review_count = get_rating_stats(db, property_id)
    return RatingStats(average_rating=average_rating, review_count=review_count)
