"""Property storage and search.

Public search only ever sees active listings. Every returned property is hydrated with
its landlord, region and division through inner joins, so a row missing any of them is
never returned.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from fastapi import HTTPException
from sqlalchemy import String, cast, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Query, Session, contains_eager

from camrent.models.conversation import Conversation
from camrent.models.property import Property
from camrent.models.region import Division, Region
from camrent.models.user import User
from camrent.schemas.property import (
    LandlordSummary,
    PropertyCreate,
    PropertyDetail,
    PropertyFilters,
    PropertyUpdate,
)
from camrent.services.access import can_view_contact_details

log = logging.getLogger(__name__)


def _hydrated(q: Query) -> Query:
    return (
        q.join(Property.landlord)
        .join(Property.region)
        .join(Property.division)
    )


def _hydrated_properties(db: Session) -> Query:
    return _hydrated(db.query(Property)).options(
        contains_eager(Property.landlord),
        contains_eager(Property.region),
        contains_eager(Property.division),
    )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _amenity_condition(db: Session, amenity: str):
    if db.get_bind().dialect.name == "postgresql":
        return cast(Property.amenities, JSONB).op("@>")(cast(json.dumps([amenity]), JSONB))
    # JSON text as written by SQLAlchemy's default serializer
    pattern = f"%{_escape_like(json.dumps(amenity))}%"
    return cast(Property.amenities, String).like(pattern, escape="\\")


def _filter_conditions(db: Session, filters: PropertyFilters) -> list:
    conditions = [Property.is_active.is_(True)]
    if filters.region_id is not None:
        conditions.append(Property.region_id == filters.region_id)
    if filters.division_id is not None:
        conditions.append(Property.division_id == filters.division_id)
    if filters.property_type is not None:
        conditions.append(Property.property_type == filters.property_type)
    if filters.contract_type is not None:
        conditions.append(Property.contract_type == filters.contract_type)
    if filters.rooms is not None:
        conditions.append(Property.rooms == filters.rooms)
    # Price filters apply to the monthly price only; a null price never matches
    if filters.min_price is not None or filters.max_price is not None:
        conditions.append(Property.price_per_month.isnot(None))
    if filters.min_price is not None:
        conditions.append(Property.price_per_month >= filters.min_price)
    if filters.max_price is not None:
        conditions.append(Property.price_per_month <= filters.max_price)
    for amenity in filters.amenities:
        conditions.append(_amenity_condition(db, amenity))
    return conditions


def list_properties(db: Session, filters: PropertyFilters, max_limit: int | None = None) -> tuple[list[Property], int]:
    """Return one page of active properties matching all filters, newest first, and the full match count.

    The count is taken in the same statement as the page (window function), so the two
    can never disagree. Only an empty page needs a separate count query.
    """
    limit = filters.limit if max_limit is None else min(filters.limit, max_limit)
    offset = (filters.page - 1) * limit
    conditions = _filter_conditions(db, filters)

    rows = (
        _hydrated_properties(db)
        .add_columns(func.count().over().label("total"))
        .filter(*conditions)
        .order_by(Property.created_at.desc(), Property.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    if rows:
        return [row[0] for row in rows], int(rows[0].total)

    total = _hydrated(db.query(func.count(Property.id)).select_from(Property)).filter(*conditions).scalar()
    return [], int(total or 0)


def get_property(db: Session, property_id: int) -> Property | None:
    """Single hydrated property. Inactive listings are returned too (direct links keep working)."""
    return _hydrated_properties(db).filter(Property.id == property_id).first()


def get_properties_by_landlord(db: Session, landlord_id: int) -> list[Property]:
    return (
        _hydrated_properties(db)
        .filter(Property.landlord_id == landlord_id)
        .order_by(Property.created_at.desc(), Property.id.desc())
        .all()
    )


def get_owned_property(db: Session, property_id: int, landlord_id: int) -> Property:
    """Owner-scoped lookup; 404 whether the property is missing or someone else's."""
    prop = db.query(Property).filter(Property.id == property_id, Property.landlord_id == landlord_id).first()
    if not prop:
        raise HTTPException(status_code=404, detail="Property not found")
    return prop


def _check_location(db: Session, region_id: int, division_id: int) -> None:
    division = db.query(Division).filter(Division.id == division_id).first()
    if not division:
        raise HTTPException(status_code=400, detail="Unknown division")
    if division.region_id != region_id:
        raise HTTPException(status_code=400, detail="Division does not belong to the selected region")


def create_property(db: Session, landlord: User, data: PropertyCreate) -> Property:
    _check_location(db, data.region_id, data.division_id)
    prop = Property(landlord_id=landlord.id, **data.model_dump())
    db.add(prop)
    db.commit()
    log.info("Property %s created by landlord %s", prop.id, landlord.id)
    return get_property(db, prop.id)


def update_property(db: Session, prop: Property, data: PropertyUpdate) -> Property:
    changes = data.model_dump(exclude_unset=True)
    # Explicit nulls on required columns are ignored
    for key in ("title", "description", "property_type", "contract_type", "region_id", "division_id", "is_active", "amenities", "images"):
        if key in changes and changes[key] is None:
            changes.pop(key)
    if "region_id" in changes or "division_id" in changes:
        _check_location(db, changes.get("region_id", prop.region_id), changes.get("division_id", prop.division_id))
    for key, value in changes.items():
        setattr(prop, key, value)
    prop.updated_at = datetime.now(timezone.utc)
    db.commit()
    return get_property(db, prop.id)


def has_active_conversation(db: Session, property_id: int) -> bool:
    return (
        db.query(Conversation)
        .filter(Conversation.property_id == property_id, Conversation.is_active.is_(True))
        .first()
        is not None
    )


def delete_property(db: Session, prop: Property) -> None:
    """Hard delete. Blocked while renters are still talking to the landlord about it;
    otherwise inquiries, reviews, favourites and closed conversations go with it."""
    if has_active_conversation(db, prop.id):
        raise HTTPException(
            status_code=409,
            detail="Cannot delete property: it has active conversations. Deactivate the listing instead.",
        )
    property_id = prop.id
    db.delete(prop)
    db.commit()
    log.info("Property %s deleted", property_id)


def get_regions(db: Session) -> list[Region]:
    return db.query(Region).order_by(Region.name).all()


def get_divisions_by_region(db: Session, region_id: int) -> list[Division]:
    if not db.query(Region).filter(Region.id == region_id).first():
        raise HTTPException(status_code=404, detail="Region not found")
    return db.query(Division).filter(Division.region_id == region_id).order_by(Division.name).all()


def present_property(
    prop: Property,
    viewer: User | None,
    *,
    average_rating: float | None = None,
    review_count: int | None = None,
) -> PropertyDetail:
    """Viewer-specific payload: landlord contact fields and the precise address are
    withheld from viewers without contact rights."""
    visible = can_view_contact_details(viewer, prop)
    landlord = LandlordSummary.model_validate(prop.landlord)
    detail = PropertyDetail.model_validate(
        {
            **{c.name: getattr(prop, c.name) for c in Property.__table__.columns},
            "landlord": landlord,
            "region": prop.region,
            "division": prop.division,
            "average_rating": average_rating,
            "review_count": review_count,
        },
        from_attributes=True,
    )
    if not visible:
        detail.address = None
        detail.landlord.email = None
        detail.landlord.phone_number = None
        detail.contact_details_hidden = True
    return detail
