"""Property schemas: create/update payloads, search filters, and viewer-dependent detail payloads."""
from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from camrent.database import MAX_ID
from camrent.models.property import ContractType, PropertyType
from camrent.schemas.region import DivisionResponse, RegionResponse

# Largest price a Numeric(10, 2) column stores
MAX_PRICE = 99_999_999.99


def _dedupe(values: list[str] | None) -> list[str] | None:
    """Strip blanks and repeated entries, keeping first-seen order."""
    if values is None:
        return None
    seen: list[str] = []
    for v in values:
        v = (v or "").strip()
        if v and v not in seen:
            seen.append(v)
    return seen


class PropertyCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    property_type: PropertyType
    contract_type: ContractType
    region_id: int = Field(le=MAX_ID)
    division_id: int = Field(le=MAX_ID)
    address: str | None = None
    price_per_night: float | None = Field(default=None, ge=0, le=MAX_PRICE)
    price_per_month: float | None = Field(default=None, ge=0, le=MAX_PRICE)
    rooms: int | None = Field(default=None, ge=0, le=MAX_ID)
    size: int | None = Field(default=None, ge=0, le=MAX_ID)
    amenities: list[str] = []
    images: list[str] = []
    video_url: str | None = None
    is_active: bool = True

    @field_validator("amenities")
    @classmethod
    def unique_amenities(cls, v: list[str]) -> list[str]:
        return _dedupe(v)


class PropertyUpdate(BaseModel):
    """All optional; only provided fields are updated."""
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    property_type: PropertyType | None = None
    contract_type: ContractType | None = None
    region_id: int | None = Field(default=None, le=MAX_ID)
    division_id: int | None = Field(default=None, le=MAX_ID)
    address: str | None = None
    price_per_night: float | None = Field(default=None, ge=0, le=MAX_PRICE)
    price_per_month: float | None = Field(default=None, ge=0, le=MAX_PRICE)
    rooms: int | None = Field(default=None, ge=0, le=MAX_ID)
    size: int | None = Field(default=None, ge=0, le=MAX_ID)
    amenities: list[str] | None = None
    images: list[str] | None = None
    video_url: str | None = None
    is_active: bool | None = None

    @field_validator("amenities")
    @classmethod
    def unique_amenities(cls, v: list[str] | None) -> list[str] | None:
        return _dedupe(v)


class PropertyFilters(BaseModel):
    """Search filters for the public listing. All predicates are ANDed."""
    region_id: int | None = Field(default=None, le=MAX_ID)
    division_id: int | None = Field(default=None, le=MAX_ID)
    property_type: PropertyType | None = None
    contract_type: ContractType | None = None
    min_price: float | None = Field(default=None, ge=0)
    max_price: float | None = Field(default=None, ge=0)
    rooms: int | None = Field(default=None, ge=0, le=MAX_ID)
    amenities: list[str] = []
    page: int = Field(default=1, ge=1, le=MAX_ID)
    limit: int = Field(default=12, ge=1)


class PropertyResponse(BaseModel):
    id: int
    landlord_id: int
    title: str
    description: str
    property_type: PropertyType
    contract_type: ContractType
    region_id: int
    division_id: int
    address: str | None = None
    price_per_night: float | None = None
    price_per_month: float | None = None
    rooms: int | None = None
    size: int | None = None
    amenities: list[str] = []
    images: list[str] = []
    video_url: str | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class LandlordSummary(BaseModel):
    id: int
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    is_verified: bool = False
    # Withheld (None) unless the viewer may see contact details
    email: str | None = None
    phone_number: str | None = None

    class Config:
        from_attributes = True


class PropertyDetail(PropertyResponse):
    landlord: LandlordSummary
    region: RegionResponse
    division: DivisionResponse
    contact_details_hidden: bool = False
    average_rating: float | None = None
    review_count: int | None = None


class PropertyListResponse(BaseModel):
    properties: list[PropertyDetail]
    total: int
    page: int
    limit: int
