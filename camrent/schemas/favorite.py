from datetime import datetime
from pydantic import BaseModel
from camrent.schemas.property import PropertyDetail


class FavoriteResponse(BaseModel):
    id: int
    property_id: int
    created_at: datetime | None = None
    property: PropertyDetail
