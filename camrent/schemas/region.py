from pydantic import BaseModel


class RegionResponse(BaseModel):
    id: int
    name: str
    slug: str

    class Config:
        from_attributes = True


class DivisionResponse(BaseModel):
    id: int
    name: str
    slug: str
    region_id: int

    class Config:
        from_attributes = True
