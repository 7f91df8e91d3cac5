"""Reference data: regions of Cameroon and their divisions."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from camrent.database import get_db
from camrent.dependencies import RowId
from camrent.schemas.region import DivisionResponse, RegionResponse
from camrent.services.listings import get_divisions_by_region, get_regions

router = APIRouter(prefix="/regions", tags=["regions"])


@router.get("", response_model=list[RegionResponse])
def list_regions(db: Session = Depends(get_db)):
    return get_regions(db)


@router.get("/{region_id}/divisions", response_model=list[DivisionResponse])
def list_divisions(region_id: RowId, db: Session = Depends(get_db)):
    return get_divisions_by_region(db, region_id)
