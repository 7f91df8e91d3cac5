from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, model_validator
from camrent.models.inquiry import InquiryStatus
from camrent.services.access import as_utc


class InquiryCreate(BaseModel):
    guest_name: str = Field(min_length=1, max_length=255)
    guest_email: EmailStr
    guest_phone: str | None = None
    message: str = Field(min_length=1)
    check_in_date: datetime | None = None
    check_out_date: datetime | None = None
    guests: int = Field(default=1, ge=1, le=1000)

    @model_validator(mode="after")
    def dates_in_order(self):
        # Naive datetimes are taken as UTC so a mixed pair still compares
        if self.check_in_date and self.check_out_date and as_utc(self.check_out_date) < as_utc(self.check_in_date):
            raise ValueError("check_out_date must not be before check_in_date")
        return self


class InquiryResponse(BaseModel):
    id: int
    property_id: int
    guest_name: str
    guest_email: str
    guest_phone: str | None = None
    message: str
    check_in_date: datetime | None = None
    check_out_date: datetime | None = None
    guests: int
    status: InquiryStatus
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class InquiryStatusUpdate(BaseModel):
    status: InquiryStatus
