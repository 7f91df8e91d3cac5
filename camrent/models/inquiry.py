"""One-shot contact-form submissions about a property."""
from sqlalchemy import Column, Integer, String, Text, ForeignKey, Enum as SQLEnum, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from camrent.database import Base
import enum


class InquiryStatus(str, enum.Enum):
    pending = "pending"
    responded = "responded"
    closed = "closed"


class Inquiry(Base):
    __tablename__ = "inquiries"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)

    guest_name = Column(String(255), nullable=False)
    guest_email = Column(String(255), nullable=False)
    guest_phone = Column(String(50), nullable=True)
    message = Column(Text, nullable=False)
    check_in_date = Column(DateTime(timezone=True), nullable=True)
    check_out_date = Column(DateTime(timezone=True), nullable=True)
    guests = Column(Integer, nullable=False, default=1)

    status = Column(SQLEnum(InquiryStatus), nullable=False, default=InquiryStatus.pending)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    property = relationship("Property", back_populates="inquiries")
