"""Rental listings owned by landlords."""
from sqlalchemy import Column, Integer, String, Text, Boolean, Numeric, ForeignKey, Enum as SQLEnum, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from camrent.database import Base, JSONType
import enum


class PropertyType(str, enum.Enum):
    apartment = "apartment"
    guest_house = "guest_house"
    room = "room"
    studio = "studio"
    office_space = "office_space"
    commercial = "commercial"


class ContractType(str, enum.Enum):
    short_stay = "short_stay"
    long_stay = "long_stay"
    daily = "daily"
    monthly = "monthly"


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    landlord_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    property_type = Column(SQLEnum(PropertyType), nullable=False)
    contract_type = Column(SQLEnum(ContractType), nullable=False)

    # region_id is denormalized from the division for filtering
    region_id = Column(Integer, ForeignKey("regions.id"), nullable=False, index=True)
    division_id = Column(Integer, ForeignKey("divisions.id"), nullable=False, index=True)
    address = Column(Text, nullable=True)  # precise address, gated like landlord contact details

    # XAF; either may be null
    price_per_night = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    price_per_month = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    rooms = Column(Integer, nullable=True)
    size = Column(Integer, nullable=True)  # square meters

    amenities = Column(JSONType, nullable=False, default=list)
    images = Column(JSONType, nullable=False, default=list)  # ordered, first is the cover
    video_url = Column(String(500), nullable=True)

    # Soft removal: inactive listings never appear in public search
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    landlord = relationship("User", backref="properties")
    region = relationship("Region")
    division = relationship("Division")

    inquiries = relationship("Inquiry", back_populates="property", cascade="all, delete-orphan")
    reviews = relationship("Review", back_populates="property", cascade="all, delete-orphan")
    favorites = relationship("Favorite", back_populates="property", cascade="all, delete-orphan")
    conversations = relationship("Conversation", back_populates="property", cascade="all, delete-orphan")
