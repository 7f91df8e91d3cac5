"""Users: renters and landlords, with verification and subscription state."""
from sqlalchemy import Column, Integer, String, Enum as SQLEnum, DateTime, Boolean
from sqlalchemy.sql import func
from camrent.database import Base
import enum


class UserRole(str, enum.Enum):
    renter = "renter"
    landlord = "landlord"


class SubscriptionType(str, enum.Enum):
    monthly = "monthly"
    yearly = "yearly"


class SubscriptionStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"
    expired = "expired"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.renter)

    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    phone_number = Column(String(50), nullable=True)
    profile_image_url = Column(String(500), nullable=True)

    # Identity documents uploaded by landlords; reviewed before is_verified is set
    national_id_front = Column(String(500), nullable=True)
    national_id_back = Column(String(500), nullable=True)
    is_verified = Column(Boolean, default=False, nullable=False)

    is_admin = Column(Boolean, default=False, nullable=False)

    subscription_type = Column(SQLEnum(SubscriptionType), nullable=True)
    subscription_status = Column(SQLEnum(SubscriptionStatus), nullable=False, default=SubscriptionStatus.inactive)
    subscription_expires_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p).strip()
