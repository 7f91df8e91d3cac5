"""Auth schemas."""
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, model_validator
from camrent.models.user import SubscriptionStatus, SubscriptionType, UserRole


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)
    confirm_password: str = ""
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(default="", max_length=100)
    phone_number: str | None = None
    role: UserRole = UserRole.renter

    @model_validator(mode="after")
    def passwords_match(self):
        if self.confirm_password and self.confirm_password != self.password:
            raise ValueError("Passwords do not match")
        return self


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserResponse(BaseModel):
    id: int
    email: str
    role: UserRole
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    profile_image_url: str | None = None
    is_verified: bool = False
    is_admin: bool = False
    subscription_type: SubscriptionType | None = None
    subscription_status: SubscriptionStatus = SubscriptionStatus.inactive
    subscription_expires_at: datetime | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
