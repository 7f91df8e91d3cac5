from pydantic import BaseModel, Field
from camrent.models.user import SubscriptionType


class ProfileUpdate(BaseModel):
    """Self-service profile fields. Role, verification and subscription are not editable here."""
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    phone_number: str | None = None
    profile_image_url: str | None = None
    national_id_front: str | None = None
    national_id_back: str | None = None


class SubscriptionRequest(BaseModel):
    subscription_type: SubscriptionType
