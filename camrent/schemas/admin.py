from datetime import datetime
from pydantic import BaseModel
from camrent.models.user import SubscriptionStatus, SubscriptionType, UserRole


class AdminUserUpdate(BaseModel):
    role: UserRole | None = None
    is_verified: bool | None = None
    is_admin: bool | None = None
    subscription_type: SubscriptionType | None = None
    subscription_status: SubscriptionStatus | None = None
    subscription_expires_at: datetime | None = None
