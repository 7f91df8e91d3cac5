"""Access control: who may list properties and who may see landlord contact details.

Every decision is recomputed from the user row on each call. Nothing here is cached,
so an admin override or a lapsed subscription takes effect on the very next request.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from camrent.config import get_settings
from camrent.models.property import Property
from camrent.models.user import SubscriptionStatus, User, UserRole


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    message: str = ""
    subscription_required: bool = False
    verification_required: bool = False
    subscription_expired: bool = False

    def as_detail(self) -> dict:
        """Body for a structured 403 that the client uses to route to the upgrade flow."""
        return {
            "message": self.message,
            "subscription_required": self.subscription_required,
            "verification_required": self.verification_required,
            "subscription_expired": self.subscription_expired,
        }


ALLOWED = AccessDecision(allowed=True)


def as_utc(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are always UTC
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def is_admin(user: User | None) -> bool:
    if user is None:
        return False
    if user.is_admin:
        return True
    allow_list = {e.lower() for e in get_settings().admin_emails}
    return (user.email or "").lower() in allow_list


def refresh_subscription_status(user: User, now: datetime | None = None) -> SubscriptionStatus:
    """Flip an active subscription past its expiry to `expired`. The caller commits."""
    now = now or datetime.now(timezone.utc)
    if (
        user.subscription_status == SubscriptionStatus.active
        and user.subscription_expires_at is not None
        and as_utc(user.subscription_expires_at) < now
    ):
        user.subscription_status = SubscriptionStatus.expired
    return user.subscription_status


def has_active_subscription(user: User | None, now: datetime | None = None) -> bool:
    if user is None:
        return False
    return refresh_subscription_status(user, now) == SubscriptionStatus.active


def check_can_create_property(user: User, now: datetime | None = None) -> AccessDecision:
    if is_admin(user):
        return ALLOWED
    status = refresh_subscription_status(user, now)
    subscribed = status == SubscriptionStatus.active
    verified = bool(user.is_verified)
    if subscribed and verified:
        return ALLOWED
    if status == SubscriptionStatus.expired:
        message = "Subscription expired. Please renew to continue listing properties."
    elif not subscribed and not verified:
        message = "Active subscription and verification required to create properties"
    elif not subscribed:
        message = "Active subscription required to create properties"
    else:
        message = "Account verification required to create properties"
    return AccessDecision(
        allowed=False,
        message=message,
        subscription_required=not subscribed,
        verification_required=not verified,
        subscription_expired=status == SubscriptionStatus.expired,
    )


def can_manage_listings(user: User) -> bool:
    """Landlord dashboard routes: landlords, plus admins acting on their own listings."""
    return user.role == UserRole.landlord or is_admin(user)


def can_view_contact_details(viewer: User | None, prop: Property, now: datetime | None = None) -> bool:
    if viewer is None:
        return False
    if is_admin(viewer) or viewer.id == prop.landlord_id:
        return True
    return has_active_subscription(viewer, now)
