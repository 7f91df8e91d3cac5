"""Landlord subscriptions: activation and the daily expiry sweep.

Payment capture happens upstream; activation here only records the paid period.
"""
import calendar
import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from camrent.database import SessionLocal
from camrent.models.user import SubscriptionStatus, SubscriptionType, User
from camrent.services.access import as_utc

log = logging.getLogger("uvicorn.error")


def add_months(dt: datetime, months: int) -> datetime:
    """Same day-of-month `months` later, clamped to the last day of a shorter month."""
    month_index = dt.month - 1 + months
    year = dt.year + month_index // 12
    month = month_index % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def subscription_period_end(start: datetime, subscription_type: SubscriptionType) -> datetime:
    return add_months(start, 12 if subscription_type == SubscriptionType.yearly else 1)


def activate_subscription(
    db: Session, user: User, subscription_type: SubscriptionType, now: datetime | None = None
) -> User:
    """Start (or extend) a paid period. A renewal while still active extends from the current expiry."""
    now = now or datetime.now(timezone.utc)
    start = now
    if (
        user.subscription_status == SubscriptionStatus.active
        and user.subscription_expires_at is not None
        and as_utc(user.subscription_expires_at) > now
    ):
        start = as_utc(user.subscription_expires_at)
    user.subscription_type = subscription_type
    user.subscription_status = SubscriptionStatus.active
    user.subscription_expires_at = subscription_period_end(start, subscription_type)
    db.commit()
    db.refresh(user)
    log.info("Subscription %s activated for user %s until %s", subscription_type.value, user.id, user.subscription_expires_at)
    return user


def expire_subscriptions(db: Session, now: datetime | None = None) -> int:
    """Mark every active subscription whose expiry has passed as expired. Returns the number changed."""
    now = now or datetime.now(timezone.utc)
    updated = (
        db.query(User)
        .filter(
            User.subscription_status == SubscriptionStatus.active,
            User.subscription_expires_at.isnot(None),
            User.subscription_expires_at < now,
        )
        .update({User.subscription_status: SubscriptionStatus.expired}, synchronize_session=False)
    )
    db.commit()
    return int(updated or 0)


def run_subscription_expiry_job() -> None:
    """Scheduler entry point; owns its own session."""
    db = SessionLocal()
    try:
        count = expire_subscriptions(db)
        if count:
            log.info("Subscription expiry job: %s subscription(s) expired", count)
    except Exception:
        db.rollback()
        log.exception("Subscription expiry job failed")
    finally:
        db.close()
