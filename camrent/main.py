"""Camrent - rental marketplace API for Cameroon."""
import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from camrent.config import get_settings
from camrent.database import Base, SessionLocal, engine
from camrent.errors import ErrorHandlerMiddleware, ValidationErrorHandler
# Import models so Base.metadata has all tables before create_all
from camrent.models import (  # noqa: F401
    User, Region, Division, Property, Inquiry, Review, Conversation, Message, Favorite,
)
from camrent.routers import admin, auth, conversations, favorites, landlord, profile, properties, regions, reviews, ws
from camrent.seed import seed_regions

log = logging.getLogger("uvicorn.error")

settings = get_settings()
app = FastAPI(title=settings.app_name, debug=settings.debug)

app.add_exception_handler(RequestValidationError, ValidationErrorHandler())
app.add_middleware(ErrorHandlerMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module in (auth, regions, properties, landlord, reviews, favorites, conversations, profile, admin):
    app.include_router(module.router, prefix="/api")
app.include_router(conversations.messages_router, prefix="/api")
app.include_router(ws.router)

_scheduler = None


@app.on_event("startup")
def startup():
    global _scheduler
    if not (settings.mailgun_api_key and settings.mailgun_domain):
        log.info("[Mailgun] Not configured - inquiry emails will be skipped; set MAILGUN_API_KEY and MAILGUN_DOMAIN")
    try:
        Base.metadata.create_all(bind=engine)
        db = SessionLocal()
        try:
            seed_regions(db)
        finally:
            db.close()
    except Exception as e:
        log.warning("Database startup failed (tables/seed skipped). Check DATABASE_URL. Error: %s", e)

    if settings.subscription_cron_enabled:
        from apscheduler.schedulers.background import BackgroundScheduler
        from camrent.services.subscriptions import run_subscription_expiry_job

        _scheduler = BackgroundScheduler(timezone="UTC")
        _scheduler.add_job(run_subscription_expiry_job, "cron", hour=0, minute=5)
        _scheduler.start()
        log.info("Subscription expiry job scheduled daily at 00:05 UTC")


@app.on_event("shutdown")
def shutdown():
    if _scheduler is not None:
        _scheduler.shutdown(wait=False)


@app.get("/")
def root():
    return {"app": settings.app_name, "status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
