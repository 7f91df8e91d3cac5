"""
Database connection and session.

Schema source of truth: camrent.models. On startup, Base.metadata.create_all(bind=engine)
creates all tables and columns from the current models, then the region/division
reference data is seeded (see camrent.seed).
"""
from sqlalchemy import JSON, create_engine
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base, sessionmaker
from camrent.config import get_settings

settings = get_settings()
engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# Largest value an INTEGER primary key column holds on PostgreSQL
MAX_ID = 2**31 - 1

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
