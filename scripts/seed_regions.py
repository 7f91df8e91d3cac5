"""Standalone script: create DB tables and seed the regions and divisions of Cameroon.

Run from project root:
  python scripts/seed_regions.py
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from camrent.database import engine, SessionLocal, Base
import camrent.models  # noqa: F401
from camrent.models.region import Division, Region
from camrent.seed import seed_regions

if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_regions(db)
        print(f"Seeded {db.query(Region).count()} regions, {db.query(Division).count()} divisions.")
    finally:
        db.close()
