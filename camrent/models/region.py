"""Static geographic reference data: the regions of Cameroon and their divisions."""
from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from camrent.database import Base


class Region(Base):
    __tablename__ = "regions"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(100), unique=True, nullable=False)

    divisions = relationship("Division", back_populates="region", order_by="Division.name")


class Division(Base):
    __tablename__ = "divisions"
    __table_args__ = (UniqueConstraint("region_id", "slug", name="uq_divisions_region_slug"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(100), nullable=False)
    region_id = Column(Integer, ForeignKey("regions.id"), nullable=False, index=True)

    region = relationship("Region", back_populates="divisions")
