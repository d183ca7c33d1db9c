# fieldops/models/presence.py
from __future__ import annotations

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Index

from ..db import Base


class VehiclePresence(Base):
    """
    One GPS-derived observation: was the vehicle inside the home-base
    geofence at ``timestamp``. Rows are written by the ingestion service
    and never modified here.
    """

    __tablename__ = "vehicle_presence"

    id = Column(Integer, primary_key=True, index=True)
    car_plate = Column(String, nullable=False)
    timestamp = Column(DateTime, nullable=False)
    was_near_base = Column(Boolean, nullable=False)

    __table_args__ = (
        Index("ix_vehicle_presence_plate_ts", "car_plate", "timestamp"),
    )
