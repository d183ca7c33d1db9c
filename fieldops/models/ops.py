# fieldops/models/ops.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    Boolean,
    DateTime,
    Text,
)
from sqlalchemy.orm import validates

from ..db import Base
from .columns import JSONStringList, coerce_str_list


ASSIGNMENT_TYPES = ("Interventie", "Optimizare", "Deschidere")

STATUS_ACTIVE = "In Deplasare"
STATUS_FINALIZED = "Finalizat"
STATUS_CANCELLED = "Anulat"

WORKER_FREE = "Liber"
WORKER_ON_TRIP = "In Deplasare"


def blank_plate(value) -> bool:
    """Plates are opaque keys; only a missing or all-whitespace one is rejected."""
    return value is None or (isinstance(value, str) and not value.strip())


# ---------- Stores ----------

class Store(Base):
    __tablename__ = "stores"

    store_id = Column(Integer, primary_key=True, index=True)
    description = Column(String, nullable=True)
    city = Column(String, nullable=True)
    county = Column(String, nullable=True)
    address = Column(String, nullable=True)


# ---------- Workers ----------

class Worker(Base):
    __tablename__ = "workers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)

    # Liber / In Deplasare
    status = Column(String, nullable=False, default=WORKER_FREE)
    current_assignment_start = Column(DateTime, nullable=True)
    last_completion_date = Column(DateTime, nullable=True)
    total_hours = Column(Float, nullable=False, default=0.0)

    active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)


# ---------- Assignments (deplasari) ----------

class Assignment(Base):
    """
    A field trip: a team (lead + members) driving one vehicle to one or
    more stores. ``start_date``/``completion_date`` are the nominal dates;
    ``gps_*`` hold the telemetry-derived ones, null when unknown.
    """

    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String, nullable=False)

    # In Deplasare -> Finalizat (or Anulat)
    status = Column(String, nullable=False, default=STATUS_ACTIVE)

    team_lead = Column(String, nullable=True)
    members = Column(JSONStringList, nullable=False, default=list)
    car_plate = Column(String, nullable=True, index=True)

    store_number = Column(String, nullable=True)
    store_points = Column(JSONStringList, nullable=False, default=list)
    location = Column(String, nullable=True)
    city = Column(String, nullable=True)
    county = Column(String, nullable=True)

    start_date = Column(DateTime, nullable=True)
    completion_date = Column(DateTime, nullable=True)
    gps_start_date = Column(DateTime, nullable=True)
    gps_completion_date = Column(DateTime, nullable=True)

    km = Column(Float, nullable=True)
    driving_time = Column(Integer, nullable=True)  # minutes
    hours = Column(Float, nullable=True)

    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    @validates("car_plate")
    def _blank_plate_to_null(self, key, value):
        return None if blank_plate(value) else value

    @validates("members", "store_points")
    def _normalize_list(self, key, value):
        return coerce_str_list(value)

    @property
    def team(self) -> list[str]:
        """Lead first, then members, without duplicates."""
        names: list[str] = []
        for name in [self.team_lead, *(self.members or [])]:
            if name and name not in names:
                names.append(name)
        return names
