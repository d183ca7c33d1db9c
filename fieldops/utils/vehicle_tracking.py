# fieldops/utils/vehicle_tracking.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import settings
from ..models.ops import blank_plate
from ..schemas.vehicle_tracking import VehicleTimestamps
from .presence_log import first_departure_after, first_return_after

logger = logging.getLogger(__name__)


def get_vehicle_timestamps(
    db: Session,
    car_plate: Optional[str],
    assignment_created_at: datetime,
) -> VehicleTimestamps:
    """
    Derive an assignment's real start/completion from vehicle presence.

    - real_start_date: first sample OUTSIDE the home base strictly after
      ``assignment_created_at``
    - real_completion_date: first sample BACK at the home base strictly
      after real_start_date

    Never raises: a missing plate, a malformed argument or a storage error
    all yield an empty result, and telemetry stays an optional enrichment
    for the caller. The session is rolled back on storage errors, so
    callers should reconcile before staging their own changes.
    """
    if blank_plate(car_plate):
        logger.info("No car plate provided, skipping vehicle timestamp lookup")
        return VehicleTimestamps.empty()

    plate = car_plate
    try:
        if not isinstance(plate, str):
            raise TypeError(f"car plate must be a string, got {type(plate).__name__}")
        if not isinstance(assignment_created_at, datetime):
            raise TypeError("assignment_created_at must be a datetime")

        real_start = first_departure_after(db, plate, assignment_created_at)
        if real_start is None:
            logger.info(
                "No departure from %s found for car %s after %s",
                settings.HOME_BASE_NAME,
                plate,
                assignment_created_at.isoformat(),
            )
            return VehicleTimestamps.empty()

        real_completion = first_return_after(db, plate, real_start)
        logger.info(
            "GPS window for car %s: start=%s return=%s",
            plate,
            real_start.isoformat(),
            real_completion.isoformat() if real_completion else "not returned yet",
        )
        return VehicleTimestamps(
            real_start_date=real_start,
            real_completion_date=real_completion,
        )
    except SQLAlchemyError:
        logger.exception("Presence log lookup failed for car %s", plate)
        db.rollback()
    except (TypeError, ValueError):
        logger.exception("Invalid vehicle timestamp lookup for car %r", plate)
    return VehicleTimestamps.empty()
