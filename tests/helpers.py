from datetime import datetime

from fieldops.models import VehiclePresence


def at(hhmm: str, day: str = "2026-03-10") -> datetime:
    return datetime.fromisoformat(f"{day}T{hhmm}:00")


def add_samples(db, plate: str, samples) -> None:
    """``samples``: iterable of (datetime, was_near_base)."""
    db.add_all(
        [
            VehiclePresence(car_plate=plate, timestamp=ts, was_near_base=near)
            for ts, near in samples
        ]
    )
    db.commit()
