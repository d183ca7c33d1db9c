# fieldops/models/__init__.py

from .presence import VehiclePresence

from .ops import (
    Assignment,
    Store,
    Worker,
    ASSIGNMENT_TYPES,
    STATUS_ACTIVE,
    STATUS_FINALIZED,
    STATUS_CANCELLED,
    WORKER_FREE,
    WORKER_ON_TRIP,
)

__all__ = [
    "VehiclePresence",
    "Assignment",
    "Store",
    "Worker",
    "ASSIGNMENT_TYPES",
    "STATUS_ACTIVE",
    "STATUS_FINALIZED",
    "STATUS_CANCELLED",
    "WORKER_FREE",
    "WORKER_ON_TRIP",
]
