# fieldops/app.py
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .db import Base, engine

from .routers import assignments as assignments_router
from .routers import dashboard as dashboard_router
from .routers import workers as workers_router
from .routers import stores as stores_router
from .routers import vehicles as vehicles_router
from .routers import ops_gps as ops_gps_router

# Import models so SQLAlchemy registers them
from . import models  # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(title="Field Operations Backend", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Ensure DB tables exist after models are imported
    Base.metadata.create_all(bind=engine)

    app.include_router(assignments_router.router)
    app.include_router(dashboard_router.router)
    app.include_router(workers_router.router)
    app.include_router(stores_router.router)
    app.include_router(vehicles_router.router)

    # Deferred GPS reconciliation (RQ)
    app.include_router(ops_gps_router.router)

    @app.get("/health")
    def health():
        return {"status": "ok", "home_base": settings.HOME_BASE_NAME}

    return app


app = create_app()
