"""
Hospital Administration Dashboard API
Patients, appointments, doctors, pharmacy, laboratory, billing, staff and wards.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import actions, dashboard, references, reports, wards
from .api.crud import build_resource_routers
from .core.config import settings
from .core.exceptions import (
    BedStateError,
    EntityNotFoundError,
    InvalidEntityError,
    UnknownSliceError,
)
from .services.report_generator import ReportHistory
from .store.store import AppStore, create_store

logging.basicConfig(level=settings.LOG_LEVEL)


def _invalid_entity(request: Request, exc: InvalidEntityError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc), "errors": exc.errors})


def _bed_state(request: Request, exc: BedStateError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


def _not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


def _unknown_slice(request: Request, exc: UnknownSliceError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def create_app(store: Optional[AppStore] = None) -> FastAPI:
    """
    Build the API around ``store``. Without one, a fresh store is created
    and seeded with demo fixtures when DEV_FIXTURES_ENABLED is set.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="REST boundary over the in-memory hospital administration store.",
        version=settings.VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.store = store if store is not None else create_store()
    app.state.report_history = ReportHistory()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InvalidEntityError, _invalid_entity)
    app.add_exception_handler(BedStateError, _bed_state)
    app.add_exception_handler(EntityNotFoundError, _not_found)
    app.add_exception_handler(UnknownSliceError, _unknown_slice)

    # Action routes first so /<resource>/{id}/<action> is matched before the
    # generic collection routes.
    app.include_router(actions.router, prefix="/api")
    app.include_router(wards.router, prefix="/api")
    app.include_router(dashboard.router, prefix="/api")
    app.include_router(reports.router, prefix="/api")
    app.include_router(references.router, prefix="/api")
    for router in build_resource_routers():
        app.include_router(router, prefix="/api")

    @app.get("/health")
    def health_check():
        return {"status": "healthy", "service": settings.APP_NAME, "version": settings.VERSION}

    return app


app = create_app()
