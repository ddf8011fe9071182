"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from dentalcare.routers import get_api_router
from dentalcare.services.clinic import ClinicStore
from dentalcare.services.errors import PersistenceError
from dentalcare.services.identity import IdentityStore
from dentalcare.services.storage import build_storage
from dentalcare.utils.config import Settings, get_settings

LOGGER = logging.getLogger(__name__)


def build_stores(settings: Settings) -> tuple[IdentityStore, ClinicStore]:
    """Construct both stores over the configured storage backend."""

    storage = build_storage(settings)
    clinic_store = ClinicStore(
        storage,
        clinic_timezone=settings.clinic_timezone,
        seed_on_first_load=settings.seed_on_first_load,
    )
    identity_store = IdentityStore(storage, seed_on_first_load=settings.seed_on_first_load)

    dangling = identity_store.dangling_patient_links(p.id for p in clinic_store.patients())
    for user in dangling:
        LOGGER.warning("User %s links to missing patient %s", user.id, user.patient_id)

    return identity_store, clinic_store


def create_app(
    settings: Optional[Settings] = None,
    *,
    identity_store: Optional[IdentityStore] = None,
    clinic_store: Optional[ClinicStore] = None,
) -> FastAPI:
    """Create the application; stores are built on startup unless supplied."""

    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "clinic_store", None) is None:
            app.state.identity_store, app.state.clinic_store = build_stores(settings)
        yield

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.state.identity_store = identity_store
    app.state.clinic_store = clinic_store
    app.include_router(get_api_router())

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
        LOGGER.error("Persistence failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Storage unavailable; changes were not saved"},
        )

    @app.get("/health")
    def health_check() -> dict[str, str]:
        """Return service health status."""

        return {"status": "ok"}

    @app.get("/version")
    def version() -> dict[str, str]:
        """Return application version metadata."""

        return {"version": settings.app_version}

    return app


logging.basicConfig(level=get_settings().log_level)

app = create_app()
