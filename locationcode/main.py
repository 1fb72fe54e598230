import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from locationcode.core.config import Settings, settings as default_settings
from locationcode.core.errors import InvalidQueryError
from locationcode.api.routes.codes import router as codes_router
from locationcode.data.airports_repo import AirportDirectory
from locationcode.data.bootstrap import ensure_reference_data

logger = logging.getLogger(__name__)


def load_directory(settings: Settings) -> AirportDirectory:
    """Fetch missing reference files, then load them. Bootstrap failures propagate."""
    ensure_reference_data(
        settings.data_dir,
        base_url=settings.data_base_url,
        timeout_seconds=settings.download_timeout_seconds,
    )
    directory = AirportDirectory(settings.data_dir, airport_types=settings.airport_types)
    errors = directory.load()
    for err in errors:
        logger.error(f"airport directory load error: {err}")
    return directory


def create_app(directory=None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.directory is None:
            app.state.directory = load_directory(settings)
        logger.info(f"{settings.app_name} ready with {len(app.state.directory)} airports")
        yield
        logger.info("shutting down server")

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.directory = directory
    app.state.policy = settings.policy

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidQueryError)
    async def invalid_query(request: Request, exc: InvalidQueryError):
        return PlainTextResponse(str(exc), status_code=400)

    @app.get("/healthz")
    async def healthz():
        return {"ok": True}

    app.include_router(codes_router, tags=["codes"])

    return app


app = create_app()
