"""
Weather cache FastAPI service.

Entrypoint: uvicorn services.weatherapi.main:app --host 0.0.0.0 --port 3000
       or:  python -m services.weatherapi
"""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from sqlalchemy.ext.asyncio import async_sessionmaker
from starlette.responses import JSONResponse

from services.weatherapi.config import settings
from services.weatherapi.db.engine import create_engine, init_schema
from services.weatherapi.middleware.cors import setup_cors
from services.weatherapi.middleware.sentry import setup_sentry
from services.weatherapi.routers import health, weather
from services.weatherapi.weather.fetcher import OpenWeatherFetcher
from services.weatherapi.weather.service import WeatherLookupService
from services.weatherapi.weather.store import SqlWeatherStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Any failure here aborts startup."""
    setup_sentry()

    app.state.settings = settings

    # Raises ConfigurationError without DATABASE_URL; init_schema raises if unreachable
    engine = create_engine(settings)
    try:
        await init_schema(engine)
    except Exception:
        await engine.dispose()
        raise

    # expire_on_commit=False: records are read off rows after the commit in SqlWeatherStore.create
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    app.state.db_engine = engine
    app.state.db_session_factory = session_factory
    app.state.lookup_service = WeatherLookupService(
        store=SqlWeatherStore(session_factory),
        fetcher=OpenWeatherFetcher.from_settings(settings),
    )

    logger.info("Weather API ready at /api/v1/weather (port %d)", settings.port)

    yield

    await engine.dispose()


app = FastAPI(
    title="Weather Cache API",
    version=settings.app_version,
    docs_url="/docs" if settings.environment == "development" else None,
    redoc_url=None,
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(weather.router)

# CORS (needs to be outermost to handle preflight)
setup_cors(app)


# Request ID injection
@app.middleware("http")
async def request_id_middleware(request: Request, call_next) -> Response:
    request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# -- Exception Handlers --

@app.exception_handler(404)
async def not_found_handler(request: Request, exc) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"message": "Resource not found."},
    )


@app.exception_handler(500)
async def internal_error_handler(request: Request, exc) -> JSONResponse:
    # Runs outside request_id_middleware, so the header is set here
    request_id = getattr(request.state, "request_id", None) or request.headers.get(
        "x-request-id", str(uuid.uuid4())
    )
    logger.error(
        "Unhandled error on %s %s (requestId=%s)",
        request.method,
        request.url.path,
        request_id,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error.", "error": str(exc)},
        headers={"X-Request-ID": request_id},
    )
