import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .db.schema import init_db
from .db.storage import KeyValueStore
from .routers import converter, health, rates
from .services.history import HistoryStore
from .services.rates.base import RateProvider
from .services.rates.providers import make_rate_provider
from .services.session import ConverterSession


def build_session(
    settings: Settings, provider: RateProvider | None = None
) -> ConverterSession:
    history_store = HistoryStore.from_settings(
        KeyValueStore(settings.db_path), settings  # type: ignore[arg-type]
    )
    provider = provider or make_rate_provider(settings.exchange_rate_provider, settings)
    return ConverterSession(provider, history_store)


def create_app(
    settings_override: Settings | None = None, provider: RateProvider | None = None
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp DB). Falls back to cached get_settings().
    provider: inject a rate provider instead of the configured one.
    """
    settings = settings_override or get_settings()
    settings.init_post_load()
    init_logging(debug=settings.debug)

    try:
        init_db(settings.db_path)  # type: ignore[arg-type]
    except Exception:
        # Failing to init storage is fatal; re-raise after logging
        logging.getLogger("currency_converter").exception("failed to initialize storage")
        raise

    session = build_session(settings, provider)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await session.start()
        yield

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.session = session

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.not_found_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(errors.FetchError, errors.fetch_error_handler)
    app.add_exception_handler(errors.RatesUnavailableError, errors.rates_unavailable_handler)
    app.add_exception_handler(errors.NotRecordableError, errors.not_recordable_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(rates.router)
    app.include_router(converter.router)

    @app.get("/")
    async def root():
        return {"message": "Currency Converter API", "version": settings.version}

    return app


app = create_app()
