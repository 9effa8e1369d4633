"""FastAPI application entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from udyam_intake import __version__
from udyam_intake.api.routes import forms, health, pincode
from udyam_intake.core.config import Settings, settings
from udyam_intake.core.constants import STEP_ID_KEY, FieldErrorKind
from udyam_intake.core.logging import get_logger, setup_logging
from udyam_intake.db.session import build_engine, build_session_factory, create_tables
from udyam_intake.forms.errors import ConfigurationError, PersistenceError, UnknownStepError, ValidationError
from udyam_intake.forms.provider import SchemaProvider
from udyam_intake.forms.results import FieldError
from udyam_intake.forms.service import StepValidationService
from udyam_intake.services.postal_lookup import PostalLookupClient
from udyam_intake.services.submission_store import SqlSubmissionStore

API_PREFIX = "/api"

logger = get_logger(__name__)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the application for ``app_settings`` (module settings by default)."""
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown lifecycle hooks."""
        setup_logging(app_settings.log_level, json_logs=app_settings.LOG_JSON)
        logger.info("Application starting", env=app_settings.APP_ENV)

        # A broken schema only fails the requests that need it
        provider = SchemaProvider.from_settings(app_settings)
        try:
            provider.get()
        except ConfigurationError as exc:
            logger.error("Form schema unavailable at startup", error=exc.message, **exc.details)

        engine = build_engine(app_settings)
        if app_settings.DB_CREATE_TABLES:
            try:
                await create_tables(engine)
            except (SQLAlchemyError, OSError) as exc:
                logger.error("Could not create tables; submissions will fail", error=str(exc))

        app.state.settings = app_settings
        app.state.schema_provider = provider
        app.state.validation_service = StepValidationService(
            provider,
            SqlSubmissionStore(build_session_factory(engine)),
            enforce_step_rules_on_submit=app_settings.SUBMIT_ENFORCE_STEP_RULES,
        )
        app.state.postal_lookup = PostalLookupClient(
            app_settings.POSTAL_LOOKUP_BASE_URL,
            timeout=app_settings.POSTAL_LOOKUP_TIMEOUT,
        )

        yield

        await engine.dispose()
        logger.info("Application shutting down")

    app = FastAPI(
        title="Udyam Intake API",
        description="Schema-driven multi-step registration form backend",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    app.include_router(health.router, prefix=API_PREFIX)
    app.include_router(forms.router, prefix=API_PREFIX)
    app.include_router(pincode.router, prefix=API_PREFIX)

    return app


# ─── Exception handlers ──────────────────────────────────

def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(UnknownStepError)
    async def unknown_step_handler(request: Request, exc: UnknownStepError):
        error = FieldError(field=STEP_ID_KEY, kind=FieldErrorKind.UNKNOWN_STEP, message=exc.message)
        return JSONResponse(
            status_code=400,
            content={"error": "unknown_step", "message": exc.message, "errors": [error.to_dict()]},
        )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=400,
            content={"errors": [e.to_dict() for e in exc.errors]},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Malformed request bodies are client errors (400), reported like field errors."""
        errors = []
        for err in exc.errors():
            loc = [str(part) for part in err.get("loc", ()) if part != "body"]
            kind = FieldErrorKind.REQUIRED if err.get("type") == "missing" else FieldErrorKind.TYPE
            errors.append({"field": ".".join(loc) or "body", "kind": kind.value, "message": err.get("msg", "")})
        return JSONResponse(status_code=400, content={"errors": errors})

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        logger.error("Form schema unavailable", path=request.url.path, error=exc.message, source=exc.source)
        return JSONResponse(
            status_code=500,
            content={"error": "configuration_error", "message": "Failed to load schema"},
        )

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError):
        return JSONResponse(
            status_code=500,
            content={"error": "database_error", "message": exc.message},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch-all error handler for unhandled exceptions."""
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "internal_server_error", "message": "An unexpected error occurred."},
        )


app = create_app()
