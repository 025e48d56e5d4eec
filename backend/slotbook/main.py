"""
FastAPI app entrypoint.

The slot store and the services around it are built once in lifespan and shared by
reference through app.state; nothing talks to the database through a module global.
"""
import logging
import threading
from contextlib import asynccontextmanager
from pathlib import Path

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import inspect
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load .env from backend/ before any settings are read
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from slotbook.api.routes import bookings, slots, subjects
from slotbook.config import Settings, settings as default_settings
from slotbook.core.constants import ROLLING_WINDOW_JOB_ID
from slotbook.core.errors import error_body
from slotbook.db.session import create_db_engine, make_session_factory
from slotbook.db.tables import ALL_TABLE_NAMES
from slotbook.scheduler.calendar_job import run_rolling_window_job
from slotbook.services.booking_service import BookingEngine
from slotbook.services.query_service import QueryService
from slotbook.services.slot_store import SlotStore
from slotbook.services.subjects import SubjectDirectory

logger = logging.getLogger(__name__)

# Dev frontends; extend with CORS_ORIGINS (comma-separated)
_DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


def _check_schema(engine) -> None:
    missing = set(ALL_TABLE_NAMES) - set(inspect(engine).get_table_names())
    if missing:
        raise RuntimeError(
            f"Database tables not found: {sorted(missing)}. Run `alembic upgrade head` from backend/ first."
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = create_db_engine(settings.database_url)
        _check_schema(engine)
        session_factory = make_session_factory(engine)
        store = SlotStore(session_factory)
        directory = SubjectDirectory(session_factory)
        app.state.slot_store = store
        app.state.subject_directory = directory
        app.state.booking_engine = BookingEngine(store, directory)
        app.state.query_service = QueryService(store, directory)
        logger.info(
            "Calendar config: tz=%s hours=%s-%s slot=%smin window=%s days",
            settings.calendar_timezone,
            settings.business_start_hour,
            settings.business_end_hour,
            settings.slot_duration_minutes,
            settings.window_days,
        )

        scheduler = None
        if settings.scheduler_enabled:
            scheduler = BackgroundScheduler(timezone=settings.calendar_timezone)
            scheduler.add_job(
                run_rolling_window_job,
                "cron",
                hour=settings.window_job_hour,
                minute=settings.window_job_minute,
                id=ROLLING_WINDOW_JOB_ID,
                args=[store, settings],
            )
            scheduler.start()
            app.state.scheduler = scheduler

        if settings.generate_on_startup:
            # One window run on startup so slots exist before the first cron tick.
            threading.Thread(target=run_rolling_window_job, args=(store, settings), daemon=True).start()

        logger.info("Backend ready")
        yield
        if scheduler is not None:
            scheduler.shutdown(wait=False)
        engine.dispose()

    app = FastAPI(title="Slotbook", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_DEFAULT_CORS_ORIGINS + settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def error_envelope(request: Request, exc: StarletteHTTPException):
        # Routes raise HTTPException(detail=error_body(...)); send that body as-is.
        if isinstance(exc.detail, dict) and "error" in exc.detail:
            return JSONResponse(status_code=exc.status_code, content=exc.detail)
        code = "NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"
        return JSONResponse(status_code=exc.status_code, content=error_body(code, str(exc.detail)))

    @app.exception_handler(RequestValidationError)
    async def validation_envelope(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return JSONResponse(status_code=400, content=error_body("VALIDATION_ERROR", message))

    app.include_router(slots.router, tags=["slots"])
    app.include_router(bookings.router, tags=["bookings"])
    app.include_router(subjects.router, tags=["subjects"])

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
