"""FastAPI application entry point."""
import logging
import time
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from surveygenie.config import get_settings
from surveygenie.database import engine
from surveygenie.routers import auth, health, responses, surveys, users
from surveygenie.utils.exceptions import SurveyGenieError
from surveygenie.version import APP_VERSION

settings = get_settings()


def configure_logging() -> None:
    """Log to the console and to a rotating file under ``logs/``."""
    logs_dir = Path("logs")
    logs_dir.mkdir(exist_ok=True)

    # 1 MB per file, keep 5 backups
    rotating_handler = RotatingFileHandler(
        logs_dir / "surveygenie.log",
        maxBytes=1024 * 1024,
        backupCount=5,
        encoding='utf-8',
    )
    rotating_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))

    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(),
            rotating_handler,
        ],
        force=True,
    )

    # SQL statements only in development
    sqlalchemy_logger = logging.getLogger("sqlalchemy.engine.Engine")
    sqlalchemy_logger.setLevel(logging.INFO if settings.environment == "development" else logging.WARNING)


configure_logging()
logger = logging.getLogger(__name__)
api_logger = logging.getLogger("surveygenie.api")


@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    """Manage application startup and shutdown tasks."""
    logger.info("=" * 60)
    logger.info("SurveyGenie API Starting")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Database: {settings.database_url.split('@')[-1] if '@' in settings.database_url else 'SQLite'}")
    logger.info("=" * 60)

    yield

    await engine.dispose()
    logger.info("SurveyGenie API stopped")


app = FastAPI(
    title="SurveyGenie API",
    description="Survey authoring and response aggregation",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.exception_handler(SurveyGenieError)
async def service_exception_handler(request: Request, exc: SurveyGenieError):
    """Map service error kinds onto HTTP status codes."""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc}")
    else:
        logger.info(f"{type(exc).__name__} on {request.url.path}: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors with user-friendly messages."""
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")

    errors = []
    for error in exc.errors():
        loc = error.get("loc", [])
        field_path = " -> ".join(str(x) for x in loc[1:]) if len(loc) > 1 else "unknown field"
        errors.append({
            "field": field_path,
            "message": error.get("msg", "Validation error"),
            "type": error.get("type", "unknown"),
        })

    return JSONResponse(
        status_code=400,
        content={
            "detail": "Request validation failed",
            "errors": errors,
        },
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and duration of every request."""
    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000
    api_logger.info(f"{request.method} {request.url.path} | {response.status_code} | {duration_ms:.1f}ms")
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(surveys.router)
app.include_router(responses.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "SurveyGenie API",
        "version": APP_VERSION,
    }
