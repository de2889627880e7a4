"""Main application entry point with FastAPI."""

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from . import __version__
from .config import get_settings
from .database import check_database_health, create_tables, dispose_engine, list_tables
from .errors import ApiError
from .routers import ALL_ROUTERS

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def validate_environment():
    """Validate all required environment variables on startup."""
    try:
        settings = get_settings()
        logger.info("Environment variables validated successfully")
        return settings
    except ValidationError as e:
        logger.error("ERROR: Missing or invalid environment variables:")
        logger.error(str(e))
        sys.exit(1)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""
    # Startup
    logger.info("Starting Recipe Planner...")

    settings = validate_environment()
    logging.getLogger().setLevel(settings.log_level.upper())

    if settings.auto_create_tables:
        create_tables()
        logger.info("Created missing tables")

    logger.info(f"=== Tables in database: {list_tables()} ===")
    logger.info(f"=== Kroger configured: {'YES' if settings.kroger_configured else 'NO'} ===")
    logger.info(f"=== Spoonacular configured: {'YES' if settings.spoonacular_api_key else 'NO'} ===")

    logger.info("Recipe Planner started successfully")

    yield

    # Shutdown
    logger.info("Shutting down Recipe Planner...")
    dispose_engine()
    logger.info("Recipe Planner shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Recipe Planner",
    description="Recipes, preferences, pantry and grocery cart API",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for router in ALL_ROUTERS:
    app.include_router(router)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report body/query parsing failures as 400 with a readable message."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid {location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"message": message})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


@app.get("/health")
async def health_check():
    """Report database connectivity; 503 when the database is unreachable."""
    if check_database_health():
        return {"status": "healthy", "database": "connected", "version": __version__}
    return JSONResponse(
        status_code=503,
        content={"status": "unhealthy", "database": "disconnected", "version": __version__},
    )


@app.get("/")
async def root():
    return {"name": "Recipe Planner", "status": "running", "version": __version__}


def run():
    """Console entry point: serve the app with uvicorn."""
    settings = validate_environment()
    uvicorn.run("recipe_planner.main:app", host="0.0.0.0", port=settings.port)
