from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import uvicorn
import logging
import sys

from vhsa.core.config import settings
from vhsa.core.database_utils import get_db_session, check_database_connection, find_missing_tables
from vhsa import schemas
from vhsa.core.exceptions import DuplicateStudentError, NotFoundError, StorageError, ScreeningError
from vhsa.middleware.request_logging import RequestLoggingMiddleware
from vhsa.utils.timezone import isoformat_now
import vhsa.models  # noqa: F401  registers tables on Base.metadata

# Configure logging
log_handlers = [logging.StreamHandler(sys.stdout)]
if settings.LOG_FILE:
    log_handlers.append(logging.FileHandler(settings.LOG_FILE))

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=log_handlers,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"Starting up {settings.PROJECT_NAME} ({settings.ENVIRONMENT.value})...")

    # Check database tables
    try:
        with get_db_session() as db:
            missing_tables = find_missing_tables(db)
        if missing_tables:
            logger.warning(f"Missing database tables: {missing_tables}")
            logger.warning("Run 'alembic upgrade head' or scripts/setup_database.py to create them")
        else:
            logger.info("All required database tables present")
    except Exception as e:
        logger.error(f"Database startup check failed: {e}")

    yield

    logger.info(f"Shutting down {settings.PROJECT_NAME}...")


def create_application() -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="VHSA school health screening: student lookup and screening result capture",
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )
    logger.info(f"CORS configured for {settings.ENVIRONMENT.value} environment with origins: {settings.CORS_ORIGINS}")

    app.add_middleware(RequestLoggingMiddleware)

    from vhsa.api.v1.api import api_router
    app.include_router(api_router, prefix=settings.API_V1_STR)

    return app


# Create the FastAPI app instance
app = create_application()


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint that redirects to API documentation"""
    return RedirectResponse(url=f"{settings.API_V1_STR}/docs")


@app.get("/health", tags=["Health Check"])
def health_check():
    """Health check endpoint"""
    try:
        with get_db_session() as db:
            db_status = "healthy" if check_database_connection(db) else "unhealthy"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "timestamp": isoformat_now(),
        "database": db_status,
        "version": settings.VERSION,
    }


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Global HTTP exception handler"""
    path = request.url.path
    if exc.status_code == 404 and exc.detail == "Not Found" and path.startswith(settings.API_V1_STR):
        # No route matched
        return JSONResponse(
            status_code=404,
            content={"success": False, "error": "API endpoint not found", "path": path},
        )

    logger.error(f"HTTP {exc.status_code}: {exc.detail} - {request.url}")
    content = {"success": False}
    if isinstance(exc.detail, dict):
        content.update(exc.detail)
    else:
        content["error"] = exc.detail
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(ScreeningError)
async def screening_exception_handler(request: Request, exc: ScreeningError):
    """Domain errors raised by endpoints and the screening core"""
    content = {"success": False, "error": str(exc)}
    if isinstance(exc, NotFoundError):
        status_code = 404
    elif isinstance(exc, DuplicateStudentError):
        status_code = 409
        if exc.existing is not None:
            content["existingStudent"] = schemas.Student.model_validate(exc.existing).model_dump(mode="json")
    elif isinstance(exc, StorageError):
        status_code = 500
        content["error"] = "Failed to save screening results"
        logger.error(f"Storage failure: {exc.__cause__ or exc} - {request.url}")
    else:
        status_code = 400
    if status_code != 500:
        logger.warning(f"{type(exc).__name__}: {exc} - {request.url}")
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled exceptions"""
    logger.error(f"Unhandled exception: {exc} - {request.url}")
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error"},
    )


if __name__ == "__main__":
    uvicorn.run(
        "vhsa.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )
