"""
FastAPI application entry point.

PWD Registry - records management for persons with disabilities:
beneficiary registration, assistance requests and quarterly statistics.
"""
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException
import logging

from pwd_registry.config import settings
from pwd_registry.database import engine, init_db
from pwd_registry.dependencies import record_activity
from pwd_registry.exceptions import RegistryError, InternalError
from pwd_registry.logging_config import setup_logging
from pwd_registry.routers import (
    users,
    genders,
    communities,
    disability_categories,
    disability_types,
    assistance_types,
    pwd_records,
    pwd_satellites,
    assistance_requests,
    statistics,
    activity_logs,
)

logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
    **PWD Registry API**

    Records management for persons with disabilities (PWDs).

    ## Key Features

    * **Reference data**: communities, disability categories and types, assistance types
    * **PWD records**: registration by quarter, guardian, education and support needs
    * **Assistance requests**: review workflow from pending to assessed
    * **Statistics**: quarterly, yearly and year-over-year figures
    * **Accounts**: admin and officer roles, OTP password reset
    * **Activity logs**: audit trail of authenticated writes
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    dependencies=[Depends(record_activity)],
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    setup_logging()
    init_db()
    logger.info("%s %s started", settings.PROJECT_NAME, settings.VERSION)


# Include routers with prefixes
app.include_router(
    users.router,
    prefix=f"{settings.API_V1_PREFIX}/users",
    tags=["Users & Auth"]
)
app.include_router(
    genders.router,
    prefix=f"{settings.API_V1_PREFIX}/genders",
    tags=["Reference Data"]
)
app.include_router(
    communities.router,
    prefix=f"{settings.API_V1_PREFIX}/communities",
    tags=["Reference Data"]
)
app.include_router(
    disability_categories.router,
    prefix=f"{settings.API_V1_PREFIX}/disability-categories",
    tags=["Reference Data"]
)
app.include_router(
    disability_types.router,
    prefix=f"{settings.API_V1_PREFIX}/disability-types",
    tags=["Reference Data"]
)
app.include_router(
    assistance_types.router,
    prefix=f"{settings.API_V1_PREFIX}/assistance-types",
    tags=["Reference Data"]
)
app.include_router(
    pwd_records.router,
    prefix=f"{settings.API_V1_PREFIX}/pwd-records",
    tags=["PWD Records"]
)
app.include_router(
    pwd_satellites.guardians_router,
    prefix=f"{settings.API_V1_PREFIX}/pwd-guardians",
    tags=["PWD Guardians"]
)
app.include_router(
    pwd_satellites.education_router,
    prefix=f"{settings.API_V1_PREFIX}/pwd-education",
    tags=["PWD Education"]
)
app.include_router(
    pwd_satellites.support_needs_router,
    prefix=f"{settings.API_V1_PREFIX}/pwd-support-needs",
    tags=["PWD Support Needs"]
)
app.include_router(
    assistance_requests.router,
    prefix=f"{settings.API_V1_PREFIX}/assistance-requests",
    tags=["Assistance Requests"]
)
app.include_router(
    statistics.router,
    prefix=f"{settings.API_V1_PREFIX}/statistics",
    tags=["Statistics"]
)
app.include_router(
    activity_logs.router,
    prefix=f"{settings.API_V1_PREFIX}/logs",
    tags=["Activity Logs"]
)


# Root endpoint
@app.get("/", tags=["Root"])
def root():
    """API root endpoint with basic information."""
    return {
        "message": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
        "endpoints": {
            "users": f"{settings.API_V1_PREFIX}/users",
            "communities": f"{settings.API_V1_PREFIX}/communities",
            "disability_categories": f"{settings.API_V1_PREFIX}/disability-categories",
            "disability_types": f"{settings.API_V1_PREFIX}/disability-types",
            "assistance_types": f"{settings.API_V1_PREFIX}/assistance-types",
            "pwd_records": f"{settings.API_V1_PREFIX}/pwd-records",
            "assistance_requests": f"{settings.API_V1_PREFIX}/assistance-requests",
            "statistics": f"{settings.API_V1_PREFIX}/statistics",
            "logs": f"{settings.API_V1_PREFIX}/logs"
        }
    }


# Health check
@app.get(f"{settings.API_V1_PREFIX}/health", tags=["Health"])
def health_check():
    """Health check endpoint."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as e:
        logger.warning("Health check database failure: %s", e)
        db_status = f"unhealthy: {str(e)}"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "version": settings.VERSION,
        "database": db_status
    }


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message}
    )


# Exception handlers
@app.exception_handler(RegistryError)
async def registry_exception_handler(request: Request, exc: RegistryError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    return error_response(422, "Validation failed: " + "; ".join(problems))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    error = InternalError("Database operation failed")
    return error_response(error.status_code, error.message)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal server error")
