import os
import sys
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

# Ensure local imports resolve
sys.path.append(os.path.dirname(__file__))

# Core
from core.config import settings
from core.config_validator import validate_config_on_startup
from core.errors import InquiryError
from core.logging_config import logger

# -------------------------------------------------
# Routers
# -------------------------------------------------
from routers.inquiries import router as inquiries_router
from routers.catalog import router as catalog_router
from routers.health import router as health_router

# Request locations FastAPI prefixes onto validation error paths
_LOCATION_PREFIXES = ("body", "query", "path")


def _validation_error_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    loc = [str(part) for part in errors[0].get("loc", ()) if part not in _LOCATION_PREFIXES]
    if not loc:
        return "Invalid request body"
    return f"Invalid value for field: {'.'.join(loc)}"


# -------------------------------------------------
# Create the Application
# -------------------------------------------------
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Mokshamaa Infrastructure service inquiries and admin triage",
    )

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------
    # Startup logging
    # -------------------------------------------------
    @app.on_event("startup")
    async def on_startup():
        logger.info(f"Starting {settings.PROJECT_NAME} ({settings.ENV})")
        validate_config_on_startup(strict=settings.ENV == "production")
        for route in app.routes:
            # Included routers and mounts carry no path of their own.
            if not isinstance(route, APIRoute):
                continue
            methods = ",".join(sorted(route.methods or []))
            logger.info(f"Route {methods:10s} {route.path}")

    # -------------------------------------------------
    # Error handling: every error body is {"error": "..."}
    # -------------------------------------------------
    @app.exception_handler(InquiryError)
    async def handle_inquiry_error(request: Request, exc: InquiryError):
        if exc.status_code >= 500:
            logger.warning(f"HTTP {exc.status_code} at {request.url}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _validation_error_message(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        if exc.status_code >= 500:
            logger.warning(f"HTTP {exc.status_code} at {request.url}: {exc.detail}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error at %s", request.url, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )

    # -------------------------------------------------
    # Register Routers
    # -------------------------------------------------
    app.include_router(inquiries_router)
    app.include_router(catalog_router)
    app.include_router(health_router)

    return app


# Create the global FastAPI instance
app = create_app()
