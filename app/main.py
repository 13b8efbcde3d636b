# /app/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

# --- Core FastAPI Imports ---
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

# --- Application-specific Imports ---
from .core.config import Settings, load_settings
from .core.logging_config import configure_logging
from .db.database import Database
from .routers import auth_router, generate_router, generations_router, user_router
from .services.generation_service import CodeGenerationService

APP_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Runs once at startup: open the database and build the shared services.
    settings: Settings = app.state.settings
    db = Database(settings.sqlalchemy_url)
    db.create_all()
    app.state.db = db
    app.state.generation_service = CodeGenerationService(settings)
    if not settings.has_llm_credentials:
        logger.warning("GOOGLE_API_KEY is not set; all generations will use placeholder output.")
    yield
    # Runs once at shutdown.
    db.dispose()


# --- Error Response Shaping ---
async def _validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
    )


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def _storage_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Unhandled storage error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


# --- FastAPI Application Instance Creation ---
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Builds the application. Settings are loaded from the environment unless
    given; missing SSO credentials raise `ConfigError` here, before serving.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Code Generator API",
        description="Generates code from natural-language prompts and keeps a history of past generations.",
        version=APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # --- Middleware Configuration ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, _storage_exception_handler)

    # --- API Router Inclusion ---
    app.include_router(generate_router.router, prefix="/api", tags=["Code Generation"])
    app.include_router(generations_router.router, prefix="/api/generations", tags=["History"])
    app.include_router(user_router.router, prefix="/api/user", tags=["User"])
    app.include_router(auth_router.router, prefix="/auth", tags=["Auth"])

    # --- Root / Health Check Endpoint ---
    @app.get("/", tags=["Health Check"])
    async def read_root():
        """A simple health check endpoint to confirm the API is online."""
        return {"status": "Code Generator API is running!", "version": app.version}

    return app
