import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv


# Load .env FIRST before any other imports that might need env vars
PROJECT_DIR = Path(__file__).parent.parent
ENV_PATH = PROJECT_DIR / ".env"
load_dotenv(ENV_PATH)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.requests import Request

from .ai.errors import AIRuntimeError
from .assistant.router import router as assistant_router, ws_router as assistant_ws_router
from .assistant.sessions import ChatSessionRegistry
from .config.logging import setup_logging
from .config.settings import get_settings
from .exceptions import ResourceNotFoundError, ValidationError as CustomValidationError
from .lessons.router import router as lessons_router
from .middleware.error_handlers import (
    handle_ai_runtime_errors,
    handle_not_found_errors,
    handle_unexpected_errors,
    handle_validation_errors,
)
from .middleware.security import SimpleSecurityMiddleware, limiter
from .sandbox.router import router as code_router
from .storage import get_storage


setup_logging()
logger = logging.getLogger(__name__)


def _register_routers(app: FastAPI) -> None:
    """Register all application routers."""
    app.include_router(lessons_router)
    app.include_router(code_router)  # Run and grade learner code
    app.include_router(assistant_router)
    app.include_router(assistant_ws_router)  # WebSocket chat at /ws


async def _startup_validation() -> None:
    """Validate configuration and warm the store on startup."""
    settings = get_settings()
    if settings.ai_configured:
        logger.info("Completion model configured: %s", settings.PRIMARY_LLM_MODEL)
    else:
        logger.warning("PRIMARY_LLM_MODEL is not set; lessons will use templates and chat replies will fail")

    storage = get_storage()
    lessons = await storage.get_lessons()
    logger.info("Store ready with %d lesson(s)", len(lessons))


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    # Startup
    await _startup_validation()

    yield

    # Shutdown
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    try:
        settings = get_settings()
    except Exception:
        logger.exception("Failed to load settings")
        raise

    app = FastAPI(
        title="Code Tutor API",
        description="API for interactive coding lessons, code runs and the tutoring assistant",
        version="0.1.0",
        debug=settings.DEBUG,
        lifespan=lifespan if settings.ENVIRONMENT != "test" else None,
    )

    # Add CORS middleware
    # Note: When allow_credentials=True, allow_origins cannot be ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add gzip compression middleware
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Add security middleware (headers)
    app.add_middleware(SimpleSecurityMiddleware)

    # Add rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Per-chat idempotency state for the assistant
    app.state.chat_sessions = ChatSessionRegistry()

    # Add exception handlers
    @app.exception_handler(ResourceNotFoundError)
    async def resource_not_found_handler(request: Request, exc: ResourceNotFoundError) -> JSONResponse:
        return await handle_not_found_errors(request, exc)

    # Validation errors (400/422)
    @app.exception_handler(ValidationError)
    async def pydantic_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return await handle_validation_errors(request, exc)

    @app.exception_handler(CustomValidationError)
    async def custom_validation_handler(request: Request, exc: CustomValidationError) -> JSONResponse:
        return await handle_validation_errors(request, exc)

    # Completion provider errors (503 / 429 / 504)
    @app.exception_handler(AIRuntimeError)
    async def ai_runtime_error_handler(request: Request, exc: AIRuntimeError) -> JSONResponse:
        return await handle_ai_runtime_errors(request, exc)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler for unhandled errors."""
        return await handle_unexpected_errors(request, exc)

    # Register health check endpoint
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Check application health status."""
        return {"status": "healthy"}

    # Register all routers
    _register_routers(app)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    from codetutor.config import env

    host = env("API_HOST", "127.0.0.1")
    port = int(env("API_PORT", "8080"))

    uvicorn.run(app, host=host, port=port)
