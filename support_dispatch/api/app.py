"""
FastAPI application for the customer support dispatcher

This module creates and configures the FastAPI application with:
- CORS middleware for frontend integration (routing headers exposed)
- Rate-limited API routes (chat streaming, agents, health)
- Error handlers mapping the error taxonomy to JSON responses
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from langchain_core.language_models import BaseChatModel
from loguru import logger

from support_dispatch.api.models import ErrorResponse
from support_dispatch.api.rate_limiter import FixedWindowRateLimiter, enforce_rate_limit
from support_dispatch.api.routes import agents, chat, health
from support_dispatch.config.settings import settings
from support_dispatch.infra.database import Database
from support_dispatch.memory.record_store import RecordStore
from support_dispatch.services.chat_service import ChatService
from support_dispatch.services.seed_data import seed_database
from support_dispatch.utils.errors import DispatchError, RateLimitExceeded
from support_dispatch.utils.logger import setup_logger

ROUTING_HEADERS = ["X-Conversation-Id", "X-Agent-Type"]

# Error bodies every /api route can return, documented in the OpenAPI schema
API_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=headers,
    )


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DispatchError)
    async def dispatch_error_handler(request: Request, exc: DispatchError):
        headers = None
        if isinstance(exc, RateLimitExceeded):
            headers = {"Retry-After": str(exc.retry_after)}
        elif exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return error_response(exc.status_code, exc.message, headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.debug(f"Rejected request body on {request.url.path}: {exc.errors()}")
        return error_response(400, "Invalid request body")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        # Details stay in the log, never in the response
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return error_response(500, "Internal server error")


def create_app(
    database: Optional[Database] = None,
    llm: Optional[BaseChatModel] = None,
    router_llm: Optional[BaseChatModel] = None,
    chat_service: Optional[ChatService] = None,
    rate_limiter: Optional[FixedWindowRateLimiter] = None,
    seed: Optional[bool] = None,
    configure_logging: bool = True,
) -> FastAPI:
    """
    Build the application.

    Args:
        database: Database to use (defaults to settings.database_url)
        llm: Chat model for agent replies (defaults to the configured provider)
        router_llm: Chat model for the classification fallback
        chat_service: Prebuilt service (overrides llm/router_llm)
        rate_limiter: Limiter for /api routes (defaults to settings)
        seed: Insert demo data on startup (defaults to settings.seed_on_startup)
        configure_logging: Install the loguru sinks on startup
    """
    database = database or Database()
    store = RecordStore(database)
    seed = settings.seed_on_startup if seed is None else seed

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        if configure_logging:
            setup_logger()
        logger.info("🚀 Support dispatcher starting...")

        await database.init_models()
        if seed:
            await seed_database(database)

        app.state.chat_service = chat_service or ChatService(store, llm=llm, router_llm=router_llm)
        app.state.started_at = time.monotonic()
        logger.info("📚 API docs available at /docs")

        yield

        # Shutdown
        logger.info("🛑 Support dispatcher shutting down...")
        await app.state.chat_service.drain()
        await database.dispose()
        logger.info("✅ Pending writes flushed, database closed")

    app = FastAPI(
        title="Customer Support Dispatcher API",
        description="""
    Routes customer messages to an order, billing or support agent and
    streams a grounded reply.

    ## Example

    ```bash
    curl -N -X POST http://localhost:8000/api/chat/messages \\
         -H "Content-Type: application/json" \\
         -d '{"content": "Where is my order ORD-1001?"}'
    ```
    """,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.store = store
    app.state.rate_limiter = rate_limiter or FixedWindowRateLimiter()
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=ROUTING_HEADERS,
    )

    _register_error_handlers(app)

    api = APIRouter(
        prefix="/api",
        dependencies=[Depends(enforce_rate_limit)],
        responses=API_ERROR_RESPONSES,
    )
    api.include_router(chat.router)
    api.include_router(agents.router)
    api.include_router(health.router)
    app.include_router(api)

    @app.get("/", tags=["root"])
    async def root():
        return {
            "service": "Customer Support Dispatcher API",
            "version": "1.0.0",
            "docs": "/docs",
            "endpoints": {
                "health": "/api/health",
                "chat": "/api/chat/messages",
                "agents": "/api/agents",
            },
        }

    return app
