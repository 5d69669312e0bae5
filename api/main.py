"""
Main FastAPI Application
FastAPI app creation, CORS configuration, exception handlers and startup events
"""
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
import os
import logging

from planforge import __version__
from .dependencies import Services, build_services
from .routes import api_router
from .utils import error_response

logger = logging.getLogger(__name__)

# Origins the frontend dev servers run on
cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


def create_app(services: Optional[Services] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        services: Pre-built services; when omitted they are built from
            config.yaml on startup

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="PlanForge",
        description="Turns a project idea into epics, tasks and stories, generates code, "
                    "architecture diagrams and pseudocode, and pushes items to Jira.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )
    app.state.services = services

    if services is not None:
        is_development = services.config.is_development
    else:
        is_development = os.getenv("ENVIRONMENT", "development").lower() == "development"
    if is_development:
        logger.info("CORS: Running in development mode - allowing all origins")
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=False,  # Must be False when using allow_origins=["*"]
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )
    else:
        logger.info(f"CORS: Running in production mode - allowing {len(cors_origins)} origins")
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.error(f"Invalid request to {request.url.path}: {exc.errors()}")
        return error_response("Invalid request", exc)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
        return error_response("An unexpected error occurred", exc)

    @app.on_event("startup")
    async def startup_event():
        """Initialize services on startup"""
        if app.state.services is None:
            app.state.services = build_services()
        logger.info("PlanForge API started")

    app.include_router(api_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.main:app", host="0.0.0.0", port=5001, reload=True)
