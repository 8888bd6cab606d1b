"""
StudyPath Platform FastAPI Application

Adaptive assessment, answer tracking and learning-style analysis for learners.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from studypath import __version__
from studypath.assessment import get_config_registry
from studypath.config import settings
from studypath.core.database import close_db, engine
from studypath.core.exceptions import StudyPathError
from studypath.core.logging_setup import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events.

    Startup:
    - Configure logging
    - Load assessment config table
    - Verify database connection

    Shutdown:
    - Close database connections
    """
    configure_logging(settings.LOG_LEVEL)
    logger.info("StudyPath Platform starting...")

    registry = get_config_registry()
    logger.info(f"Loaded {len(registry)} assessment configs")

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection verified")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        raise

    logger.info("StudyPath Platform ready")

    yield

    logger.info("StudyPath Platform shutting down...")
    await close_db()
    logger.info("Shutdown complete")


async def studypath_error_handler(request: Request, exc: StudyPathError) -> JSONResponse:
    """Render application errors as ``{"error": code, "detail": message}``."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="StudyPath Platform",
        description="Adaptive assessment and learning progress platform",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_local else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StudyPathError, studypath_error_handler)

    # Health check endpoints
    @app.get("/", tags=["Health"])
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "service": "StudyPath Platform",
            "status": "operational",
            "version": __version__,
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/health", tags=["Health"], response_model=None)
    async def health_check() -> JSONResponse:
        """Health check endpoint for load balancers.

        Returns:
            - status: healthy/unhealthy
            - checks: Individual health checks
        """
        checks: dict[str, dict[str, Any]] = {}

        # Database health
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            checks["database"] = {"status": "healthy"}
        except Exception as e:
            checks["database"] = {"status": "unhealthy", "error": str(e)}

        # Assessment config health
        try:
            registry = get_config_registry()
            checks["assessment_configs"] = {"status": "healthy", "configs": len(registry)}
        except Exception as e:
            checks["assessment_configs"] = {"status": "unhealthy", "error": str(e)}

        # Overall status
        all_healthy = all(check["status"] == "healthy" for check in checks.values())
        status_code = 200 if all_healthy else 503

        return JSONResponse(
            status_code=status_code,
            content={
                "status": "healthy" if all_healthy else "unhealthy",
                "environment": settings.ENVIRONMENT,
                "checks": checks,
            },
        )

    @app.get("/health/ready", tags=["Health"], response_model=None)
    async def readiness_check() -> dict[str, str] | JSONResponse:
        """Readiness check for Kubernetes.

        Returns 200 when app is ready to serve traffic.
        """
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return {"status": "ready"}
        except Exception:
            return JSONResponse(
                status_code=503,
                content={"status": "not_ready"},
            )

    @app.get("/health/live", tags=["Health"])
    async def liveness_check() -> dict[str, str]:
        """Liveness check for Kubernetes.

        Returns 200 if app is alive (even if not fully functional).
        """
        return {"status": "alive"}

    # Register API routers
    from studypath.api.v1 import answers, assessments, learning_style, progress

    app.include_router(assessments.router, prefix="/api/v1/assessments", tags=["Assessments"])
    app.include_router(answers.router, prefix="/api/v1/answers", tags=["Answers"])
    app.include_router(
        learning_style.router, prefix="/api/v1/learning-style", tags=["Learning Style"]
    )
    app.include_router(progress.router, prefix="/api/v1/progress", tags=["Progress"])

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "studypath.main:app",
        host="0.0.0.0",  # nosec B104 - Intentional for containerized deployment
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
