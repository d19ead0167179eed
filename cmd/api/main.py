"""
FastAPI Service - HTTP entry point for the Object Gateway.

The gateway itself is a library; this service is one host for it:
- Presigned GET/PUT URL issuance
- Existence probes
- Store-to-store zip archive streaming
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import get_settings
from core.container import Container, bootstrap_container
from core.logger import logger
from internal.api.routes.health_routes import create_health_routes
from internal.api.routes.object_routes import router as object_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan - startup and shutdown.
    Wires the storage adapters into the container on startup.
    """
    try:
        settings = get_settings()
        logger.info(
            f"========== Starting {settings.app_name} v{settings.app_version} API service =========="
        )
        logger.info(f"Environment: {settings.environment}")
        logger.info(f"API: {settings.api_host}:{settings.api_port}")
        logger.info(f"Object storage: {settings.minio_endpoint} (ssl={settings.minio_use_ssl})")

        bootstrap_container()

        logger.info(
            f"========== {settings.app_name} API service started successfully =========="
        )

        yield

        logger.info("========== Shutting down API service ==========")
        Container.clear()
        logger.info("========== API service stopped successfully ==========")

    except Exception as e:
        logger.error(f"Fatal error in application lifespan: {e}")
        logger.exception("Lifespan error details:")
        raise


def create_app() -> FastAPI:
    """
    Factory function to create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    try:
        logger.info("Creating FastAPI application...")
        settings = get_settings()

        description = """
## Object Gateway API

Convenience API over S3-compatible object storage (MinIO, AWS S3, R2).

### Key Features

* **Presigned downloads** - Time-limited GET links, only for objects that exist
* **Presigned uploads** - Time-limited PUT links for direct client upload
* **Existence checks** - Metadata-only probes
* **Zip archives** - Objects zipped and streamed back to storage without buffering
        """

        tags_metadata = [
            {
                "name": "Objects",
                "description": "Presigned URLs, existence checks and zip archive streaming.",
            },
            {
                "name": "Health",
                "description": "Health check endpoints for monitoring API status.",
            },
        ]

        app = FastAPI(
            title=settings.app_name,
            version=settings.app_version,
            description=description,
            lifespan=lifespan,
            openapi_tags=tags_metadata,
            docs_url="/docs",
            redoc_url="/redoc",
            openapi_url="/openapi.json",
        )

        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],  # Configure appropriately for production
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        app.include_router(object_router)
        logger.info("✅ Object routes registered")

        # Health routes (no prefix - uses root "/" and "/health")
        app.include_router(create_health_routes())
        logger.info("✅ Health routes registered")

        logger.info("FastAPI application created successfully")
        return app

    except Exception as e:
        logger.error(f"Failed to create FastAPI application: {e}")
        logger.exception("Application creation error details:")
        raise


app = create_app()


# Run with: uvicorn cmd.api.main:app --host 0.0.0.0 --port 8000
if __name__ == "__main__":
    import os
    import sys

    import uvicorn

    settings = get_settings()

    logger.info("========== Starting Uvicorn Server ==========")
    logger.info(f"Host: {settings.api_host}")
    logger.info(f"Port: {settings.api_port}")
    logger.info(f"Reload: {settings.api_reload}")

    # The reload subprocess re-imports by path, so the project root must be importable
    project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)
    current_pythonpath = os.environ.get("PYTHONPATH", "")
    if project_root not in current_pythonpath:
        os.environ["PYTHONPATH"] = (
            f"{project_root}:{current_pythonpath}" if current_pythonpath else project_root
        )

    if settings.api_reload:
        uvicorn.run(
            "cmd.api.main:app",
            host=settings.api_host,
            port=settings.api_port,
            reload=True,
            log_level="info" if settings.debug else "warning",
        )
    else:
        uvicorn.run(
            app,
            host=settings.api_host,
            port=settings.api_port,
            log_level="info" if settings.debug else "warning",
        )
