import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.core.config import Settings, settings as default_settings
from app.exceptions.handlers import register_exception_handlers
from app.routers.router import router
from app.services.container import ServiceContainer


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None
) -> FastAPI:
    """Build the FastAPI application with its own service container"""
    settings = settings or default_settings
    container = container or ServiceContainer(settings)

    # Initialize FastAPI application; interactive docs are off in production
    docs_enabled = not settings.is_production
    app = FastAPI(
        title="Media Toolkit Server",
        description="Video metadata resolution and image conversion API",
        version="1.0.0",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.container = container

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app)

    # Include the centralized router
    app.include_router(router)

    # Converted images are served back from the upload directory
    os.makedirs(settings.upload_dir, exist_ok=True)
    app.mount(
        settings.upload_url_prefix,
        StaticFiles(directory=settings.upload_dir),
        name="uploads"
    )

    return app
