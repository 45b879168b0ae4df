"""
Recipe API - Application Entry Point

This is the main FastAPI application. It follows the MVC
(Model-View-Controller) architectural pattern, minus the views: every
response is JSON.

Architecture Overview:
=====================
- Models (recipe_api/models/): Data structures
  - entities.py: SQLAlchemy ORM models for database tables
  - schemas.py: Pydantic schemas for request validation and responses

- Controllers (recipe_api/controllers/): Request handlers
  - recipes.py: CRUD operations for recipes
  - catalog.py: categories, tags and the ingredient catalog
  - errors.py: service errors -> HTTP status codes

- Services (recipe_api/services/): Business logic layer
  - recipe_writer.py: transactional create/update
  - ingredient_resolver.py: race-safe ingredient name -> ID
  - recipe_reader.py / recipe_deleter.py: reads and deletes

- database.py: the Database storage client, opened and closed by the
  lifespan handler below and shared through app.state

Request Flow:
============
1. Request arrives at a Controller endpoint
2. Controller validates input using Pydantic Schemas
3. Controller calls a Service built around the app's Database
4. Service runs its queries inside Database.transaction()/session()
5. Response is serialized using Pydantic Schemas
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from recipe_api.config import Settings, get_settings
from recipe_api.controllers import (
    categories_router,
    ingredients_router,
    recipes_router,
    tags_router,
)
from recipe_api.controllers.errors import register_exception_handlers
from recipe_api.database import Database

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Open the database once at startup, close it at shutdown
    settings: Settings = app.state.settings
    database: Database = app.state.database
    database.open()
    if settings.db_create_tables:
        database.create_all()
    logger.info(f"{settings.app_name} started")
    try:
        yield
    finally:
        database.close()
        logger.info(f"{settings.app_name} stopped")


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Defaults to the environment-derived settings
        database: Defaults to a Database built from settings.database_url
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="""
    REST API for recipes, categories, ingredients and tags.

    ## Features
    - Recipe management with ingredient lines (quantity + unit)
    - Shared ingredient catalog, deduplicated by name
    - Category and tag management
    """,
        version=settings.version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(recipes_router)       # /recipes endpoints
    app.include_router(categories_router)    # /categories endpoints
    app.include_router(tags_router)          # /tags endpoints
    app.include_router(ingredients_router)   # /ingredients endpoints

    @app.get("/", tags=["health"])
    def root():
        """Basic liveness check."""
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.version,
        }

    @app.get("/health", tags=["health"])
    def health_check(request: Request):
        """Health check including a database round trip."""
        database_ok = request.app.state.database.ping()
        return {
            "status": "healthy" if database_ok else "degraded",
            "database": "ok" if database_ok else "unavailable",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("recipe_api.main:app", host=settings.host, port=settings.port)
