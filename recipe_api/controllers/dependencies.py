"""
FastAPI dependencies wiring services to the request's Database.

The Database lives on app.state (set by create_app), so tests
can run the app against any database without overriding globals.
"""

from typing import Annotated

from fastapi import Depends, Path, Request

from recipe_api.config import Settings
from recipe_api.database import Database
from recipe_api.models.schemas import MAX_ROW_ID
from recipe_api.services import (
    CategoryService,
    IngredientCatalog,
    IngredientResolver,
    RecipeDeleter,
    RecipeReader,
    RecipeWriter,
    TagService,
)

# Path parameter for a table key; out-of-range IDs fail validation with a 400
RowId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_recipe_reader(database: Database = Depends(get_database)) -> RecipeReader:
    return RecipeReader(database)


def get_recipe_writer(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
) -> RecipeWriter:
    resolver = IngredientResolver(max_attempts=settings.ingredient_resolve_attempts)
    return RecipeWriter(database, resolver)


def get_recipe_deleter(database: Database = Depends(get_database)) -> RecipeDeleter:
    return RecipeDeleter(database)


def get_category_service(database: Database = Depends(get_database)) -> CategoryService:
    return CategoryService(database)


def get_tag_service(database: Database = Depends(get_database)) -> TagService:
    return TagService(database)


def get_ingredient_catalog(database: Database = Depends(get_database)) -> IngredientCatalog:
    return IngredientCatalog(database)
