"""
Services Package - business logic layer.

Services receive the Database storage client in their constructor and
never reach for global connection state.
"""

from recipe_api.services.catalog_service import CategoryService, IngredientCatalog, TagService
from recipe_api.services.ingredient_resolver import IngredientResolver
from recipe_api.services.recipe_deleter import RecipeDeleter
from recipe_api.services.recipe_reader import RecipeReader
from recipe_api.services.recipe_writer import RecipeWriter

__all__ = [
    "CategoryService",
    "IngredientCatalog",
    "IngredientResolver",
    "RecipeDeleter",
    "RecipeReader",
    "RecipeWriter",
    "TagService",
]
