"""
Models Package - ORM entities and API schemas.
"""

from recipe_api.models.entities import (
    Category,
    Recipe,
    Ingredient,
    RecipeIngredient,
    Tag,
)
from recipe_api.models.schemas import (
    IngredientLineInput,
    IngredientLineResponse,
    IngredientResponse,
    RecipeInput,
    RecipeResponse,
    RecipeCreated,
    CategoryInput,
    CategoryResponse,
    TagInput,
    TagResponse,
    MessageResponse,
    ErrorResponse,
)

__all__ = [
    # ORM entities
    "Category",
    "Recipe",
    "Ingredient",
    "RecipeIngredient",
    "Tag",
    # Schemas
    "IngredientLineInput",
    "IngredientLineResponse",
    "IngredientResponse",
    "RecipeInput",
    "RecipeResponse",
    "RecipeCreated",
    "CategoryInput",
    "CategoryResponse",
    "TagInput",
    "TagResponse",
    "MessageResponse",
    "ErrorResponse",
]
