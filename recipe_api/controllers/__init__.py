"""
Controllers Package - The 'C' in MVC

Controllers handle HTTP requests and coordinate between:
- Models (schemas validate input and shape output)
- Services (transactions and queries)

Each controller is a FastAPI APIRouter that defines endpoints
for a specific resource.
"""

from recipe_api.controllers.recipes import router as recipes_router
from recipe_api.controllers.catalog import (
    categories_router,
    ingredients_router,
    tags_router,
)

__all__ = ["recipes_router", "categories_router", "tags_router", "ingredients_router"]
