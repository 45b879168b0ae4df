"""
Recipes Controller

Handles all CRUD operations for recipes:
- Listing recipes, optionally by category
- Getting a single recipe with its ingredient lines
- Creating and updating recipes (transactional, see RecipeWriter)
- Deleting recipes

Design Decisions:
- Request bodies are validated by the RecipeInput schema before any
  transaction is opened; invalid input never reaches the database
- Service errors (RecipeNotFound, StorageError, ...) are turned into HTTP
  responses by the handlers in errors.py, so endpoints stay linear
"""

from fastapi import APIRouter, Depends

from recipe_api.controllers.dependencies import (
    RowId,
    get_recipe_deleter,
    get_recipe_reader,
    get_recipe_writer,
)
from recipe_api.models import (
    ErrorResponse,
    MessageResponse,
    RecipeCreated,
    RecipeInput,
    RecipeResponse,
)
from recipe_api.services import RecipeDeleter, RecipeReader, RecipeWriter

router = APIRouter(prefix="/recipes", tags=["recipes"])

_not_found = {404: {"model": ErrorResponse}}
_bad_request = {400: {"model": ErrorResponse}}


@router.get("", response_model=list[RecipeResponse])
def list_recipes(reader: RecipeReader = Depends(get_recipe_reader)):
    """
    List all recipes with their ingredients.

    Recipes without ingredient lines are included with an empty list.
    """
    return reader.get_all()


@router.post(
    "",
    response_model=RecipeCreated,
    status_code=201,
    responses={**_not_found, **_bad_request},
)
def create_recipe(
    recipe_data: RecipeInput,
    writer: RecipeWriter = Depends(get_recipe_writer),
):
    """
    Create a new recipe with ingredients.

    The creation process runs in one transaction:
    1. Creates the Recipe record
    2. For each ingredient line:
       - Finds or creates the Ingredient by name
       - Creates the RecipeIngredient link with quantity and unit
    3. Commits, or rolls everything back on failure
    """
    recipe_id = writer.create(recipe_data)
    return RecipeCreated(recipe_id=recipe_id)


@router.get(
    "/category/{category_id}",
    response_model=list[RecipeResponse],
    responses=_not_found,
)
def list_recipes_by_category(
    category_id: RowId,
    reader: RecipeReader = Depends(get_recipe_reader),
):
    """List the recipes of one category; 404 when there are none."""
    return reader.get_by_category(category_id)


@router.get("/{recipe_id}", response_model=RecipeResponse, responses=_not_found)
def get_recipe(recipe_id: RowId, reader: RecipeReader = Depends(get_recipe_reader)):
    """Get a single recipe with all of its ingredient lines."""
    return reader.get_by_id(recipe_id)


@router.put(
    "/{recipe_id}",
    response_model=MessageResponse,
    responses={**_not_found, **_bad_request},
)
def update_recipe(
    recipe_id: RowId,
    recipe_data: RecipeInput,
    writer: RecipeWriter = Depends(get_recipe_writer),
):
    """
    Update a recipe.

    The ingredient list in the body replaces the stored one entirely;
    ingredients left out are removed from the recipe.
    """
    writer.update(recipe_id, recipe_data)
    return MessageResponse(message="Recipe and ingredients updated successfully")


@router.delete("/{recipe_id}", response_model=MessageResponse, responses=_not_found)
def delete_recipe(recipe_id: RowId, deleter: RecipeDeleter = Depends(get_recipe_deleter)):
    """
    Delete a recipe and its ingredient lines.

    Note: The Ingredient records are NOT deleted as they may be used by
    other recipes.
    """
    deleter.delete(recipe_id)
    return MessageResponse(message="Recipe deleted successfully")
