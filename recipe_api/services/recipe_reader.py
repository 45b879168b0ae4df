"""
Recipe Reader - loads recipes with their ingredient lines.

All reads go through one query shape: recipes LEFT JOIN ingredient lines
LEFT JOIN ingredients, ordered by recipe then line. The flat rows are then
folded into one RecipeResponse per recipe. The outer joins mean a recipe
without ingredient lines still appears, with an empty ingredient list.
"""

from itertools import groupby

from sqlalchemy import select
from sqlalchemy.sql import Select

from recipe_api.database import Database
from recipe_api.models import (
    Ingredient,
    IngredientLineResponse,
    Recipe,
    RecipeIngredient,
    RecipeResponse,
)
from recipe_api.services.exceptions import (
    CategoryRecipesNotFound,
    RecipeNotFound,
    storage_errors,
)


class RecipeReader:
    """Read-only access to recipes."""

    def __init__(self, database: Database):
        self.database = database

    def get_all(self) -> list[RecipeResponse]:
        """Get all recipes, ordered by ID."""
        return self._fetch()

    def get_by_id(self, recipe_id: int) -> RecipeResponse:
        """Get a single recipe or raise RecipeNotFound."""
        recipes = self._fetch(Recipe.recipe_id == recipe_id)
        if not recipes:
            raise RecipeNotFound(recipe_id)
        return recipes[0]

    def get_by_category(self, category_id: int) -> list[RecipeResponse]:
        """
        Get all recipes in a category.

        Raises CategoryRecipesNotFound when the category has no recipes,
        whether or not the category itself exists.
        """
        recipes = self._fetch(Recipe.category_id == category_id)
        if not recipes:
            raise CategoryRecipesNotFound(category_id)
        return recipes

    def _query(self, where=None) -> Select:
        query = (
            select(
                Recipe,
                Ingredient.name,
                RecipeIngredient.quantity,
                RecipeIngredient.unit,
            )
            .outerjoin(RecipeIngredient, RecipeIngredient.recipe_id == Recipe.recipe_id)
            .outerjoin(Ingredient, Ingredient.ingredient_id == RecipeIngredient.ingredient_id)
        )
        if where is not None:
            query = query.where(where)
        return query.order_by(Recipe.recipe_id, RecipeIngredient.recipe_ingredient_id)

    def _fetch(self, where=None) -> list[RecipeResponse]:
        with storage_errors("recipe read"):
            with self.database.session() as session:
                rows = session.execute(self._query(where)).all()

        return [
            _build_recipe(recipe, list(lines))
            for recipe, lines in groupby(rows, key=lambda row: row[0])
        ]


def _build_recipe(recipe: Recipe, rows: list) -> RecipeResponse:
    ingredients = [
        IngredientLineResponse(name=name, quantity=quantity, unit=unit)
        for _, name, quantity, unit in rows
        # A recipe with no lines comes back as one row of NULLs
        if name is not None
    ]
    return RecipeResponse(
        recipe_id=recipe.recipe_id,
        title=recipe.title,
        instructions=recipe.instructions,
        image_url=recipe.image_url,
        category_id=recipe.category_id,
        created_at=recipe.created_at,
        updated_at=recipe.updated_at,
        ingredients=ingredients,
    )
