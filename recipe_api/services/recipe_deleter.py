"""Recipe Deleter - removes a recipe together with its ingredient lines."""

import logging

from sqlalchemy import delete

from recipe_api.database import Database
from recipe_api.models import Recipe, RecipeIngredient
from recipe_api.services.exceptions import RecipeNotFound, storage_errors

logger = logging.getLogger(__name__)


class RecipeDeleter:

    def __init__(self, database: Database):
        self.database = database

    def delete(self, recipe_id: int) -> None:
        """
        Delete a recipe.

        The lines are deleted explicitly first; the ON DELETE CASCADE on
        recipe_ingredients.recipe_id covers anything else. Ingredient rows
        are NOT deleted as other recipes may use them.

        Raises:
            RecipeNotFound: if no recipe row was removed
        """
        with storage_errors("recipe delete"):
            with self.database.transaction() as session:
                session.execute(
                    delete(RecipeIngredient).where(RecipeIngredient.recipe_id == recipe_id)
                )
                result = session.execute(
                    delete(Recipe).where(Recipe.recipe_id == recipe_id)
                )
                if result.rowcount == 0:
                    raise RecipeNotFound(recipe_id)

        logger.info(f"Deleted recipe {recipe_id}")
