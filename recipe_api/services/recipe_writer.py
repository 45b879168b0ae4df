"""
Recipe Writer - the transactional create/update path for recipes.

Every write runs as a single transaction:
1. Insert the recipe row (create) or update it in place (update)
2. On update, delete all of the recipe's existing ingredient lines
3. For each input line, resolve the ingredient name to an ID and insert
   the line with its quantity and unit
4. Commit

Any failure rolls the whole transaction back, so a recipe is never visible
with only part of its ingredient lines.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from recipe_api.database import Database
from recipe_api.models import Recipe, RecipeIngredient, RecipeInput
from recipe_api.models.entities import utcnow
from recipe_api.services.exceptions import CategoryNotFound, RecipeNotFound, storage_errors
from recipe_api.services.ingredient_resolver import IngredientResolver

logger = logging.getLogger(__name__)


def next_updated_at(previous: Optional[datetime]) -> datetime:
    """Current time, nudged forward if the clock has not moved past previous."""
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class RecipeWriter:
    """Creates and updates recipes together with their ingredient lines."""

    def __init__(self, database: Database, resolver: IngredientResolver):
        self.database = database
        self.resolver = resolver

    def create(self, data: RecipeInput) -> int:
        """
        Create a recipe and its ingredient lines.

        Returns:
            The new recipe ID

        Raises:
            CategoryNotFound: if category_id does not reference a category
            ConstraintViolation: e.g. an ingredient line breaks a constraint
            StorageError: any other database failure
        """
        with storage_errors("recipe create"):
            with self.database.transaction() as session:
                now = utcnow()
                recipe = Recipe(
                    title=data.title,
                    instructions=data.instructions,
                    image_url=data.image_url,
                    category_id=data.category_id,
                    created_at=now,
                    updated_at=now,
                )
                session.add(recipe)
                self._flush_recipe(session, data)  # Get the recipe_id before adding lines

                self._write_lines(session, recipe.recipe_id, data)
                recipe_id = recipe.recipe_id

        logger.info(f"Created recipe {recipe_id} with {len(data.ingredients)} ingredient line(s)")
        return recipe_id

    def update(self, recipe_id: int, data: RecipeInput) -> None:
        """
        Overwrite a recipe and replace its ingredient lines wholesale.

        Raises:
            RecipeNotFound: if no recipe has this ID
            CategoryNotFound: if category_id does not reference a category
            ConstraintViolation: e.g. an ingredient line breaks a constraint
            StorageError: any other database failure
        """
        with storage_errors("recipe update"):
            with self.database.transaction() as session:
                recipe = session.get(Recipe, recipe_id, with_for_update=True)
                if recipe is None:
                    raise RecipeNotFound(recipe_id)

                recipe.title = data.title
                recipe.instructions = data.instructions
                recipe.image_url = data.image_url
                recipe.category_id = data.category_id
                recipe.updated_at = next_updated_at(recipe.updated_at)
                self._flush_recipe(session, data)

                # Full replace, never a diff
                session.execute(
                    delete(RecipeIngredient).where(RecipeIngredient.recipe_id == recipe_id)
                )
                self._write_lines(session, recipe_id, data)

        logger.info(f"Updated recipe {recipe_id} with {len(data.ingredients)} ingredient line(s)")

    def _flush_recipe(self, session: Session, data: RecipeInput) -> None:
        # The only constraint the recipe row itself can break is the category FK
        try:
            session.flush()
        except IntegrityError as e:
            raise CategoryNotFound(data.category_id) from e

    def _write_lines(self, session: Session, recipe_id: int, data: RecipeInput) -> None:
        for line in data.ingredients:
            ingredient_id = self.resolver.resolve(session, line.name)
            session.add(
                RecipeIngredient(
                    recipe_id=recipe_id,
                    ingredient_id=ingredient_id,
                    quantity=line.quantity,
                    unit=line.unit,
                )
            )
        session.flush()
