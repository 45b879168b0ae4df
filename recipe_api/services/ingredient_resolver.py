"""
Ingredient Resolver - maps ingredient names to catalog IDs.

Ingredients are shared by every recipe, so two unrelated requests may try
to create the same new name at the same moment. Resolution therefore never
does "look up, then insert if missing". It always attempts the insert first
and lets the unique constraint on ingredients.name pick the winner:

1. INSERT the name, doing nothing on a uniqueness conflict
2. If a row came back, that is the new ID
3. Otherwise the name already exists: SELECT its ID
4. If the SELECT sees nothing (the competing insert is not visible yet),
   try again, up to max_attempts times

Exactly one row per name is ever committed, whatever the call order.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from recipe_api.models import Ingredient
from recipe_api.services.exceptions import IngredientRaceError

logger = logging.getLogger(__name__)

# Dialects with native INSERT ... ON CONFLICT DO NOTHING
_ON_CONFLICT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


class IngredientResolver:
    """Resolves ingredient names to IDs inside a caller's transaction."""

    def __init__(self, max_attempts: int = 3):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts

    def resolve(self, session: Session, name: str) -> int:
        """
        Return the ID for an ingredient name, creating it if unseen.

        Args:
            session: Session of the enclosing write transaction
            name: Ingredient name, compared case-sensitively

        Raises:
            IngredientRaceError: if the name conflicted on every attempt but
                could never be read back
        """
        for attempt in range(1, self.max_attempts + 1):
            ingredient_id = self._insert(session, name)
            if ingredient_id is not None:
                logger.debug(f"Created ingredient '{name}' ({ingredient_id})")
                return ingredient_id

            logger.debug(f"Ingredient '{name}' already exists, looking it up")
            ingredient_id = self._lookup(session, name)
            if ingredient_id is not None:
                return ingredient_id

            logger.warning(
                f"Ingredient '{name}' conflicted but was not visible "
                f"(attempt {attempt}/{self.max_attempts})"
            )

        raise IngredientRaceError(name, self.max_attempts)

    def _insert(self, session: Session, name: str) -> Optional[int]:
        """Insert the name; None when it already exists."""
        table = Ingredient.__table__
        dialect = session.get_bind().dialect.name
        insert = _ON_CONFLICT_INSERTS.get(dialect)

        if insert is not None:
            stmt = (
                insert(table)
                .values(name=name)
                .on_conflict_do_nothing(index_elements=[table.c.name])
                .returning(table.c.ingredient_id)
            )
            return session.execute(stmt).scalar_one_or_none()

        # Generic path: a failed INSERT would poison the whole transaction,
        # so confine it to a savepoint
        try:
            with session.begin_nested():
                ingredient = Ingredient(name=name)
                session.add(ingredient)
        except IntegrityError:
            return None
        return ingredient.ingredient_id

    def _lookup(self, session: Session, name: str) -> Optional[int]:
        return session.scalar(
            select(Ingredient.ingredient_id).where(Ingredient.name == name)
        )
