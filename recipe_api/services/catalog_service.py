"""
Catalog Services - categories, tags and the ingredient catalog.

These are plain single-table CRUD operations with no multi-step
transactions. Each write still runs in Database.transaction() so the
session is released on every path.
"""

import logging

from sqlalchemy import select

from recipe_api.database import Database
from recipe_api.models import (
    Category,
    CategoryResponse,
    Ingredient,
    IngredientResponse,
    Tag,
    TagResponse,
)
from recipe_api.services.exceptions import (
    CategoryNotFound,
    IngredientNotFound,
    TagNotFound,
    storage_errors,
)

logger = logging.getLogger(__name__)


class _NamedEntityService:
    """CRUD for a table with an integer primary key and a unique name."""

    entity = None
    response = None
    not_found = None
    label = ""

    def __init__(self, database: Database):
        self.database = database

    @property
    def _pk(self):
        return self.entity.__mapper__.primary_key[0]

    def list_all(self) -> list:
        with storage_errors(f"{self.label} read"):
            with self.database.session() as session:
                rows = session.scalars(select(self.entity).order_by(self._pk)).all()
                return [self.response.model_validate(row) for row in rows]

    def get(self, entity_id: int):
        with storage_errors(f"{self.label} read"):
            with self.database.session() as session:
                row = session.get(self.entity, entity_id)
                if row is None:
                    raise self.not_found(entity_id)
                return self.response.model_validate(row)

    def create(self, name: str):
        with storage_errors(f"{self.label} create"):
            with self.database.transaction() as session:
                row = self.entity(name=name)
                session.add(row)
                session.flush()
                created = self.response.model_validate(row)

        logger.info(f"Created {self.label} {created.model_dump()}")
        return created

    def update(self, entity_id: int, name: str):
        with storage_errors(f"{self.label} update"):
            with self.database.transaction() as session:
                row = session.get(self.entity, entity_id)
                if row is None:
                    raise self.not_found(entity_id)
                row.name = name
                session.flush()
                return self.response.model_validate(row)

    def delete(self, entity_id: int) -> None:
        with storage_errors(f"{self.label} delete"):
            with self.database.transaction() as session:
                row = session.get(self.entity, entity_id)
                if row is None:
                    raise self.not_found(entity_id)
                session.delete(row)
                session.flush()

        logger.info(f"Deleted {self.label} {entity_id}")


class CategoryService(_NamedEntityService):
    """
    Recipe categories.

    Deleting a category that recipes still reference fails with
    ConstraintViolation; recipes are never deleted implicitly.
    """

    entity = Category
    response = CategoryResponse
    not_found = CategoryNotFound
    label = "category"


class TagService(_NamedEntityService):
    """Tags, independent of recipes."""

    entity = Tag
    response = TagResponse
    not_found = TagNotFound
    label = "tag"


class IngredientCatalog:
    """Read-only view of the ingredient catalog."""

    def __init__(self, database: Database):
        self.database = database

    def list_all(self) -> list[IngredientResponse]:
        """All ingredients, ordered by name."""
        with storage_errors("ingredient read"):
            with self.database.session() as session:
                rows = session.scalars(select(Ingredient).order_by(Ingredient.name)).all()
                return [IngredientResponse.model_validate(row) for row in rows]

    def get(self, ingredient_id: int) -> IngredientResponse:
        with storage_errors("ingredient read"):
            with self.database.session() as session:
                ingredient = session.get(Ingredient, ingredient_id)
                if ingredient is None:
                    raise IngredientNotFound(ingredient_id)
                return IngredientResponse.model_validate(ingredient)
