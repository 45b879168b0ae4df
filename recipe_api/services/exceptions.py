"""Service layer exception classes.

Exception Hierarchy:
    ServiceError
    ├── NotFoundError                  (404)
    │   ├── RecipeNotFound
    │   ├── CategoryNotFound
    │   ├── CategoryRecipesNotFound
    │   ├── TagNotFound
    │   ├── IngredientNotFound
    │   └── IngredientRaceError        (500)
    └── StorageError                   (500)
        └── ConstraintViolation        (409)

Status codes are assigned by the handlers in recipe_api.controllers.errors.
"""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError


class ServiceError(Exception):
    """Base exception for all service layer errors."""

    pass


class NotFoundError(ServiceError):
    """Raised when a referenced row does not exist."""

    pass


class RecipeNotFound(NotFoundError):
    """Raised when a recipe cannot be found by ID."""

    def __init__(self, recipe_id: int):
        self.recipe_id = recipe_id
        super().__init__("Recipe not found")


class CategoryNotFound(NotFoundError):
    def __init__(self, category_id: int):
        self.category_id = category_id
        super().__init__("Category not found")


class CategoryRecipesNotFound(NotFoundError):
    """Raised when a category has no recipes."""

    def __init__(self, category_id: int):
        self.category_id = category_id
        super().__init__("No recipes found for this category")


class TagNotFound(NotFoundError):
    def __init__(self, tag_id: int):
        self.tag_id = tag_id
        super().__init__("Tag not found")


class IngredientNotFound(NotFoundError):
    def __init__(self, ingredient_id: int):
        self.ingredient_id = ingredient_id
        super().__init__("Ingredient not found")


class IngredientRaceError(NotFoundError):
    """
    Raised when an ingredient insert conflicted but the existing row could
    not be read back either.

    This means another transaction is racing on the same name, or the
    catalog is in an unexpected state. The enclosing transaction must abort.
    """

    def __init__(self, name: str, attempts: int):
        self.name = name
        self.attempts = attempts
        super().__init__(
            f"Ingredient '{name}' conflicted on insert but was not found "
            f"after {attempts} attempt(s)"
        )


class StorageError(ServiceError):
    """Raised when a database operation fails."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")


class ConstraintViolation(StorageError):
    """Raised when a write breaks a unique, foreign key or check constraint."""

    pass


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Translate SQLAlchemy errors raised inside the block into service errors."""
    try:
        yield
    except IntegrityError as e:
        raise ConstraintViolation(f"{action} violates a constraint", e) from e
    except SQLAlchemyError as e:
        raise StorageError(f"{action} failed", e) from e
