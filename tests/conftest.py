"""Pytest configuration and fixtures.

Every test gets its own in-memory SQLite database. Database.open() switches
":memory:" URLs to a StaticPool, so the API and the test share one
connection and see the same data.
"""

import pytest
from fastapi.testclient import TestClient

from recipe_api.config import Settings
from recipe_api.database import Database
from recipe_api.main import create_app
from recipe_api.models import IngredientLineInput, RecipeInput
from recipe_api.services import (
    CategoryService,
    IngredientResolver,
    RecipeDeleter,
    RecipeReader,
    RecipeWriter,
)

TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture
def settings():
    return Settings(database_url=TEST_DATABASE_URL, log_level="WARNING")


@pytest.fixture
def database():
    """Provide a clean, opened database with all tables created."""
    db = Database(TEST_DATABASE_URL)
    db.open()
    db.create_all()
    yield db
    # Tests driving the app see it closed already by the lifespan handler
    if db.is_open:
        db.drop_all()
    db.close()


@pytest.fixture
def client(settings, database):
    app = create_app(settings=settings, database=database)
    # Entering the client runs the lifespan handler
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def category_id(database):
    """ID of a freshly created category (1 in an empty database)."""
    return CategoryService(database).create("Drinks").category_id


@pytest.fixture
def writer(database):
    return RecipeWriter(database, IngredientResolver())


@pytest.fixture
def reader(database):
    return RecipeReader(database)


@pytest.fixture
def deleter(database):
    return RecipeDeleter(database)


def make_recipe(category_id, *lines, title="Tea", instructions="Boil water"):
    """Build a RecipeInput from (name, quantity, unit) tuples."""
    return RecipeInput(
        title=title,
        instructions=instructions,
        category_id=category_id,
        ingredients=[
            IngredientLineInput(name=name, quantity=quantity, unit=unit)
            for name, quantity, unit in lines
        ],
    )


def ingredient_set(recipe):
    """Ingredient lines of a RecipeResponse or response JSON as a set of triples."""
    if isinstance(recipe, dict):
        return {(i["name"], i["quantity"], i["unit"]) for i in recipe["ingredients"]}
    return {(i.name, i.quantity, i.unit) for i in recipe.ingredients}
