import pytest
from sqlalchemy import func, select

from recipe_api.database import Database
from recipe_api.models import Ingredient
from recipe_api.services import IngredientResolver
from recipe_api.services.exceptions import IngredientRaceError, NotFoundError

# SQLite takes the ON CONFLICT DO NOTHING path; the SAVEPOINT fallback in
# IngredientResolver._insert is not covered here.


def count_ingredients(database, name):
    with database.session() as session:
        return session.scalar(select(func.count()).select_from(Ingredient).where(Ingredient.name == name))


def test_resolve_creates_then_reuses(database):
    resolver = IngredientResolver()

    with database.transaction() as session:
        first = resolver.resolve(session, "Garlic")
    with database.transaction() as session:
        second = resolver.resolve(session, "Garlic")

    assert first == second
    assert count_ingredients(database, "Garlic") == 1


def test_resolve_sees_rows_from_the_same_transaction(database):
    resolver = IngredientResolver()

    with database.transaction() as session:
        first = resolver.resolve(session, "Basil")
        second = resolver.resolve(session, "Basil")

    assert first == second
    assert count_ingredients(database, "Basil") == 1


def test_resolve_rolls_back_with_the_transaction(database):
    resolver = IngredientResolver()

    with pytest.raises(RuntimeError):
        with database.transaction() as session:
            resolver.resolve(session, "Saffron")
            raise RuntimeError("abort")

    assert count_ingredients(database, "Saffron") == 0


def test_overlapping_transactions_share_one_row(tmp_path):
    # A file database gives each transaction its own connection
    database = Database(f"sqlite:///{tmp_path / 'recipes.db'}")
    database.open()
    database.create_all()
    resolver = IngredientResolver()

    try:
        # first inserts and commits while second's scope is still open
        with database.transaction() as second:
            with database.transaction() as first:
                first_id = resolver.resolve(first, "Thyme")
            second_id = resolver.resolve(second, "Thyme")

        assert first_id == second_id
        assert count_ingredients(database, "Thyme") == 1
    finally:
        database.close()


class BlindResolver(IngredientResolver):
    """Never sees existing rows, as if a competing insert were not visible yet."""

    def __init__(self, max_attempts):
        super().__init__(max_attempts)
        self.lookups = 0

    def _lookup(self, session, name):
        self.lookups += 1
        return None


def test_conflict_without_visible_row_retries_then_fails(database):
    with database.transaction() as session:
        session.add(Ingredient(name="Pepper"))

    resolver = BlindResolver(max_attempts=3)
    with pytest.raises(IngredientRaceError) as excinfo:
        with database.transaction() as session:
            resolver.resolve(session, "Pepper")

    assert resolver.lookups == 3
    assert excinfo.value.name == "Pepper"
    # Surfaced as a not-found condition
    assert isinstance(excinfo.value, NotFoundError)
    assert count_ingredients(database, "Pepper") == 1


def test_late_visibility_is_picked_up_by_retry(database):
    with database.transaction() as session:
        session.add(Ingredient(name="Cumin"))

    class LateResolver(IngredientResolver):
        calls = 0

        def _lookup(self, session, name):
            self.calls += 1
            if self.calls == 1:
                return None
            return super()._lookup(session, name)

    resolver = LateResolver(max_attempts=3)
    with database.transaction() as session:
        ingredient_id = resolver.resolve(session, "Cumin")

    with database.session() as session:
        assert session.scalar(select(Ingredient.ingredient_id).where(Ingredient.name == "Cumin")) == ingredient_id


def test_max_attempts_must_be_positive():
    with pytest.raises(ValueError):
        IngredientResolver(max_attempts=0)
