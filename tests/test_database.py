import pytest
from sqlalchemy import inspect, select, text

from recipe_api.database import Database
from recipe_api.models import Tag


def test_transaction_commits_on_success(database):
    with database.transaction() as session:
        session.add(Tag(name="quick"))

    with database.session() as session:
        assert session.scalars(select(Tag.name)).all() == ["quick"]


def test_transaction_rolls_back_on_error(database):
    with pytest.raises(ValueError):
        with database.transaction() as session:
            session.add(Tag(name="spicy"))
            session.flush()
            raise ValueError("boom")

    with database.session() as session:
        assert session.scalars(select(Tag)).all() == []


def test_transaction_releases_connection(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'recipes.db'}")
    database.open()
    database.create_all()
    pool = database.engine.pool

    with pytest.raises(ValueError):
        with database.transaction() as session:
            session.add(Tag(name="x"))
            session.flush()
            raise ValueError("boom")

    assert pool.checkedout() == 0
    database.close()


def test_unopened_database_refuses_work():
    database = Database("sqlite:///:memory:")

    with pytest.raises(RuntimeError):
        database.engine
    with pytest.raises(RuntimeError):
        with database.transaction():
            pass


def test_open_and_close_are_idempotent():
    database = Database("sqlite:///:memory:")
    database.open()
    database.open()
    assert database.is_open
    assert database.ping() is True

    database.close()
    database.close()
    assert not database.is_open


def test_drop_all_removes_tables(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'recipes.db'}")
    database.open()
    database.create_all()
    assert "recipe_ingredients" in inspect(database.engine).get_table_names()

    database.drop_all()
    assert inspect(database.engine).get_table_names() == []
    database.close()


def test_sqlite_enforces_foreign_keys(database):
    with database.session() as session:
        assert session.execute(text("PRAGMA foreign_keys")).scalar() == 1
