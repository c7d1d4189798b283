from __future__ import annotations

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect


def _make_alembic_config(database_url: str) -> Config:
    """Return an Alembic config pointing at the service migrations."""
    root = Path(__file__).resolve().parents[2]
    cfg = Config(str(root / "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", database_url)
    cfg.set_main_option("script_location", str(root / "migrations"))
    return cfg


@pytest.fixture
def sqlite_url(tmp_path, monkeypatch):
    # env.py prefers these over the ini option
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("TEST_DATABASE_URL", raising=False)
    return f"sqlite:///{tmp_path / 'migrations.db'}"


def _tables(url: str) -> set:
    engine = create_engine(url)
    try:
        return set(inspect(engine).get_table_names())
    finally:
        engine.dispose()


def test_alembic_upgrade_and_downgrade_cycle(sqlite_url) -> None:
    """Migrations upgrade from base to head and cleanly downgrade back to base."""
    cfg = _make_alembic_config(sqlite_url)

    command.upgrade(cfg, "head")
    assert {"users", "projects", "comments", "ratings", "project_lists", "project_list_items"} <= _tables(sqlite_url)

    command.downgrade(cfg, "base")
    assert _tables(sqlite_url) <= {"alembic_version"}

    command.upgrade(cfg, "head")


def test_migrated_schema_matches_models(sqlite_url) -> None:
    cfg = _make_alembic_config(sqlite_url)
    command.upgrade(cfg, "head")

    engine = create_engine(sqlite_url)
    try:
        insp = inspect(engine)
        rating_uniques = {uc["name"] for uc in insp.get_unique_constraints("ratings")}
        assert "uq_ratings_user_project" in rating_uniques
        item_uniques = {uc["name"] for uc in insp.get_unique_constraints("project_list_items")}
        assert "uq_project_list_items_list_project" in item_uniques
        comment_columns = {c["name"] for c in insp.get_columns("comments")}
        assert {"status", "parent_comment_id", "rating"} <= comment_columns
    finally:
        engine.dispose()
