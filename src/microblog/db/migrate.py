# src/microblog/db/migrate.py
from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config

from microblog.core.settings import Settings

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def run_upgrade_head(database_url: str | None = None) -> None:
    """Upgrade ``database_url`` (or the configured database) to the latest revision."""
    if database_url is None:
        database_url = Settings().database_url_sync  # type: ignore[call-arg]
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", database_url)
    command.upgrade(cfg, "head")


if __name__ == "__main__":
    run_upgrade_head()
