"""Script to run database migrations."""

import sys

from alembic import command
from alembic.config import Config

ALEMBIC_INI = "alembic.ini"


def run_migrations(revision: str = "head") -> None:
    """Upgrade the database to ``revision``."""
    alembic_cfg = Config(ALEMBIC_INI)

    try:
        print(f"Upgrading database to {revision}...")
        command.upgrade(alembic_cfg, revision)
        print("✓ Migrations completed successfully!")
    except Exception as e:
        print(f"✗ Migration failed: {e}", file=sys.stderr)
        sys.exit(1)


def rollback_migration(revision: str = "-1") -> None:
    """Downgrade the database to ``revision``."""
    alembic_cfg = Config(ALEMBIC_INI)

    try:
        print(f"Downgrading database to {revision}...")
        command.downgrade(alembic_cfg, revision)
        print("✓ Downgrade completed successfully!")
    except Exception as e:
        print(f"✗ Downgrade failed: {e}", file=sys.stderr)
        sys.exit(1)


def create_migration(message: str) -> None:
    """Autogenerate a new migration from the table metadata."""
    alembic_cfg = Config(ALEMBIC_INI)

    try:
        print(f"Creating migration: {message}")
        command.revision(alembic_cfg, message=message, autogenerate=True)
        print("✓ Migration created successfully!")
    except Exception as e:
        print(f"✗ Migration creation failed: {e}", file=sys.stderr)
        sys.exit(1)


USAGE = "Usage: python scripts/migrate.py [create <message> | downgrade [revision]]"


if __name__ == "__main__":
    args = sys.argv[1:]
    if not args:
        run_migrations()
    elif args[0] == "create" and len(args) > 1:
        create_migration(" ".join(args[1:]))
    elif args[0] == "downgrade":
        rollback_migration(args[1] if len(args) > 1 else "-1")
    else:
        print(USAGE)
