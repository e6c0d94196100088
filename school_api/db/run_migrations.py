"""
Programmatic Alembic runner for the school schema.

There is no alembic.ini: the script location is this package's migrations
directory and the database URL comes from school_api.db.config.Settings.

Usage examples:
    python -m school_api.db.run_migrations upgrade head
    python -m school_api.db.run_migrations downgrade -1
    python -m school_api.db.run_migrations current
    python -m school_api.db.run_migrations stamp head
"""

import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List

from alembic import command
from alembic.config import Config

from school_api.db.config import get_settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"

# command name -> (alembic function, default arguments)
_COMMANDS: Dict[str, tuple[Callable, List[str]]] = {
    "upgrade": (command.upgrade, ["head"]),
    "downgrade": (command.downgrade, ["-1"]),
    "stamp": (command.stamp, ["head"]),
    "current": (command.current, []),
    "history": (command.history, []),
    "heads": (command.heads, []),
}


# PUBLIC_INTERFACE
def build_config(database_url: str | None = None) -> Config:
    """Alembic Config pointing at the bundled migrations; env.py reads the URL back from it."""
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", database_url or get_settings().sync_database_url)
    return cfg


# PUBLIC_INTERFACE
def main(argv: List[str] | None = None) -> None:
    """Run one Alembic command (upgrade, downgrade, stamp, current, history, heads)."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("No Alembic arguments provided. Example: upgrade head")
        sys.exit(1)

    name, rest = args[0], args[1:]
    if name not in _COMMANDS:
        print(f"Unsupported Alembic command: {name} (choose from {', '.join(sorted(_COMMANDS))})")
        sys.exit(2)

    func, defaults = _COMMANDS[name]
    logger.info("alembic %s %s", name, " ".join(rest or defaults))
    func(build_config(), *(rest or defaults))


if __name__ == "__main__":
    main()
