from __future__ import annotations

import argparse
import sys
from typing import Sequence

from qrdine.application.ports.storage import KeyValueStore
from qrdine.config import Settings
from qrdine.domain.menu.entities import DEFAULT_MENU_ITEMS
from qrdine.infrastructure.repositories.menu_repo import MENU_ITEMS_KEY, KeyValueMenuRepository
from qrdine.infrastructure.storage.factory import build_key_value_store
from qrdine.infrastructure.storage.json_collection import JsonCollection


def seed_catalog(store: KeyValueStore, force: bool = False) -> bool:
    """Write the default catalog; returns False when a catalog already exists."""
    if JsonCollection(store, MENU_ITEMS_KEY).exists() and not force:
        return False
    KeyValueMenuRepository(store).replace_all(list(DEFAULT_MENU_ITEMS))
    return True


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Write the default menu catalog to storage.")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing catalog.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = Settings.from_env()
    if settings.storage_backend == "memory":
        print("memory storage does not persist; set QRDINE_STORAGE=redis or sql")
        return 1

    if seed_catalog(build_key_value_store(settings), force=args.force):
        print("seed complete")
    else:
        print("catalog already present; use --force to overwrite")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
