"""
Bring the database schema up to date without dropping data.

Creates the worker/advance tables declared in the models when they are
missing, without touching existing rows. Optionally loads a JSON backup
(the /api/export format) into an empty database.

Usage:
  python scripts/ensure_schema.py [backup.json]
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

from sqlalchemy import inspect

# make sure the project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hisab import create_app  # type: ignore
from hisab import store  # type: ignore
from hisab.errors import HisabError  # type: ignore
from hisab.extensions import db  # type: ignore


def _tables() -> set[str]:
    return set(inspect(db.engine).get_table_names())


def main(argv: list[str]) -> int:
    print("[ensure] loading app...")
    app = create_app()
    with app.app_context():
        uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
        print(f"[ensure] SQLALCHEMY_DATABASE_URI = {uri}")

        # create_app() already ran db.create_all()
        present = sorted(_tables())
        print(f"[ensure] tables: {', '.join(present)}")
        missing = {"worker", "advance"} - set(present)
        if missing:
            print(f"[ensure] missing tables: {', '.join(sorted(missing))}")
            return 1

        if len(argv) > 1:
            path = Path(argv[1])
            if store.list_workers() or store.list_advances():
                print("[ensure] database is not empty, backup not loaded.")
                return 1
            try:
                workers, advances = store.import_data(json.loads(path.read_text(encoding="utf-8")))
            except (OSError, ValueError, HisabError) as exc:
                print(f"[ensure] import failed: {exc}")
                return 1
            print(f"[ensure] imported {workers} worker(s), {advances} advance(s) from {path}")
        print("[ensure] done.")
        return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
