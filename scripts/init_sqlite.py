#!/usr/bin/env python3
"""Create (or reset) the tic-tac-toe SQLite database from db/schema.sql."""
import sqlite3
import sys
import os
from pathlib import Path

CRITICAL_TABLES = {"games"}
CRITICAL_INDEXES = {"idx_games_lookup", "idx_games_one_started"}


def init_db(db_path: str, schema_path: str, reset: bool = False) -> None:
    """Apply the schema; with `reset`, drop the existing games first."""
    db_path = Path(db_path).resolve()
    schema_path = Path(schema_path).resolve()

    if not schema_path.exists():
        print(f"[INIT] ✗ Error: Schema file not found at {schema_path}", file=sys.stderr)
        sys.exit(1)

    try:
        conn = sqlite3.connect(str(db_path))
        if reset:
            conn.execute("DROP TABLE IF EXISTS games")
            conn.commit()

        conn.executescript(schema_path.read_text())
        conn.commit()

        rows = conn.execute("SELECT type, name FROM sqlite_master WHERE type IN ('table', 'index')").fetchall()
        conn.close()
    except sqlite3.Error as e:
        print(f"[INIT] ✗ Error: Failed to initialize database: {e}", file=sys.stderr)
        sys.exit(1)

    tables = {name for kind, name in rows if kind == "table"}
    indexes = {name for kind, name in rows if kind == "index"}
    missing = (CRITICAL_TABLES - tables) | (CRITICAL_INDEXES - indexes)
    if missing:
        print(f"[INIT] ✗ Error: Missing schema objects: {sorted(missing)}", file=sys.stderr)
        sys.exit(1)

    # Containers run the app as a different user than the one running this script
    os.chmod(str(db_path), 0o666)
    print(f"[INIT] ✓ Database initialized at {db_path}")


if __name__ == "__main__":
    args = [a for a in sys.argv[1:] if a != "--reset"]
    db_path = args[0] if len(args) > 0 else os.environ.get("TTT_DB_PATH", "./ttt.sqlite3")
    schema_path = args[1] if len(args) > 1 else str(Path(__file__).parent.parent / "db" / "schema.sql")
    init_db(db_path, schema_path, reset="--reset" in sys.argv)
