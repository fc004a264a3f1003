from pathlib import Path
from typing import Dict, Optional
import logging

import aiosqlite

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


async def connect(db_path: str, pragmas: Optional[Dict[str, str]] = None) -> aiosqlite.Connection:
    """Open an aiosqlite connection with named-row access.

    Applies any PRAGMA settings supplied in `pragmas`. Returns an open
    connection; caller is responsible for closing it.
    """
    conn = await aiosqlite.connect(db_path)
    conn.row_factory = aiosqlite.Row

    if pragmas:
        for k, v in pragmas.items():
            await conn.execute(f"PRAGMA {k} = {v}")
        await conn.commit()
    return conn


async def init_db(db_path: str, schema_path: Optional[str] = None) -> None:
    """Apply the SQL schema to the database at `db_path`.

    If `schema_path` is not provided this uses `schema.sql` next to this
    module. Every statement in the schema is idempotent, so running this
    against an initialized database is harmless.
    """
    schema_file = Path(schema_path) if schema_path else SCHEMA_PATH

    if not schema_file.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_file}")

    conn = await connect(db_path)
    try:
        await conn.executescript(schema_file.read_text())
        await conn.commit()
    finally:
        await conn.close()
    logger.info(f"[DB] Schema applied to {db_path}")


async def ensure_db(db_path: str, schema_path: Optional[str] = None) -> None:
    """Create the database file and schema if the games table is missing."""
    db_file = Path(db_path)
    if db_file.exists():
        conn = await connect(db_path)
        try:
            cur = await conn.execute(
                "SELECT 1 FROM sqlite_master WHERE type='table' AND name='games'"
            )
            if await cur.fetchone() is not None:
                return
        finally:
            await conn.close()
    elif db_file.parent and not db_file.parent.exists():
        db_file.parent.mkdir(parents=True, exist_ok=True)

    await init_db(db_path, schema_path)
