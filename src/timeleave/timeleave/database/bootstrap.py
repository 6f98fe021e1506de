from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).resolve().parents[4] / "database"


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes, skips -- comments).
    buf: list[str] = []
    in_single = False
    in_comment = False

    for i, ch in enumerate(sql):
        if in_comment:
            if ch == "\n":
                in_comment = False
                buf.append(ch)
            continue

        if ch == "-" and not in_single and sql[i : i + 2] == "--":
            in_comment = True
            continue

        if ch == "'":
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == ";" and not in_single:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db_config: dict, path: Path) -> int:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    count = 0
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied %s (%d statements)", Path(path).name, count)
    return count


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(target).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_DIR / "schema.sql") -> None:
    ensure_database_exists(db_config)
    _run_script(db_config, Path(schema_path))


def apply_seed_sql(db_config: dict, *, seed_path: str | Path = SCHEMA_DIR / "seed.sql") -> None:
    _run_script(db_config, Path(seed_path))


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
