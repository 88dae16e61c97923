"""
SQL Dump Utilities

Renders content and translation rows as a self-contained SQLite script:
header comments, schema, and literal INSERT statements wrapped in a single
transaction.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime, timezone
from typing import Any
from urllib.parse import quote

CONTENT_COLUMNS = (
    "id",
    "parent_id",
    "type",
    "sequence",
    "audio_url",
    "video_url",
    "css",
    "duas_url",
    "is_deleted",
    "created_at",
    "updated_at",
)

TRANSLATION_COLUMNS = (
    "content_id",
    "language_code",
    "title",
    "transliteration",
    "translation",
    "original_text",
    "search_text",
    "updated_at",
)

CONTENT_SCHEMA = """CREATE TABLE IF NOT EXISTS content (
  id INTEGER PRIMARY KEY,
  parent_id INTEGER,
  type TEXT,
  sequence INTEGER DEFAULT 0,
  audio_url TEXT,
  video_url TEXT,
  css TEXT,
  duas_url TEXT,
  is_deleted INTEGER DEFAULT 0,
  created_at TEXT DEFAULT CURRENT_TIMESTAMP,
  updated_at TEXT DEFAULT CURRENT_TIMESTAMP
);"""

TRANSLATION_SCHEMA = """CREATE TABLE IF NOT EXISTS content_translation (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  content_id INTEGER NOT NULL,
  language_code TEXT NOT NULL,
  title TEXT DEFAULT '',
  transliteration TEXT DEFAULT '',
  translation TEXT DEFAULT '',
  original_text TEXT DEFAULT '',
  search_text TEXT DEFAULT '',
  updated_at TEXT DEFAULT CURRENT_TIMESTAMP,
  UNIQUE(content_id, language_code)
);"""


def sql_literal(value: Any) -> str:
    """
    Render a Python value as a SQL literal.

    Args:
        value: None, bool, int, float, date/datetime or anything str() can render.

    Returns:
        str: ``NULL``, a bare number, ``0``/``1`` for booleans, or a quoted
        string with embedded single quotes doubled.

    Example:
        >>> sql_literal("it's")
        "'it''s'"
    """
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, datetime):
        value = value.isoformat(sep=" ")
    elif isinstance(value, date):
        value = value.isoformat()
    return "'" + str(value).replace("'", "''") + "'"


def insert_statement(table: str, columns: Iterable[str], row: Mapping[str, Any]) -> str:
    columns = tuple(columns)
    rendered = ", ".join(sql_literal(row.get(column)) for column in columns)
    return f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({rendered});"


def build_sql_dump(
    version_number: str,
    content_rows: list[Mapping[str, Any]],
    translation_rows: list[Mapping[str, Any]],
    regenerated: bool = False,
    generated_at: datetime | None = None,
) -> str:
    """Build the export script for one version."""
    generated_at = generated_at or datetime.now(timezone.utc)
    label = "Regenerated" if regenerated else "Generated"

    lines = [
        f"-- Content Admin Export v{version_number}",
        f"-- {label}: {generated_at.isoformat()}",
        f"-- Content rows: {len(content_rows)}",
        f"-- Translation rows: {len(translation_rows)}",
        "",
        CONTENT_SCHEMA,
        "",
        TRANSLATION_SCHEMA,
        "",
        "BEGIN TRANSACTION;",
        "",
    ]
    # Exported rows are active by definition
    lines.extend(insert_statement("content", CONTENT_COLUMNS, {**row, "is_deleted": False}) for row in content_rows)
    lines.append("")
    lines.extend(insert_statement("content_translation", TRANSLATION_COLUMNS, row) for row in translation_rows)
    lines.append("")
    lines.append("COMMIT;")
    return "\n".join(lines) + "\n"


def export_filename(version_number: str) -> str:
    return f"content-export-v{version_number}.sql"


def content_disposition(filename: str) -> str:
    """
    Build an ``attachment`` Content-Disposition value for ``filename``.

    Non-ASCII names get an ASCII ``filename`` fallback plus an RFC 5987
    ``filename*`` parameter, so the header always encodes as latin-1.
    """
    fallback = "".join(ch if " " <= ch <= "~" and ch not in '"\\' else "_" for ch in filename)
    if fallback == filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"
