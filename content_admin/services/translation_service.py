"""
Translation Service

Async functions for ContentTranslation records.

Functions:
    get_translations: all translations of a node, as a list and keyed by language
    save_translation: insert or fully replace the (content_id, language_code) row
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite

from content_admin.exceptions import ContentNotFoundError, ValidationError
from content_admin.models.content_translation import TRANSLATION_FIELDS, ContentTranslation
from content_admin.row_store import RowStore  # noqa: TC001
from content_admin.schemas.translation import (
    TranslationBundle,
    TranslationFields,
    TranslationRow,
    TranslationSaveResult,
)
from content_admin.services.content_service import get_active_node

logger = logging.getLogger(__name__)

translation_table = ContentTranslation.__table__

UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _insert_for(dialect_name: str):
    try:
        return UPSERT_DIALECTS[dialect_name]
    except KeyError:
        raise ValueError(f"Translation upsert is not supported on '{dialect_name}'") from None


async def get_translations(store: RowStore, content_id: int | None) -> TranslationBundle:
    """Return every translation of ``content_id`` ordered by language code."""
    if content_id is None:
        raise ValidationError("content_id is required.", field="content_id")

    rows = await store.fetch_all(
        select(translation_table)
        .where(translation_table.c.content_id == content_id)
        .order_by(translation_table.c.language_code)
    )
    translations = [TranslationRow.model_validate(row) for row in rows]
    by_language = {row.language_code: row for row in translations}
    return TranslationBundle(translations=by_language, rows=translations, count=len(translations))


async def save_translation(
    store: RowStore,
    content_id: int | None,
    language_code: str | None,
    fields: TranslationFields,
) -> TranslationSaveResult:
    """Upsert a translation.

    On conflict every text field is overwritten, including with ``''`` when
    the caller left it out. Saving the same fields twice leaves one row whose
    only change is ``updated_at``.

    Raises:
        ValidationError: If content_id or language_code is missing.
        ContentNotFoundError: If the node is missing or deleted.
    """
    if content_id is None:
        raise ValidationError("content_id is required.", field="content_id")
    if not isinstance(language_code, str) or not language_code.strip():
        raise ValidationError("language_code is required.", field="language_code")
    language_code = language_code.strip()

    if await get_active_node(store, content_id) is None:
        raise ContentNotFoundError(content_id, message="Content not found.")

    values = {name: getattr(fields, name) or "" for name in TRANSLATION_FIELDS}
    now = datetime.now(timezone.utc)

    insert = _insert_for(store.dialect_name)
    stmt = insert(translation_table).values(
        content_id=content_id,
        language_code=language_code,
        updated_at=now,
        **values,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[translation_table.c.content_id, translation_table.c.language_code],
        set_={**{name: stmt.excluded[name] for name in TRANSLATION_FIELDS}, "updated_at": now},
    )
    await store.execute(stmt)

    logger.info(f"Translation saved: content_id={content_id} language={language_code}")
    return TranslationSaveResult(content_id=content_id, language_code=language_code)
