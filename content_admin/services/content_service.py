"""
Content Tree Service

Async operations over the ``content`` table: lazy child listing, flat tree
listing, create, partial update, cascade soft delete and sibling reorder.

Every statement goes through the RowStore and is committed on its own.
Multi-statement operations (delete, reorder) are loops of independent
updates: a failure part way through leaves the earlier updates in place.
All validation and existence checks run before the first write.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import and_, func, insert, select, update

from content_admin.exceptions import ContentNotFoundError, ValidationError
from content_admin.models.content_node import ContentNode
from content_admin.models.content_translation import ContentTranslation
from content_admin.row_store import RowStore  # noqa: TC001
from content_admin.schemas.content import (
    ContentChildRow,
    ContentNodeRow,
    ContentTreeRow,
    ContentUpdate,
    DeleteResult,
    ReorderResult,
)

logger = logging.getLogger(__name__)

content_table = ContentNode.__table__
translation_table = ContentTranslation.__table__

NULLABLE_FIELDS = {"parent_id", "audio_url", "video_url", "css", "duas_url"}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _parent_clause(parent_id: int | None):
    if parent_id is None:
        return content_table.c.parent_id.is_(None)
    return content_table.c.parent_id == parent_id


def _active():
    return content_table.c.is_deleted.is_(False)


async def get_active_node(store: RowStore, content_id: int) -> dict | None:
    """Fetch a non-deleted node row, or None."""
    return await store.fetch_one(select(content_table).where(content_table.c.id == content_id, _active()))


async def _read_node(store: RowStore, content_id: int) -> ContentNodeRow:
    row = await store.fetch_one(select(content_table).where(content_table.c.id == content_id))
    if row is None:
        raise ContentNotFoundError(content_id)
    return ContentNodeRow.model_validate(row)


async def _require_parent(store: RowStore, parent_id: int | None) -> None:
    if parent_id is None:
        return
    if await get_active_node(store, parent_id) is None:
        raise ValidationError("Parent content not found.", field="parent_id", details={"parent_id": parent_id})


async def list_children(store: RowStore, parent_id: int | None) -> list[ContentChildRow]:
    """Return the non-deleted children of ``parent_id`` (roots for None), with child counts."""
    child = content_table.alias("child")
    stmt = (
        select(content_table, func.count(child.c.id).label("child_count"))
        .select_from(
            content_table.outerjoin(
                child,
                and_(child.c.parent_id == content_table.c.id, child.c.is_deleted.is_(False)),
            )
        )
        .where(_parent_clause(parent_id), _active())
        .group_by(*content_table.c)
        .order_by(content_table.c.sequence, content_table.c.id)
    )
    rows = await store.fetch_all(stmt)

    children = []
    for row in rows:
        child_count = row.get("child_count") or 0
        children.append(ContentChildRow.model_validate({**row, "child_count": child_count, "has_children": child_count > 0}))
    return children


async def list_tree(
    store: RowStore,
    with_translations: bool = False,
    language_code: str | None = None,
) -> list[ContentTreeRow]:
    """Return every non-deleted node ordered by (parent_id, sequence).

    When ``with_translations`` is set and a language code is given, each row
    also carries that language's translation fields (None where missing).
    """
    order = (content_table.c.parent_id.asc().nulls_first(), content_table.c.sequence, content_table.c.id)

    if with_translations and language_code:
        t = translation_table
        stmt = (
            select(
                content_table,
                t.c.language_code,
                t.c.title,
                t.c.transliteration,
                t.c.translation,
                t.c.original_text,
                t.c.search_text,
                t.c.updated_at.label("translation_updated_at"),
            )
            .select_from(
                content_table.outerjoin(
                    t,
                    and_(t.c.content_id == content_table.c.id, t.c.language_code == language_code),
                )
            )
            .where(_active())
            .order_by(*order)
        )
    else:
        stmt = select(content_table).where(_active()).order_by(*order)

    rows = await store.fetch_all(stmt)
    return [ContentTreeRow.model_validate(row) for row in rows]


async def next_sequence(store: RowStore, parent_id: int | None) -> int:
    max_sequence = await store.scalar(
        select(func.max(content_table.c.sequence)).where(_parent_clause(parent_id), _active())
    )
    return 0 if max_sequence is None else max_sequence + 1


async def create_content(
    store: RowStore,
    parent_id: int | None,
    content_type: str | None,
    sequence: int | None = None,
) -> ContentNodeRow:
    """
    Create a node under ``parent_id``.

    A non-null parent must exist and not be soft-deleted, the same check
    ``update_content`` applies when reparenting.

    Args:
        store: Row store bound to the request session.
        parent_id: Parent node id, or None for a root.
        content_type: Non-empty type tag, stored trimmed.
        sequence: Explicit sequence. When omitted the node goes after its
            last non-deleted sibling. The max read and the insert are two
            statements, so concurrent creates may share a sequence.

    Returns:
        ContentNodeRow: The stored row.

    Raises:
        ValidationError: If the type is blank or the parent does not exist.
    """
    if not isinstance(content_type, str) or not content_type.strip():
        raise ValidationError("Content type is required.", field="type")

    await _require_parent(store, parent_id)

    if sequence is None:
        sequence = await next_sequence(store, parent_id)

    now = _now()
    result = await store.execute(
        insert(content_table).values(
            parent_id=parent_id,
            type=content_type.strip(),
            sequence=sequence,
            is_deleted=False,
            created_at=now,
            updated_at=now,
        )
    )
    new_id = result.last_insert_id
    logger.info(f"Content created: id={new_id} parent_id={parent_id} sequence={sequence}")
    return await _read_node(store, new_id)


async def update_content(store: RowStore, content_id: int | None, changes: ContentUpdate) -> ContentNodeRow:
    """
    Apply the fields present in ``changes`` to a node.

    Raises:
        ValidationError: Missing id, nothing to update, self-parenting,
            blank type, null sequence, or an unknown parent.
        ContentNotFoundError: If the node is missing or deleted.
    """
    if content_id is None:
        raise ValidationError("Content ID is required.", field="id")

    values = changes.present_fields()

    if "parent_id" in values and values["parent_id"] == content_id:
        raise ValidationError("Content cannot be its own parent.", field="parent_id")
    if not values:
        raise ValidationError("No fields to update.")
    if "type" in values:
        if values["type"] is None or not values["type"].strip():
            raise ValidationError("Content type cannot be empty.", field="type")
        values["type"] = values["type"].strip()
    for field, value in values.items():
        if value is None and field not in NULLABLE_FIELDS:
            raise ValidationError(f"{field} cannot be null.", field=field)

    if await get_active_node(store, content_id) is None:
        raise ContentNotFoundError(content_id, message="Content not found.")

    # Moving a node under one of its own descendants is not checked here.
    await _require_parent(store, values.get("parent_id"))

    values["updated_at"] = _now()
    await store.execute(update(content_table).where(content_table.c.id == content_id).values(**values))
    logger.info(f"Content updated: id={content_id} fields={sorted(k for k in values if k != 'updated_at')}")
    return await _read_node(store, content_id)


async def collect_subtree_ids(store: RowStore, root_id: int) -> list[int]:
    """Return ``root_id`` followed by its non-deleted descendants in depth-first pre-order.

    Walks with an explicit stack and a visited set, so a parent cycle left by
    reparenting cannot make it loop.
    """
    ordered: list[int] = []
    visited: set[int] = set()
    stack = [root_id]

    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)
        ordered.append(current)

        rows = await store.fetch_all(
            select(content_table.c.id)
            .where(content_table.c.parent_id == current, _active())
            .order_by(content_table.c.sequence, content_table.c.id)
        )
        child_ids = [row["id"] for row in rows if row["id"] not in visited]
        stack.extend(reversed(child_ids))

    return ordered


async def delete_content(store: RowStore, content_id: int | None) -> DeleteResult:
    """Soft-delete a node and every non-deleted descendant, one row at a time."""
    if content_id is None:
        raise ValidationError("Content ID is required.", field="id")

    if await get_active_node(store, content_id) is None:
        raise ContentNotFoundError(content_id, message="Content not found or already deleted.")

    all_ids = await collect_subtree_ids(store, content_id)

    for node_id in all_ids:
        await store.execute(
            update(content_table).where(content_table.c.id == node_id).values(is_deleted=True, updated_at=_now())
        )

    logger.info(f"Content deleted: id={content_id} cascade={len(all_ids)}")
    return DeleteResult(deleted_count=len(all_ids), deleted_ids=all_ids)


async def reorder_content(store: RowStore, parent_id: int | None, ordered_ids: list[int] | None) -> ReorderResult:
    """Set ``sequence`` to each id's position in ``ordered_ids``.

    Every id must be a current child of ``parent_id``; the check runs before
    any write. Siblings left out of the list keep their old sequence.
    """
    if not ordered_ids:
        raise ValidationError("ordered_ids array is required.", field="ordered_ids")

    rows = await store.fetch_all(select(content_table.c.id).where(_parent_clause(parent_id), _active()))
    sibling_ids = {row["id"] for row in rows}

    for node_id in ordered_ids:
        if node_id not in sibling_ids:
            raise ValidationError(
                f"Content ID {node_id} does not belong to the specified parent or is deleted.",
                field="ordered_ids",
                details={"content_id": node_id, "parent_id": parent_id},
            )

    for index, node_id in enumerate(ordered_ids):
        await store.execute(
            update(content_table).where(content_table.c.id == node_id).values(sequence=index, updated_at=_now())
        )

    logger.info(f"Content reordered: parent_id={parent_id} count={len(ordered_ids)}")
    return ReorderResult(reordered_count=len(ordered_ids))
