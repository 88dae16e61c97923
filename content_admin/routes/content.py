"""
Content Tree Routes

Lazy child listing, flat tree listing and the mutating operations on
content nodes. Every route requires a signed-in user.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from content_admin.auth import get_current_user
from content_admin.constants import ROOT_PARENT_MARKERS
from content_admin.database import get_row_store
from content_admin.exceptions import ValidationError
from content_admin.row_store import RowStore
from content_admin.schemas.content import (
    ContentCreate,
    ContentCreateResponse,
    ContentDeleteRequest,
    ContentListResponse,
    ContentReorderRequest,
    ContentUpdateRequest,
    ContentUpdateResponse,
    DeleteResult,
    ReorderResult,
)
from content_admin.schemas.user import TokenUser
from content_admin.services import content_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Content"])

TREE_MODES = ("structure", "with-language")


def parse_parent_id(raw: Optional[str]) -> Optional[int]:
    """Turn the ``parent_id`` query value into an id, or None for the root level."""
    if raw is None or raw.strip().lower() in ROOT_PARENT_MARKERS:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError("parent_id must be an integer.", field="parent_id") from None


@router.get("/content-children")
async def get_content_children(
    parent_id: Optional[str] = Query(None, description="Parent node id; omit, empty or 'null' for roots."),
    store: RowStore = Depends(get_row_store),
    current_user: TokenUser = Depends(get_current_user),
):
    rows = await content_service.list_children(store, parse_parent_id(parent_id))
    return ContentListResponse(rows=rows, count=len(rows))


@router.get("/content-tree")
async def get_content_tree(
    mode: str = Query("structure", description="'structure' or 'with-language'."),
    language_code: Optional[str] = Query(None),
    store: RowStore = Depends(get_row_store),
    current_user: TokenUser = Depends(get_current_user),
):
    """
    Every non-deleted node as a flat list ordered by parent, then sequence.

    With ``mode=with-language&language_code=xx`` each row also carries that
    language's translation fields. Without a language code the structure is
    returned.
    """
    if mode not in TREE_MODES:
        raise ValidationError(f"Unknown mode '{mode}'.", field="mode")

    with_translations = mode == "with-language" and bool(language_code)
    rows = await content_service.list_tree(store, with_translations=with_translations, language_code=language_code)

    # Structure rows leave out the translation columns entirely
    payload = [row.model_dump(mode="json", exclude_unset=not with_translations) for row in rows]
    return {"rows": payload, "count": len(payload)}


@router.post("/content-create", response_model=ContentCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_content(
    payload: ContentCreate,
    store: RowStore = Depends(get_row_store),
    current_user: TokenUser = Depends(get_current_user),
):
    row = await content_service.create_content(store, payload.parent_id, payload.type, payload.sequence)
    return ContentCreateResponse(id=row.id, row=row)


@router.post("/content-update", response_model=ContentUpdateResponse)
async def update_content(
    payload: ContentUpdateRequest,
    store: RowStore = Depends(get_row_store),
    current_user: TokenUser = Depends(get_current_user),
):
    row = await content_service.update_content(store, payload.id, payload.changes())
    return ContentUpdateResponse(row=row)


@router.post("/content-delete", response_model=DeleteResult)
async def delete_content(
    payload: ContentDeleteRequest,
    store: RowStore = Depends(get_row_store),
    current_user: TokenUser = Depends(get_current_user),
):
    result = await content_service.delete_content(store, payload.id)
    logger.info(f"User {current_user.email} deleted content {payload.id} ({result.deleted_count} rows)")
    return result


@router.post("/content-reorder", response_model=ReorderResult)
async def reorder_content(
    payload: ContentReorderRequest,
    store: RowStore = Depends(get_row_store),
    current_user: TokenUser = Depends(get_current_user),
):
    return await content_service.reorder_content(store, payload.parent_id, payload.ordered_ids)
