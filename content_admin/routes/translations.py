from typing import Optional

from fastapi import APIRouter, Depends, Query

from content_admin.auth import get_current_user
from content_admin.database import get_row_store
from content_admin.row_store import RowStore
from content_admin.schemas.translation import TranslationBundle, TranslationSaveRequest, TranslationSaveResult
from content_admin.schemas.user import TokenUser
from content_admin.services import translation_service

router = APIRouter(tags=["Translations"])


@router.get("/translations-get", response_model=TranslationBundle)
async def get_translations(
    content_id: Optional[int] = Query(None),
    store: RowStore = Depends(get_row_store),
    current_user: TokenUser = Depends(get_current_user),
):
    return await translation_service.get_translations(store, content_id)


@router.post("/translation-save", response_model=TranslationSaveResult)
async def save_translation(
    payload: TranslationSaveRequest,
    store: RowStore = Depends(get_row_store),
    current_user: TokenUser = Depends(get_current_user),
):
    """Insert or fully replace one language's text for a node. Omitted fields are saved empty."""
    return await translation_service.save_translation(
        store, payload.content_id, payload.language_code, payload.fields()
    )
