from fastapi import APIRouter, Depends

from content_admin.auth import get_current_user
from content_admin.database import get_row_store
from content_admin.row_store import RowStore
from content_admin.schemas.stats import StatsResponse
from content_admin.schemas.user import TokenUser
from content_admin.services.stats_service import get_stats

router = APIRouter(tags=["Stats"])


@router.get("/stats", response_model=StatsResponse)
async def stats(
    store: RowStore = Depends(get_row_store),
    current_user: TokenUser = Depends(get_current_user),
):
    return await get_stats(store)
