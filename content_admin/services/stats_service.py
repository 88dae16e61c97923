"""Stats service for dashboard counts and breakdowns."""

from sqlalchemy import func, select

from content_admin.models.content_node import ContentNode
from content_admin.models.content_translation import ContentTranslation
from content_admin.models.version import Version
from content_admin.row_store import RowStore  # noqa: TC001
from content_admin.schemas.stats import LanguageCount, StatsResponse, TypeCount
from content_admin.schemas.version import VersionRow


async def get_stats(store: RowStore) -> StatsResponse:
    """Get content, translation and version counts using batched conditional aggregation."""
    # Single query: active, roots
    content_row = await store.fetch_one(
        select(
            func.count(ContentNode.id).label("content_count"),
            func.count(ContentNode.id).filter(ContentNode.parent_id.is_(None)).label("root_count"),
        ).where(ContentNode.is_deleted.is_(False))
    )

    translation_count = await store.scalar(select(func.count(ContentTranslation.id)))
    version_count = await store.scalar(select(func.count(Version.id)))

    # Content by type (separate GROUP BY query)
    type_count = func.count(ContentNode.id).label("count")
    type_rows = await store.fetch_all(
        select(ContentNode.type, type_count)
        .where(ContentNode.is_deleted.is_(False))
        .group_by(ContentNode.type)
        .order_by(type_count.desc(), ContentNode.type)
    )

    language_count = func.count(ContentTranslation.id).label("count")
    language_rows = await store.fetch_all(
        select(ContentTranslation.language_code, language_count)
        .group_by(ContentTranslation.language_code)
        .order_by(language_count.desc(), ContentTranslation.language_code)
    )

    latest = await store.fetch_one(
        select(Version.__table__).order_by(Version.created_at.desc(), Version.id.desc()).limit(1)
    )

    return StatsResponse(
        content_count=(content_row or {}).get("content_count") or 0,
        root_count=(content_row or {}).get("root_count") or 0,
        translation_count=translation_count or 0,
        version_count=version_count or 0,
        type_breakdown=[TypeCount.model_validate(row) for row in type_rows],
        languages=[LanguageCount.model_validate(row) for row in language_rows],
        latest_version=VersionRow.model_validate(latest) if latest else None,
    )
