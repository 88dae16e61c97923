"""
Tests for dashboard statistics
"""

from datetime import datetime, timedelta, timezone

from utils.mock_utils import create_test_node, create_test_translation, create_test_version

from content_admin.services.stats_service import get_stats


async def test_empty_database(store):
    stats = await get_stats(store)

    assert stats.content_count == 0
    assert stats.translation_count == 0
    assert stats.version_count == 0
    assert stats.root_count == 0
    assert stats.type_breakdown == []
    assert stats.languages == []
    assert stats.latest_version is None


async def test_counts_and_breakdowns(store):
    root = await create_test_node(store, "book")
    await create_test_node(store, "book", sequence=1, is_deleted=True)
    chapter = await create_test_node(store, "chapter", parent_id=root)
    await create_test_node(store, "verse", parent_id=chapter, sequence=0)
    await create_test_node(store, "verse", parent_id=chapter, sequence=1)
    await create_test_translation(store, root, "en")
    await create_test_translation(store, chapter, "en")
    await create_test_translation(store, chapter, "ar")

    now = datetime.now(timezone.utc)
    await create_test_version(store, "1", created_at=now - timedelta(hours=1))
    await create_test_version(store, "2", created_at=now)

    stats = await get_stats(store)

    assert stats.content_count == 4
    assert stats.root_count == 1
    assert stats.translation_count == 3
    assert stats.version_count == 2
    assert [(t.type, t.count) for t in stats.type_breakdown] == [("verse", 2), ("book", 1), ("chapter", 1)]
    assert [(lang.language_code, lang.count) for lang in stats.languages] == [("en", 2), ("ar", 1)]
    assert stats.latest_version.version_number == "2"
