"""
Export Service

Snapshots the active content tree and its translations into a textual SQL
dump and records a Version marker for each export.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError

from content_admin.config import settings
from content_admin.exceptions import ConflictError, ValidationError, VersionNotFoundError
from content_admin.models.content_node import ContentNode
from content_admin.models.content_translation import ContentTranslation
from content_admin.models.version import Version
from content_admin.row_store import RowStore  # noqa: TC001
from content_admin.schemas.version import ExportArtifact, VersionRow
from content_admin.utils.sql_dump import build_sql_dump, content_disposition, export_filename

logger = logging.getLogger(__name__)

content_table = ContentNode.__table__
translation_table = ContentTranslation.__table__
version_table = Version.__table__

DEFAULT_CHUNK_SIZE = 500

# The version number ends up in a filename and a dump header line
FORBIDDEN_VERSION_CHARS = frozenset('"\\/')


def normalize_version_number(value) -> str:
    if value is None or isinstance(value, bool):
        raise ValidationError("version_number is required.", field="version_number")
    version_number = str(value).strip()
    if not version_number:
        raise ValidationError("version_number is required.", field="version_number")
    if any(ch in FORBIDDEN_VERSION_CHARS or not ch.isprintable() for ch in version_number):
        raise ValidationError(
            "version_number must not contain quotes, slashes or control characters.", field="version_number"
        )
    return version_number


class ExportService:
    """Service for exporting the content set as SQL and tracking versions"""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        self.chunk_size = chunk_size

    async def snapshot(self, store: RowStore) -> tuple[list[dict], list[dict]]:
        """
        Read the current active content and its translations.

        Translations are fetched in batches of ``chunk_size`` content ids to
        stay under statement parameter limits.

        Returns:
            (content_rows, translation_rows)
        """
        content_rows = await store.fetch_all(
            select(content_table)
            .where(content_table.c.is_deleted.is_(False))
            .order_by(content_table.c.parent_id.asc().nulls_first(), content_table.c.sequence, content_table.c.id)
        )

        content_ids = [row["id"] for row in content_rows]
        translation_rows: list[dict] = []
        for start in range(0, len(content_ids), self.chunk_size):
            chunk = content_ids[start : start + self.chunk_size]
            translation_rows.extend(
                await store.fetch_all(
                    select(translation_table)
                    .where(translation_table.c.content_id.in_(chunk))
                    .order_by(translation_table.c.content_id, translation_table.c.language_code)
                )
            )

        return content_rows, translation_rows

    async def export(self, store: RowStore, version_number, notes: str | None = None) -> ExportArtifact:
        """
        Export the content set and record a new Version.

        Args:
            store: Row store bound to the request session
            version_number: Unique label for the export
            notes: Optional free text stored with the version

        Returns:
            ExportArtifact with the SQL dump and the recorded version

        Raises:
            ValidationError: If version_number is missing or holds forbidden characters
            ConflictError: If the version number already exists
        """
        version_number = normalize_version_number(version_number)

        existing = await store.fetch_one(
            select(version_table.c.id).where(version_table.c.version_number == version_number)
        )
        if existing is not None:
            raise ConflictError(
                f"Version {version_number} already exists.",
                resource_type="Version",
                field="version_number",
                value=version_number,
            )

        filename = export_filename(version_number)
        disposition = content_disposition(filename)

        content_rows, translation_rows = await self.snapshot(store)
        generated_at = datetime.now(timezone.utc)
        body = build_sql_dump(version_number, content_rows, translation_rows, generated_at=generated_at)

        try:
            result = await store.execute(
                insert(version_table).values(
                    version_number=version_number,
                    notes=notes or "",
                    file_url="",
                    content_count=len(content_rows),
                    translation_count=len(translation_rows),
                    created_at=generated_at,
                )
            )
        except IntegrityError as e:
            logger.warning(f"Version {version_number} was recorded concurrently: {e}")
            raise ConflictError(
                f"Version {version_number} already exists.",
                resource_type="Version",
                field="version_number",
                value=version_number,
            ) from e

        version = await self.get_version(store, result.last_insert_id)
        logger.info(
            f"Export v{version_number} recorded: {len(content_rows)} content rows, "
            f"{len(translation_rows)} translation rows"
        )
        return ExportArtifact(filename=filename, content_disposition=disposition, body=body, version=version)

    async def get_version(self, store: RowStore, version_id: int | None) -> VersionRow:
        if version_id is None:
            raise ValidationError("Version ID is required.", field="id")
        row = await store.fetch_one(select(version_table).where(version_table.c.id == version_id))
        if row is None:
            raise VersionNotFoundError(version_id)
        return VersionRow.model_validate(row)

    async def list_versions(self, store: RowStore) -> list[VersionRow]:
        rows = await store.fetch_all(
            select(version_table).order_by(version_table.c.created_at.desc(), version_table.c.id.desc())
        )
        return [VersionRow.model_validate(row) for row in rows]

    async def redownload(self, store: RowStore, version_id: int | None) -> ExportArtifact | str:
        """
        Return the export for a recorded version.

        A version with a stored ``file_url`` returns that URL for the caller to
        redirect to. Otherwise the dump is rebuilt from the *current* content,
        which may differ from what existed when the version was recorded.
        """
        version = await self.get_version(store, version_id)
        if version.file_url:
            return version.file_url

        content_rows, translation_rows = await self.snapshot(store)
        body = build_sql_dump(version.version_number, content_rows, translation_rows, regenerated=True)
        logger.info(f"Export v{version.version_number} regenerated from current content")
        filename = export_filename(version.version_number)
        return ExportArtifact(
            filename=filename, content_disposition=content_disposition(filename), body=body, version=version
        )


# Create singleton instance
export_service = ExportService(chunk_size=settings.export_chunk_size)
