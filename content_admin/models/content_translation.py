"""
ContentTranslation model

Stores per-language text for ContentNode records using the
translation-table pattern. Each row holds every translatable field for one
(content, language) pair; saving a translation replaces the whole row.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint

from content_admin.database import Base

TRANSLATION_FIELDS = ("title", "transliteration", "translation", "original_text", "search_text")


class ContentTranslation(Base):
    __tablename__ = "content_translation"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    content_id = Column(Integer, ForeignKey("content.id"), nullable=False, index=True)
    language_code = Column(String(16), nullable=False)

    # Translatable fields
    title = Column(Text, nullable=False, default="")
    transliteration = Column(Text, nullable=False, default="")
    translation = Column(Text, nullable=False, default="")
    original_text = Column(Text, nullable=False, default="")
    search_text = Column(Text, nullable=False, default="")

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        # One translation per (content, language) pair
        UniqueConstraint("content_id", "language_code", name="uq_content_translation_language"),
        Index("idx_ct_language", "language_code"),
    )
