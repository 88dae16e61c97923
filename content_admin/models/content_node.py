from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text

from content_admin.database import Base


class ContentNode(Base):
    """One entry in the content hierarchy.

    ``parent_id`` of ``None`` marks a root. Rows are never removed; deleting a
    node flips ``is_deleted`` on the node and its whole subtree.
    """

    __tablename__ = "content"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    parent_id = Column(Integer, ForeignKey("content.id"), nullable=True)
    type = Column(String, nullable=False)
    sequence = Column(Integer, nullable=False, default=0)
    audio_url = Column(Text, nullable=True)
    video_url = Column(Text, nullable=True)
    css = Column(Text, nullable=True)
    duas_url = Column(Text, nullable=True)
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_content_parent_sequence", "parent_id", "sequence"),
        Index("idx_content_is_deleted", "is_deleted"),
    )
