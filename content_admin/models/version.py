from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text

from content_admin.database import Base


class Version(Base):
    """Marker for one export of the content set. Never modified after insert."""

    __tablename__ = "versions"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    version_number = Column(String, unique=True, nullable=False, index=True)
    notes = Column(Text, nullable=False, default="")
    file_url = Column(Text, nullable=False, default="")
    content_count = Column(Integer, nullable=False, default=0)
    translation_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
