from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class VersionRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    version_number: str
    notes: str = ""
    file_url: str = ""
    content_count: int = 0
    translation_count: int = 0
    created_at: Optional[datetime] = None


class ExportRequest(BaseModel):
    version_number: Optional[Union[str, int, float]] = Field(
        None, description="Unique label of the export, e.g. 3 or '1.4.0'."
    )
    notes: Optional[str] = None


class VersionListResponse(BaseModel):
    versions: list[VersionRow]
    count: int


class ExportArtifact(BaseModel):
    """A generated SQL dump ready to be served as a file."""

    filename: str
    content_disposition: str
    body: str
    version: VersionRow
    media_type: str = "application/sql"
