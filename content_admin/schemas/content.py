from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ContentNodeRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., title="Content ID", description="The unique identifier of the node.")
    parent_id: Optional[int] = Field(None, title="Parent ID", description="Parent node id, null for roots.")
    type: str = Field(..., title="Type", description="Semantic category, e.g. chapter or verse.")
    sequence: int = Field(0, title="Sequence", description="Ordering among siblings.")
    audio_url: Optional[str] = None
    video_url: Optional[str] = None
    css: Optional[str] = None
    duas_url: Optional[str] = None
    is_deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ContentChildRow(ContentNodeRow):
    child_count: int = Field(0, description="Number of non-deleted immediate children.")
    has_children: bool = False


class ContentTreeRow(ContentNodeRow):
    """Node row, optionally joined with one language's translation."""

    language_code: Optional[str] = None
    title: Optional[str] = None
    transliteration: Optional[str] = None
    translation: Optional[str] = None
    original_text: Optional[str] = None
    search_text: Optional[str] = None
    translation_updated_at: Optional[datetime] = None


class ContentCreate(BaseModel):
    parent_id: Optional[int] = Field(None, title="Parent ID", description="Parent node id, omit for a root node.")
    type: Optional[str] = Field(None, title="Type", description="Semantic category of the new node.")
    sequence: Optional[int] = Field(
        None, title="Sequence", description="Explicit sequence; defaults to one past the last sibling."
    )


class ContentUpdate(BaseModel):
    """Partial update of a node.

    Only the fields the caller actually sent are applied. ``model_fields_set``
    tells an omitted field apart from one explicitly set to ``null``.
    """

    parent_id: Optional[int] = None
    type: Optional[str] = None
    sequence: Optional[int] = None
    audio_url: Optional[str] = None
    video_url: Optional[str] = None
    css: Optional[str] = None
    duas_url: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "parent_id": 12,
                "type": "verse",
                "audio_url": "https://cdn.example.com/audio/12.mp3",
                "css": None,
            }
        }
    )

    def present_fields(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ContentUpdateRequest(ContentUpdate):
    id: Optional[int] = None

    def changes(self) -> ContentUpdate:
        return ContentUpdate.model_validate(self.model_dump(exclude_unset=True, exclude={"id"}))


class ContentDeleteRequest(BaseModel):
    id: Optional[int] = None


class ContentReorderRequest(BaseModel):
    parent_id: Optional[int] = None
    ordered_ids: Optional[list[int]] = None


class ContentListResponse(BaseModel):
    rows: list[ContentChildRow]
    count: int


class ContentCreateResponse(BaseModel):
    success: bool = True
    id: int
    row: ContentNodeRow


class ContentUpdateResponse(BaseModel):
    success: bool = True
    row: ContentNodeRow


class DeleteResult(BaseModel):
    success: bool = True
    deleted_count: int
    deleted_ids: list[int]


class ReorderResult(BaseModel):
    success: bool = True
    reordered_count: int
