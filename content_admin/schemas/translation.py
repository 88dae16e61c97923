from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class TranslationRow(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    content_id: int
    language_code: str
    title: str = ""
    transliteration: str = ""
    translation: str = ""
    original_text: str = ""
    search_text: str = ""
    updated_at: Optional[datetime] = None


class TranslationFields(BaseModel):
    """Text fields of a translation. Missing or null values are saved as empty strings."""

    title: Optional[str] = None
    transliteration: Optional[str] = None
    translation: Optional[str] = None
    original_text: Optional[str] = None
    search_text: Optional[str] = None


class TranslationSaveRequest(TranslationFields):
    content_id: Optional[int] = None
    language_code: Optional[str] = None

    def fields(self) -> TranslationFields:
        return TranslationFields.model_validate(self.model_dump(exclude={"content_id", "language_code"}))


class TranslationBundle(BaseModel):
    translations: dict[str, TranslationRow]
    rows: list[TranslationRow]
    count: int


class TranslationSaveResult(BaseModel):
    success: bool = True
    content_id: int
    language_code: str
