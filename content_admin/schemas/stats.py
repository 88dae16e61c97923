from typing import Optional

from pydantic import BaseModel

from content_admin.schemas.version import VersionRow


class TypeCount(BaseModel):
    type: str
    count: int


class LanguageCount(BaseModel):
    language_code: str
    count: int


class StatsResponse(BaseModel):
    content_count: int
    translation_count: int
    version_count: int
    root_count: int
    type_breakdown: list[TypeCount]
    languages: list[LanguageCount]
    latest_version: Optional[VersionRow] = None
