from .content import (
    ContentChildRow,
    ContentCreate,
    ContentNodeRow,
    ContentTreeRow,
    ContentUpdate,
    DeleteResult,
    ReorderResult,
)
from .stats import StatsResponse
from .translation import TranslationBundle, TranslationFields, TranslationRow, TranslationSaveResult
from .user import Credentials, LoginResponse, RegisterResponse, TokenUser
from .version import ExportArtifact, VersionRow

# Define the public API of this module
__all__ = [
    "ContentChildRow",
    "ContentCreate",
    "ContentNodeRow",
    "ContentTreeRow",
    "ContentUpdate",
    "DeleteResult",
    "ReorderResult",
    "StatsResponse",
    "TranslationBundle",
    "TranslationFields",
    "TranslationRow",
    "TranslationSaveResult",
    "Credentials",
    "LoginResponse",
    "RegisterResponse",
    "TokenUser",
    "ExportArtifact",
    "VersionRow",
]
