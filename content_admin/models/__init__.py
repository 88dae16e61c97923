from .content_node import ContentNode
from .content_translation import ContentTranslation
from .user import User
from .version import Version

__all__ = [
    "ContentNode",
    "ContentTranslation",
    "User",
    "Version",
]
