"""
Constants for Content Admin

Role names and fixed limits shared by the auth and service layers.
"""

from enum import Enum


class RoleName(str, Enum):
    """Enumeration of role names in the system."""

    USER = "user"
    ADMIN = "admin"


# Role given to accounts created through the one-time registration endpoint
REGISTRATION_ROLE = RoleName.ADMIN

# Roles allowed to call export
EXPORT_ROLES = (RoleName.ADMIN.value,)

MIN_PASSWORD_LENGTH = 8

# Query-string values the clients send for "no parent"
ROOT_PARENT_MARKERS = ("", "null", "undefined", "none")
