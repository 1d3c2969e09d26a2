"""
Directory role registry.

Maps symbolic directory roles to absolute paths under an application root.
"""

import logging
import os
from enum import Enum
from typing import Mapping

from permaudit.exceptions import UnknownRoleError

logger = logging.getLogger(__name__)


class DirectoryRole(str, Enum):
    """Functionally significant application directories."""

    ROOT = "base"
    CONFIG = "etc"
    VAR_DIR = "var"
    MEDIA = "media"
    STATIC_VIEW = "static"
    GENERATION = "generation"
    DI = "di"
    SESSION = "session"


# Layout relative to the application root
DEFAULT_LAYOUT = {
    DirectoryRole.ROOT: "",
    DirectoryRole.CONFIG: "app/etc",
    DirectoryRole.VAR_DIR: "var",
    DirectoryRole.MEDIA: "pub/media",
    DirectoryRole.STATIC_VIEW: "pub/static",
    DirectoryRole.GENERATION: "var/generation",
    DirectoryRole.DI: "var/di",
    DirectoryRole.SESSION: "var/session",
}


def normalize_path(path: str) -> str:
    """Return an absolute path using forward slashes and no trailing slash."""
    normalized = os.path.abspath(path).replace("\\", "/")
    if len(normalized) > 1:
        normalized = normalized.rstrip("/")
    return normalized


def to_role(code) -> DirectoryRole:
    """Coerce a role or role code into a DirectoryRole."""
    if isinstance(code, DirectoryRole):
        return code
    try:
        return DirectoryRole(code)
    except ValueError:
        raise UnknownRoleError(code) from None


class DirectoryList:
    """
    Resolves directory roles to absolute paths.

    Args:
        root: Application root directory.
        config: Optional overrides keyed by role (or role code). Relative
            paths are taken relative to ``root``; None unsets the role.
    """

    def __init__(self, root: str, config: Mapping | None = None):
        self.root = normalize_path(root)
        self._paths: dict[DirectoryRole, str] = {}

        layout = dict(DEFAULT_LAYOUT)
        for code, path in (config or {}).items():
            # None unsets a role
            if path is None:
                layout.pop(to_role(code), None)
            else:
                layout[to_role(code)] = path

        for role, path in layout.items():
            self._paths[role] = normalize_path(os.path.join(self.root, path))

    def get_path(self, role) -> str:
        """
        Get the absolute path configured for a role.

        Raises:
            UnknownRoleError: If the role is not configured.
        """
        resolved = to_role(role)
        if resolved not in self._paths:
            raise UnknownRoleError(role)
        return self._paths[resolved]

    def get_roles(self) -> dict[DirectoryRole, str]:
        return dict(self._paths)
