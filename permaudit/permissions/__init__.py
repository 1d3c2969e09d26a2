"""
Permission audit module.
"""

from .file_permissions import (
    APPLICATION_NON_WRITABLE_ROLES,
    INSTALLATION_WRITABLE_ROLES,
    FilePermissions,
)
from .scan import ExclusionRules, ScanOutcome, ScanStatus, scan_tree, walk_post_order


def audit_root(root: str, directories=None) -> FilePermissions:
    """Compatibility function: Build an audit session for an application root."""
    return FilePermissions.for_root(root, directories)


__all__ = [
    "APPLICATION_NON_WRITABLE_ROLES",
    "INSTALLATION_WRITABLE_ROLES",
    "ExclusionRules",
    "FilePermissions",
    "ScanOutcome",
    "ScanStatus",
    "audit_root",
    "scan_tree",
    "walk_post_order",
]
