"""
Custom exceptions for the permission audit system.
"""


class PermAuditError(Exception):
    """Base exception for permission audit errors."""
    pass


class ConfigError(PermAuditError):
    """Raised when the audit configuration cannot be loaded or validated."""
    pass


class UnknownRoleError(PermAuditError, KeyError):
    """Raised when a directory role cannot be resolved to a path."""

    def __init__(self, role):
        self.role = role
        super().__init__(f"Unknown directory role: {getattr(role, 'value', role)}")

    def __str__(self) -> str:
        return self.args[0]


class FilesystemError(PermAuditError, OSError):
    """Raised when a directory cannot be listed."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        return self.args[0]
