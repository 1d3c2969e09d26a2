"""
Filesystem access used by the permission audit.

Read-only probes only: nothing in this package changes filesystem state.
"""

from .driver import FileDriver
from .directory import Filesystem, WriteDirectory

__all__ = [
    "FileDriver",
    "Filesystem",
    "WriteDirectory",
]
