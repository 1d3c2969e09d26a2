"""
File driver: per-path predicates and non-recursive directory listing.
"""

import logging
import os

from permaudit.exceptions import FilesystemError

logger = logging.getLogger(__name__)


class FileDriver:
    """
    Thin wrapper over ``os`` probes.

    Predicates never raise; a failing system call reads as ``False``.
    Access checks are made for the effective user of the process.
    """

    def is_exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def is_directory(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_readable(self, path: str) -> bool:
        return self._access(path, os.R_OK)

    def is_writable(self, path: str) -> bool:
        return self._access(path, os.W_OK)

    def is_executable(self, path: str) -> bool:
        return self._access(path, os.X_OK)

    def is_symlink(self, path: str) -> bool:
        return os.path.islink(path)

    def read_directory(self, path: str) -> list[str]:
        """
        List the immediate children of a directory.

        Args:
            path: Directory to list

        Returns:
            Sorted absolute paths of the children, without "." and ".."

        Raises:
            FilesystemError: If the directory cannot be opened
        """
        try:
            with os.scandir(path) as entries:
                children = [self._join(path, entry.name) for entry in entries]
        except OSError as e:
            raise FilesystemError(
                f"The \"{path}\" directory cannot be read: {e.strerror or e}", path=path
            ) from e
        return sorted(children)

    @staticmethod
    def _join(directory: str, name: str) -> str:
        return directory.rstrip("/\\") + "/" + name

    @staticmethod
    def _access(path: str, mode: int) -> bool:
        try:
            return os.access(path, mode, effective_ids=os.access in os.supports_effective_ids)
        except (OSError, ValueError) as e:
            logger.debug(f"Cannot check access for {path}: {e}")
            return False
