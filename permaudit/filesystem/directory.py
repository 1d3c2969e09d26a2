"""
Directory handles bound to a resolved role path.
"""

from permaudit.directory_list import DirectoryList
from permaudit.filesystem.driver import FileDriver


class WriteDirectory:
    """A directory the audit inspects for write access."""

    def __init__(self, path: str, driver: FileDriver):
        self.path = path
        self.driver = driver

    def get_absolute_path(self) -> str:
        return self.path

    def is_exist(self) -> bool:
        return self.driver.is_exists(self.path)

    def is_directory(self) -> bool:
        return self.driver.is_directory(self.path)

    def is_readable(self) -> bool:
        return self.driver.is_readable(self.path)

    def is_writable(self) -> bool:
        return self.driver.is_writable(self.path)

    def __repr__(self) -> str:
        return f"WriteDirectory({self.path!r})"


class Filesystem:
    """Hands out directory handles by role."""

    def __init__(self, directory_list: DirectoryList, driver: FileDriver | None = None):
        self.directory_list = directory_list
        self.driver = driver or FileDriver()

    def get_directory_write(self, role) -> WriteDirectory:
        return WriteDirectory(self.directory_list.get_path(role), self.driver)
