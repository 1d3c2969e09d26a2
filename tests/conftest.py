"""Pytest configuration for the `tests/` suite.

Engine tests run against an in-memory filesystem so that permission bits are
honoured even when the suite runs as root (where ``os.access`` reports every
path as writable).
"""

from __future__ import annotations

import pytest

from permaudit.directory_list import DirectoryList, DirectoryRole
from permaudit.exceptions import FilesystemError
from permaudit.filesystem import Filesystem
from permaudit.permissions import FilePermissions


class FakeDriver:
    """In-memory stand-in for FileDriver."""

    def __init__(self):
        self.nodes: dict[str, dict] = {}
        self.listed: list[str] = []

    def add(
        self,
        path: str,
        is_dir: bool = False,
        writable: bool = True,
        readable: bool = True,
        executable: bool = True,
        symlink: bool = False,
        listable: bool = True,
    ) -> None:
        # Create missing parents as plain writable directories
        parent = path.rsplit("/", 1)[0]
        if parent and parent not in self.nodes:
            self.add(parent, is_dir=True)
        self.nodes[path] = {
            "dir": is_dir,
            "writable": writable,
            "readable": readable,
            "executable": executable,
            "symlink": symlink,
            "listable": listable,
        }

    def add_dir(self, path: str, **attrs) -> None:
        self.add(path, is_dir=True, **attrs)

    def remove(self, path: str) -> None:
        for key in [p for p in self.nodes if p == path or p.startswith(path + "/")]:
            del self.nodes[key]

    def _get(self, path: str, key: str) -> bool:
        node = self.nodes.get(path)
        return bool(node and node[key])

    def is_exists(self, path: str) -> bool:
        return path in self.nodes

    def is_directory(self, path: str) -> bool:
        return self._get(path, "dir")

    def is_file(self, path: str) -> bool:
        return path in self.nodes and not self.nodes[path]["dir"]

    def is_readable(self, path: str) -> bool:
        return self._get(path, "readable")

    def is_writable(self, path: str) -> bool:
        return self._get(path, "writable")

    def is_executable(self, path: str) -> bool:
        return self._get(path, "executable")

    def is_symlink(self, path: str) -> bool:
        return self._get(path, "symlink")

    def read_directory(self, path: str) -> list[str]:
        self.listed.append(path)
        if not self.is_directory(path) or not self.nodes[path]["listable"]:
            raise FilesystemError(f'The "{path}" directory cannot be read', path=path)
        prefix = path + "/"
        return sorted(
            p for p in self.nodes if p.startswith(prefix) and "/" not in p[len(prefix):]
        )


class FakeOsInfo:
    def __init__(self, windows: bool = False):
        self.windows = windows

    def is_windows(self) -> bool:
        return self.windows


ROOT = "/app"

LAYOUT = {
    DirectoryRole.CONFIG: "/app/etc",
    DirectoryRole.VAR_DIR: "/app/var",
    DirectoryRole.MEDIA: "/app/media",
    DirectoryRole.STATIC_VIEW: "/app/static",
    DirectoryRole.GENERATION: "/app/var/generation",
    DirectoryRole.DI: "/app/var/di",
    DirectoryRole.SESSION: "/app/var/session",
}


@pytest.fixture
def fake_driver():
    """A fake tree where every role directory exists and is writable."""
    driver = FakeDriver()
    for path in LAYOUT.values():
        driver.add_dir(path)
    return driver


@pytest.fixture
def fake_os_info():
    return FakeOsInfo()


@pytest.fixture
def directory_list():
    return DirectoryList(ROOT, {role: path for role, path in LAYOUT.items()})


@pytest.fixture
def make_permissions(fake_driver, fake_os_info, directory_list):
    """Factory for audit sessions over the fake tree."""

    def _make(dirs: DirectoryList | None = None) -> FilePermissions:
        dirs = dirs or directory_list
        return FilePermissions(Filesystem(dirs, fake_driver), dirs, fake_driver, fake_os_info)

    return _make
