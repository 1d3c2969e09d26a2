"""
Recursive compliance scan of a directory tree.

The walk is children-before-parent and never follows symlinked directories.
Entries under pruned prefixes are skipped without descending into them;
entries under excluded prefixes are skipped but the walk continues through
them.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from permaudit.exceptions import FilesystemError
from permaudit.filesystem.driver import FileDriver

logger = logging.getLogger(__name__)


def _slashed(path: str) -> str:
    return path.replace("\\", "/")


def as_prefix(path: str) -> str:
    """Turn a directory path into a prefix that matches only its descendants."""
    return _slashed(path).rstrip("/") + "/"


class ScanStatus(Enum):
    CLEAN = "clean"
    VIOLATIONS = "violations"
    ABORTED = "aborted"


@dataclass
class ScanOutcome:
    """
    Result of scanning one root.

    Args:
        root: Directory that was scanned.
        status: How the scan ended.
        violations: Non-writable entries found, in walk order. Kept when the
            scan aborts part way.
        error: Reason the scan aborted, if it did.
    """

    root: str
    status: ScanStatus
    violations: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def compliant(self) -> bool:
        return self.status is ScanStatus.CLEAN


@dataclass
class ExclusionRules:
    """Path prefixes left out of a compliance scan."""

    pruned: tuple[str, ...] = ()
    excluded: tuple[str, ...] = ()

    def prunes(self, path: str) -> bool:
        path = _slashed(path)
        return any(path.startswith(prefix) for prefix in self.pruned)

    def excludes(self, path: str) -> bool:
        path = _slashed(path)
        return any(path.startswith(prefix) for prefix in self.excluded)

    def skips_children_of(self, directory: str) -> bool:
        """True when every child of ``directory`` would be pruned anyway."""
        return self.prunes(as_prefix(directory))


def walk_post_order(driver: FileDriver, root: str, rules: ExclusionRules) -> Iterator[str]:
    """
    Yield every entry below ``root`` that the rules let through.

    Raises:
        FilesystemError: If a directory on the way cannot be listed.
    """
    for path in driver.read_directory(root):
        if rules.prunes(path):
            continue
        if (
            driver.is_directory(path)
            and not driver.is_symlink(path)
            and not rules.skips_children_of(path)
        ):
            yield from walk_post_order(driver, path, rules)
        if rules.excludes(path):
            continue
        yield path


def scan_tree(driver: FileDriver, root: str, rules: ExclusionRules) -> ScanOutcome:
    """Check that every entry below ``root`` is writable or a symlink."""
    violations = []
    try:
        for path in walk_post_order(driver, root, rules):
            if not driver.is_writable(path) and not driver.is_symlink(path):
                logger.debug(f"Not writable: {path}")
                violations.append(path)
    except FilesystemError as e:
        logger.warning(f"Scan of {root} aborted: {e}")
        return ScanOutcome(root, ScanStatus.ABORTED, violations, error=str(e))

    status = ScanStatus.VIOLATIONS if violations else ScanStatus.CLEAN
    return ScanOutcome(root, status, violations)
