"""
Permission audit engine.

Checks that the directories an installation writes to are writable all the
way down, and that directories which should be locked after installation are
no longer writable.

One FilePermissions instance is one audit run: every derived set is computed
on first access and kept for the lifetime of the instance. Construct a new
instance to see fresh filesystem state.
"""

import logging
import warnings

from permaudit.directory_list import DirectoryList, DirectoryRole
from permaudit.exceptions import FilesystemError
from permaudit.filesystem import FileDriver, Filesystem
from permaudit.os_info import OsInfo
from permaudit.permissions.scan import ExclusionRules, ScanOutcome, as_prefix, scan_tree

logger = logging.getLogger(__name__)

# Required writable for installation
INSTALLATION_WRITABLE_ROLES = (
    DirectoryRole.CONFIG,
    DirectoryRole.VAR_DIR,
    DirectoryRole.MEDIA,
    DirectoryRole.STATIC_VIEW,
)

# Recommended non-writable once the application is installed
APPLICATION_NON_WRITABLE_ROLES = (DirectoryRole.CONFIG,)

# Regenerable compiled code, may be served read-only
PRUNED_ROLES = (DirectoryRole.GENERATION, DirectoryRole.DI)

# Often kept in an external session store
EXCLUDED_ROLES = (DirectoryRole.SESSION,)

RoleSet = tuple[tuple[DirectoryRole, str], ...]


def _difference(required: list[str], current: list[str]) -> list[str]:
    return [path for path in required if path not in current]


class FilePermissions:
    """
    Audits filesystem permissions of the application directories.

    Args:
        filesystem: Hands out directory handles by role.
        directory_list: Resolves roles to paths.
        driver: Per-path predicates and directory listing.
        os_info: Platform identification.
    """

    def __init__(
        self,
        filesystem: Filesystem,
        directory_list: DirectoryList,
        driver: FileDriver,
        os_info: OsInfo,
    ):
        self.filesystem = filesystem
        self.directory_list = directory_list
        self.driver = driver
        self.os_info = os_info

        self._installation_writable: RoleSet | None = None
        self._application_non_writable: RoleSet | None = None
        self._installation_current_writable: list[str] | None = None
        self._application_current_non_writable: list[str] | None = None

        # Root path -> specific non-writable paths found for it
        self.non_writable_paths_in_directories: dict[str, list[str]] = {}

    @classmethod
    def for_root(cls, root: str, directories=None) -> "FilePermissions":
        """Build an engine with the default collaborators for an application root."""
        directory_list = DirectoryList(root, directories)
        driver = FileDriver()
        return cls(Filesystem(directory_list, driver), directory_list, driver, OsInfo())

    def _resolve(self, roles) -> RoleSet:
        return tuple((role, self.directory_list.get_path(role)) for role in roles)

    def _installation_role_set(self) -> RoleSet:
        if self._installation_writable is None:
            self._installation_writable = self._resolve(INSTALLATION_WRITABLE_ROLES)
        return self._installation_writable

    def _application_role_set(self) -> RoleSet:
        if self._application_non_writable is None:
            self._application_non_writable = self._resolve(APPLICATION_NON_WRITABLE_ROLES)
        return self._application_non_writable

    def get_installation_writable_directories(self) -> list[str]:
        """Retrieve list of required writable directories for installation."""
        return [path for _, path in self._installation_role_set()]

    def get_application_non_writable_directories(self) -> list[str]:
        """Retrieve list of recommended non-writable directories for application."""
        return [path for _, path in self._application_role_set()]

    def get_installation_current_writable_directories(self) -> list[str]:
        """
        Retrieve list of currently writable directories for installation.

        A directory counts only when it and everything below it (outside the
        excluded subtrees) is writable. Offending paths are recorded in
        ``non_writable_paths_in_directories``.
        """
        if self._installation_current_writable is None:
            current = []
            for role, path in self._installation_role_set():
                if self.is_writable(role):
                    if self.check_recursive_directories(path):
                        current.append(path)
                else:
                    logger.info(f"Directory is not writable: {path}")
                    self.non_writable_paths_in_directories[path] = [path]
            logger.debug(f"Currently writable for installation: {current}")
            self._installation_current_writable = current
        return list(self._installation_current_writable)

    def _exclusion_rules(self) -> ExclusionRules:
        # Unset roles have nothing to exclude
        configured = self.directory_list.get_roles()
        return ExclusionRules(
            pruned=tuple(as_prefix(configured[role]) for role in PRUNED_ROLES if role in configured),
            excluded=tuple(
                as_prefix(configured[role]) for role in EXCLUDED_ROLES if role in configured
            ),
        )

    def scan_directory(self, directory: str) -> ScanOutcome:
        """
        Scan all sub-directories and files except generated code and sessions.

        Violations found are appended to ``non_writable_paths_in_directories``
        under ``directory``, including those found before an aborted scan.
        """
        outcome = scan_tree(self.driver, directory, self._exclusion_rules())
        if outcome.violations:
            logger.info(f"{len(outcome.violations)} non-writable path(s) in {directory}")
            self.non_writable_paths_in_directories.setdefault(directory, []).extend(
                outcome.violations
            )
        return outcome

    def check_recursive_directories(self, directory: str) -> bool:
        """True when the scan of ``directory`` completed with no violations."""
        return self.scan_directory(directory).compliant

    def get_application_current_non_writable_directories(self) -> list[str]:
        """Retrieve list of currently non-writable directories for application."""
        if self._application_current_non_writable is None:
            self._application_current_non_writable = [
                path for role, path in self._application_role_set() if self.is_non_writable(role)
            ]
        return list(self._application_current_non_writable)

    def is_writable(self, role) -> bool:
        """Checks if directory is writable by given directory role."""
        directory = self.filesystem.get_directory_write(role)
        return self._is_readable_directory(directory) and directory.is_writable()

    def is_non_writable(self, role) -> bool:
        """Checks if directory is non-writable by given directory role."""
        directory = self.filesystem.get_directory_write(role)
        return self._is_readable_directory(directory) and not directory.is_writable()

    @staticmethod
    def _is_readable_directory(directory) -> bool:
        return directory.is_exist() and directory.is_directory() and directory.is_readable()

    def check_directory_permission_for_cli_user(self) -> bool:
        """
        Checks that the generated code directory and its immediate children
        can be read and traversed by the current process.

        Execute permission is not required on Windows.
        """
        generation_dir = self.directory_list.get_path(DirectoryRole.GENERATION)
        try:
            dirs = self.driver.read_directory(generation_dir)
        except FilesystemError as e:
            logger.warning(f"Cannot list {generation_dir}: {e}")
            return False
        dirs.insert(0, generation_dir)

        for path in dirs:
            if not self._directory_permission_for_cli_user_valid(path):
                logger.info(f"Directory not accessible for CLI user: {path}")
                return False
        return True

    def _directory_permission_for_cli_user_valid(self, path: str) -> bool:
        return (
            self.driver.is_directory(path)
            and self.driver.is_readable(path)
            and (self.driver.is_executable(path) or self.os_info.is_windows())
        )

    def get_missing_writable_paths_for_installation(self) -> list[str]:
        """
        Checks writable paths for installation.

        Returns:
            Every specific path that blocks installation, flattened across the
            required directories in their required order.
        """
        required = self.get_installation_writable_directories()
        current = self.get_installation_current_writable_directories()
        missing_paths = []
        for missing in _difference(required, current):
            missing_paths.extend(self.non_writable_paths_in_directories.get(missing, []))
        return missing_paths

    def get_missing_writable_directories_for_installation(self) -> list[str]:
        """
        Checks writable directories for installation.

        Deprecated: use get_missing_writable_paths_for_installation().
        """
        warnings.warn(
            "get_missing_writable_directories_for_installation() is deprecated, "
            "use get_missing_writable_paths_for_installation()",
            DeprecationWarning,
            stacklevel=2,
        )
        required = self.get_installation_writable_directories()
        current = self.get_installation_current_writable_directories()
        return _difference(required, current)

    def get_unnecessary_writable_directories_for_application(self) -> list[str]:
        """Checks non-writable directories for application."""
        required = self.get_application_non_writable_directories()
        current = self.get_application_current_non_writable_directories()
        return _difference(required, current)
