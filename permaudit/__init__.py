from .directory_list import DirectoryList, DirectoryRole
from .permissions import FilePermissions

__version__ = "0.1.0"

__all__ = ["DirectoryList", "DirectoryRole", "FilePermissions"]
