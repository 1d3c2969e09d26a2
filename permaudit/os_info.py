"""Operating system identification."""

import platform


class OsInfo:
    """Answers platform questions the audit depends on."""

    def is_windows(self) -> bool:
        return platform.system() == "Windows"
