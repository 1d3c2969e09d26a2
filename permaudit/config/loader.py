"""
Load and validate the audit configuration file.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from permaudit.directory_list import DirectoryList, DirectoryRole
from permaudit.exceptions import ConfigError
from permaudit.permissions.file_permissions import (
    APPLICATION_NON_WRITABLE_ROLES,
    INSTALLATION_WRITABLE_ROLES,
)

logger = logging.getLogger(__name__)

# Resolved by every audit run, so they must keep a path
REQUIRED_ROLES = {
    role.value
    for role in (
        *INSTALLATION_WRITABLE_ROLES,
        *APPLICATION_NON_WRITABLE_ROLES,
        DirectoryRole.GENERATION,
    )
}


class AuditConfig(BaseModel):
    """Validated audit configuration."""

    root: str = Field(..., min_length=1, description="Application root directory")
    directories: Dict[str, Optional[str]] = Field(
        default_factory=dict,
        description="Role code to path overrides; null unsets a role",
    )
    verbose: bool = Field(default=False, description="Enable debug logging")

    @field_validator("directories")
    @classmethod
    def _known_roles(cls, value: Dict[str, Optional[str]]) -> Dict[str, Optional[str]]:
        codes = {role.value for role in DirectoryRole}
        unknown = sorted(code for code in value if code not in codes)
        if unknown:
            raise ValueError(
                f"Unknown directory role(s): {', '.join(unknown)}. "
                f"Expected one of: {', '.join(sorted(codes))}"
            )
        required = sorted(
            code for code, path in value.items() if path is None and code in REQUIRED_ROLES
        )
        if required:
            raise ValueError(f"Directory role(s) cannot be unset: {', '.join(required)}")
        return value

    def build_directory_list(self) -> DirectoryList:
        return DirectoryList(self.root, self.directories)


def load_config(path: str | Path) -> AuditConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the configuration file

    Returns:
        Validated AuditConfig

    Raises:
        ConfigError: If the file is missing, not valid YAML, or fails validation
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    try:
        config = AuditConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    logger.debug(f"Loaded config from {config_path}: root={config.root}")
    return config
