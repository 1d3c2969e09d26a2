"""
Audit configuration.

A YAML file names the application root and optional per-role path overrides:

    root: /var/www/shop
    directories:
      media: /mnt/shared/media
      session: null
"""

from .loader import AuditConfig, load_config

__all__ = [
    "AuditConfig",
    "load_config",
]
