"""Permaudit CLI - Main entry point.

Read-only: reports permission problems, never changes them.
"""

import argparse
import json
import logging
import sys

from rich.console import Console

from permaudit import __version__
from permaudit.config import AuditConfig, load_config
from permaudit.directory_list import DirectoryList
from permaudit.exceptions import ConfigError, PermAuditError
from permaudit.filesystem import FileDriver, Filesystem
from permaudit.os_info import OsInfo
from permaudit.permissions import FilePermissions
from permaudit.report import collect_report, render_report

console = Console()

logger = logging.getLogger(__name__)


def _parse_dir_overrides(values: list[str] | None) -> dict[str, str]:
    overrides = {}
    for value in values or []:
        role, sep, path = value.partition("=")
        if not sep or not role or not path:
            raise ConfigError(f"Invalid --dir value '{value}', expected ROLE=PATH")
        overrides[role] = path
    return overrides


def build_config(args: argparse.Namespace) -> AuditConfig:
    """Merge the config file (if any) with command-line flags."""
    if args.config:
        config = load_config(args.config)
    elif args.root:
        config = AuditConfig(root=args.root)
    else:
        raise ConfigError("Either --root or --config is required")

    updates = {}
    if args.root:
        updates["root"] = args.root
    overrides = _parse_dir_overrides(args.dir)
    if overrides:
        updates["directories"] = {**config.directories, **overrides}
    if args.verbose:
        updates["verbose"] = True
    if updates:
        # Re-validate so flag overrides get the same checks as the file
        try:
            config = AuditConfig(**{**config.model_dump(), **updates})
        except ValueError as e:
            raise ConfigError(str(e)) from e
    return config


def build_permissions(config: AuditConfig) -> FilePermissions:
    directory_list: DirectoryList = config.build_directory_list()
    driver = FileDriver()
    return FilePermissions(Filesystem(directory_list, driver), directory_list, driver, OsInfo())


class PermissionsHandler:
    """Handler for audit commands."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def check(self, permissions: FilePermissions, as_json: bool = False) -> int:
        """Run the full audit. Returns 0 when ready for installation."""
        report = collect_report(permissions)
        if as_json:
            print(json.dumps(report.to_dict(), indent=2))
        else:
            # Verbose output lists every offending path
            render_report(report, console, max_paths=None if self.verbose else 20)
        return 0 if report.installation_ready else 1

    def cli_user(self, permissions: FilePermissions) -> int:
        """Check generated code access for the current user."""
        if permissions.check_directory_permission_for_cli_user():
            console.print("Generated code directories are accessible", style="green")
            return 0
        console.print(
            "Generated code directories are not readable/executable by the current user",
            style="red",
        )
        return 1


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--root", help="Application root directory")
    parser.add_argument("--config", "-c", help="YAML configuration file")
    parser.add_argument(
        "--dir",
        action="append",
        metavar="ROLE=PATH",
        help="Override a directory role path (repeatable)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")


def add_check_parser(subparsers) -> argparse.ArgumentParser:
    """Add check parser to subparsers."""
    check_parser = subparsers.add_parser("check", help="Audit installation directory permissions")
    _add_common_arguments(check_parser)
    check_parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    return check_parser


def add_cli_user_parser(subparsers) -> argparse.ArgumentParser:
    """Add cli-user parser to subparsers."""
    cli_user_parser = subparsers.add_parser(
        "cli-user", help="Check generated code access for the current user"
    )
    _add_common_arguments(cli_user_parser)
    return cli_user_parser


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="permaudit",
        description="Audit filesystem permissions of application directories",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")
    add_check_parser(subparsers)
    add_cli_user_parser(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        config = build_config(args)
    except ConfigError as e:
        console.print(f"Configuration error: {e}", style="red")
        return 2

    logging.basicConfig(level=logging.DEBUG if config.verbose else logging.WARNING)

    handler = PermissionsHandler(verbose=config.verbose)
    try:
        permissions = build_permissions(config)
        if args.command == "check":
            return handler.check(permissions, as_json=args.json)
        return handler.cli_user(permissions)
    except PermAuditError as e:
        console.print(f"Error: {e}", style="red")
        return 2


if __name__ == "__main__":
    sys.exit(main())
