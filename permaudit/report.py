"""
Audit report: collects the results of one audit run and renders them.
"""

from dataclasses import asdict, dataclass, field

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from permaudit.permissions import FilePermissions


@dataclass
class AuditReport:
    """Results of one FilePermissions audit run."""

    required_writable: list[str] = field(default_factory=list)
    current_writable: list[str] = field(default_factory=list)
    missing_writable_paths: list[str] = field(default_factory=list)
    missing_writable_directories: list[str] = field(default_factory=list)
    required_non_writable: list[str] = field(default_factory=list)
    unnecessary_writable: list[str] = field(default_factory=list)
    cli_user_access: bool = True

    @property
    def installation_ready(self) -> bool:
        return not self.missing_writable_paths and not self.missing_writable_directories

    def to_dict(self) -> dict:
        data = asdict(self)
        data["installation_ready"] = self.installation_ready
        return data


def collect_report(permissions: FilePermissions) -> AuditReport:
    """Run every audit query against one session."""
    required = permissions.get_installation_writable_directories()
    current = permissions.get_installation_current_writable_directories()
    return AuditReport(
        required_writable=required,
        current_writable=current,
        missing_writable_paths=permissions.get_missing_writable_paths_for_installation(),
        missing_writable_directories=[path for path in required if path not in current],
        required_non_writable=permissions.get_application_non_writable_directories(),
        unnecessary_writable=permissions.get_unnecessary_writable_directories_for_application(),
        cli_user_access=permissions.check_directory_permission_for_cli_user(),
    )


def _status(ok: bool, good: str = "OK", bad: str = "FAIL") -> str:
    return f"[green]{good}[/]" if ok else f"[red]{bad}[/]"


def render_report(report: AuditReport, console: Console, max_paths: int | None = 20) -> None:
    """Print the report as rich tables. ``max_paths=None`` lists every path."""
    table = Table(title="Installation Directories")
    table.add_column("Directory", style="cyan")
    table.add_column("Writable")
    for path in report.required_writable:
        table.add_row(path, _status(path in report.current_writable))
    console.print(table)

    if report.missing_writable_paths:
        lines = report.missing_writable_paths[:max_paths]
        if max_paths is not None and len(report.missing_writable_paths) > max_paths:
            lines.append(f"... and {len(report.missing_writable_paths) - max_paths} more")
        console.print(
            Panel(
                "\n".join(lines),
                title="Paths that must be writable for installation",
                border_style="red",
            )
        )
    elif report.missing_writable_directories:
        console.print(
            Panel(
                "\n".join(report.missing_writable_directories),
                title="Directories that must be writable for installation",
                border_style="red",
            )
        )

    if report.unnecessary_writable:
        console.print(
            Panel(
                "\n".join(report.unnecessary_writable),
                title="Writable directories that should be locked after installation",
                border_style="yellow",
            )
        )

    console.print(f"CLI user access to generated code: {_status(report.cli_user_access)}")
    if report.installation_ready:
        console.print("Ready for installation", style="green")
    else:
        console.print("Not ready for installation", style="red")
