"""Console output for the CLI.

Wraps rich so every command prints the same way.
"""

from typing import Any

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table

STATUS_STYLES = {
    "valid": "green",
    "invalid": "red",
    "unknown": "yellow",
    "check_failed": "yellow",
    "check_skipped": "dim",
}


class Console:
    """CLI output manager wrapping rich."""

    def __init__(self, *, force_terminal: bool | None = None, quiet: bool = False) -> None:
        self._console = RichConsole(force_terminal=force_terminal, stderr=False)
        self._err_console = RichConsole(force_terminal=force_terminal, stderr=True)
        self._quiet = quiet

    # -------------------------------------------------------------------------
    # Status messages
    # -------------------------------------------------------------------------

    def success(self, message: str) -> None:
        self._console.print(f"[green]✓[/green] {message}")

    def error(self, message: str, *, hint: str | None = None) -> None:
        """Print an error message to stderr."""
        self._err_console.print(f"[red]✗[/red] {message}")
        if hint:
            self._err_console.print(f"  [dim]{hint}[/dim]")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]⚠[/yellow] {message}")

    def info(self, message: str) -> None:
        """Print an info message (suppressed in quiet mode)."""
        if not self._quiet:
            self._console.print(f"[dim]{message}[/dim]")

    # -------------------------------------------------------------------------
    # Structured output
    # -------------------------------------------------------------------------

    def print(self, *args: Any, **kwargs: Any) -> None:
        self._console.print(*args, **kwargs)

    def print_json(self, data: Any) -> None:
        self._console.print_json(data=data)

    def table(
        self,
        rows: list[dict[str, Any]],
        columns: list[tuple[str, str]],  # (key, header)
        *,
        title: str | None = None,
        numbered: bool = False,
    ) -> None:
        table = Table(title=title, show_header=True, header_style="bold")

        if numbered:
            table.add_column("#", style="dim", width=3)
        for _, header in columns:
            table.add_column(header)

        for i, row in enumerate(rows, 1):
            values = [_cell(key, row.get(key)) for key, _ in columns]
            if numbered:
                table.add_row(str(i), *values)
            else:
                table.add_row(*values)

        self._console.print(table)

    def validation_result(self, result: dict[str, Any]) -> None:
        """Print one validation verdict as a panel."""
        lines = [
            f"[cyan]Status:[/cyan] {_cell('status', result.get('status'))}",
            f"[cyan]Address:[/cyan] {result.get('current_address')}",
        ]
        if result.get("was_corrected"):
            lines.append(f"[cyan]Corrected from:[/cyan] {result.get('original_address')}")
        if result.get("sub_status"):
            lines.append(f"[cyan]Reason:[/cyan] {result['sub_status']}")
        if result.get("suggested_address"):
            lines.append(f"[cyan]Did you mean:[/cyan] {result['suggested_address']}")
        lines.append(f"[cyan]Bounce:[/cyan] {result.get('bounce_status')}")
        if result.get("recheck_needed"):
            lines.append("[yellow]Recheck recommended[/yellow]")

        self._console.print(
            Panel(
                "\n".join(lines),
                title=f"[bold]{result.get('original_address')}[/bold]",
                subtitle=f"[dim]{result.get('check_id')}[/dim]",
                border_style=STATUS_STYLES.get(str(result.get("status")), "dim"),
                padding=(1, 2),
            )
        )

    def status(self, message: str):
        """Return a status context manager for long operations."""
        return self._console.status(message)


def _cell(key: str, value: Any) -> str:
    if value is None:
        return ""
    if key == "status":
        style = STATUS_STYLES.get(str(value), "dim")
        return f"[{style}]{value}[/{style}]"
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


# Module-level default instance for convenience
_default: Console | None = None


def get_console() -> Console:
    """Get the default console instance."""
    global _default
    if _default is None:
        _default = Console()
    return _default
