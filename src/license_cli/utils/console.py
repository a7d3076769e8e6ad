"""Console utility functions for formatting and output."""

from typing import Any, Iterable, Optional, Sequence

import click
from colorama import Fore, Style, init
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

init(autoreset=True)


# Status symbols for consistent iconography
STATUS_SYMBOLS = {
    'success': '✓',
    'running': '•',
    'info': '•',
    'warning': '⚠',
    'error': '✗',
    'check': '✓',
    'list': '•',
}

_THEME = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
    "muted": "dim white",
    "title": "bold cyan",
})

_console: Optional[Console] = None


def _get_console() -> Optional[Console]:
    """Get the shared Rich console, created on first use."""
    global _console
    if _console is None:
        try:
            _console = Console(theme=_THEME)
        except Exception:
            return None
    return _console


def _reset_console() -> None:
    """Drop the cached console so the next call binds to the current streams."""
    global _console
    _console = None


def _rich_echo(message: str, color: str = "white", style: str = None, bold: bool = False, symbol: str = None):
    """Echo message with Rich formatting or colorama fallback."""
    if style is not None:
        color = style

    if symbol and symbol in STATUS_SYMBOLS:
        message = f"{STATUS_SYMBOLS[symbol]} {message}"

    console = _get_console()
    if console:
        try:
            style_str = f"bold {color}" if bold else color
            console.print(message, style=style_str, markup=False, highlight=False, soft_wrap=True)
            return
        except Exception:
            pass

    color_map = {
        'red': Fore.RED,
        'green': Fore.GREEN,
        'yellow': Fore.YELLOW,
        'blue': Fore.BLUE,
        'cyan': Fore.CYAN,
        'white': Fore.WHITE,
        'muted': Fore.WHITE,
    }
    color_code = color_map.get(color, Fore.WHITE)
    style_code = Style.BRIGHT if bold else ""
    click.echo(f"{color_code}{style_code}{message}{Style.RESET_ALL}")


def _rich_success(message: str, symbol: str = None):
    """Display success message with green color and bold styling."""
    _rich_echo(message, color="green", symbol=symbol, bold=True)


def _rich_error(message: str, symbol: str = None):
    """Display error message with red color."""
    _rich_echo(message, color="red", symbol=symbol)


def _rich_warning(message: str, symbol: str = None):
    """Display warning message with yellow color."""
    _rich_echo(message, color="yellow", symbol=symbol)


def _rich_info(message: str, symbol: str = None):
    """Display info message with blue color."""
    _rich_echo(message, color="blue", symbol=symbol)


def _rich_panel(content: str, title: str = None, style: str = "cyan"):
    """Display content in a Rich panel with fallback."""
    console = _get_console()
    if console:
        try:
            console.print(Panel(content, title=title, border_style=style, padding=(0, 1)))
            return
        except Exception:
            pass

    if title:
        click.echo(f"\n--- {title} ---")
    click.echo(content)
    if title:
        click.echo("-" * (len(title) + 8))


def _rich_table(title: str, columns: Sequence[str], rows: Iterable[Sequence[Any]]):
    """Display rows as a Rich table, or as plain tab-separated lines on fallback."""
    rows = [[str(cell) for cell in row] for row in rows]
    console = _get_console()
    if console:
        try:
            table = Table(title=title, show_header=True, header_style="bold cyan")
            for index, column in enumerate(columns):
                table.add_column(column, style="bold white" if index == 0 else "white")
            for row in rows:
                table.add_row(*(Text(cell) for cell in row))
            console.print(table)
            return
        except Exception:
            pass

    click.echo(title)
    click.echo("\t".join(columns))
    for row in rows:
        click.echo("\t".join(row))
