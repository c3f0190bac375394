"""Console utility functions for formatting and output."""

from typing import Any, Optional

import click
from colorama import Fore, Style, init
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table
from rich.text import Text

init(autoreset=True)


# Status symbols for consistent iconography
STATUS_SYMBOLS = {
    'sparkles': '✨',
    'running': '🚀',
    'error': '❌',
    'broom': '🧹',
}

_console: Optional[Console] = None


def _get_console() -> Optional[Console]:
    """Get the shared Rich console."""
    global _console
    if _console is None:
        try:
            _console = Console()
        except Exception:
            return None
    return _console


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
            console.print(message, style=style_str, highlight=False, markup=False)
            return
        except Exception:
            pass

    # Colorama fallback
    color_map = {
        'red': Fore.RED,
        'green': Fore.GREEN,
        'yellow': Fore.YELLOW,
        'blue': Fore.BLUE,
        'cyan': Fore.CYAN,
        'white': Fore.WHITE,
        'magenta': Fore.MAGENTA,
        'muted': Fore.WHITE,
        'dim': Fore.WHITE,
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
            console.print(Panel(Text(content), title=title, border_style=style))
            return
        except Exception:
            pass

    if title:
        click.echo(f"\n--- {title} ---")
    click.echo(content)
    if title:
        click.echo("-" * (len(title) + 8))


def _create_files_table(files_data: list, title: str = "Files") -> Optional[Any]:
    """Create a Rich table listing files and what happened to them."""
    try:
        table = Table(title=f"📋 {title}", show_header=True, header_style="bold cyan")
        table.add_column("File", style="bold white")
        table.add_column("Status", style="white")

        for file_info in files_data:
            if isinstance(file_info, dict):
                table.add_row(file_info.get('name', ''), file_info.get('status', ''))
            elif isinstance(file_info, (list, tuple)) and len(file_info) >= 2:
                table.add_row(str(file_info[0]), str(file_info[1]))
            else:
                table.add_row(str(file_info), "")

        return table
    except Exception:
        return None


def _create_progress(transient: bool = True) -> Progress:
    """Create the progress display used for long-running steps."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(bar_width=20),
        TaskProgressColumn(),
        TextColumn("{task.completed}/{task.total}"),
        console=_get_console(),
        transient=transient,
    )
