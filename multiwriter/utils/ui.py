"""
Rich UI utilities for console feedback.

Status messages and logs go to stderr so they never mix with rendered
output, which is usually written to stdout.

Usage:
    from multiwriter.utils.ui import console, ui

    ui.success("Wrote 3 records")
    ui.error("Write failed", details="error flushing csv: broken pipe")
    ui.warning("Unknown format, nothing written")
"""

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

# =============================================================================
# Custom Theme
# =============================================================================

MULTIWRITER_THEME = Theme(
    {
        # Status colors
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "debug": "dim",
        "muted": "dim white",
        # UI elements
        "accent": "bold cyan",
        "format": "bold magenta",
    }
)

# =============================================================================
# Global Console
# =============================================================================

console = Console(theme=MULTIWRITER_THEME, stderr=True, highlight=True)


class Icons:
    """Unicode icons for consistent visual feedback."""

    SUCCESS = "✓"
    ERROR = "✗"
    WARNING = "⚠"


class UIHelper:
    """Central UI helper for consistent status output."""

    def __init__(self, console: Console):
        self.console = console
        self.icons = Icons

    def _status(self, prefix: str, style: str, message: str, details: str | None) -> None:
        text = Text()
        text.append(f"{prefix} ", style=style)
        text.append_text(Text.from_markup(message))
        if details:
            # Details are literal (error messages may contain brackets)
            text.append(f"\n   {details}", style="muted")
        self.console.print(text)

    def success(self, message: str, details: str | None = None, prefix: str = Icons.SUCCESS) -> None:
        """Print a success message."""
        self._status(prefix, "success", message, details)

    def error(self, message: str, details: str | None = None, prefix: str = Icons.ERROR) -> None:
        """Print an error message."""
        self._status(prefix, "error", f"[error]{message}[/error]", details)

    def warning(self, message: str, details: str | None = None, prefix: str = Icons.WARNING) -> None:
        """Print a warning message."""
        self._status(prefix, "warning", message, details)


ui = UIHelper(console)
