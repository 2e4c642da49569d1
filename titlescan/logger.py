import sys

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

THEME = Theme({
    "success": "green",
    "error": "red",
    "warning": "yellow",
    "info": "blue",
    "debug": "dim"
})


class Logger:
    def __init__(self, console=None, debug=False):
        self.console = console or Console(stderr=True, theme=THEME)
        self.debug_enabled = debug

    def _emit(self, marker, message, style):
        self.console.print(f"{marker} {escape(str(message))}", style=style)

    def success(self, message):
        self._emit("[✓]", message, "success")

    def error(self, message):
        self._emit("[✗]", message, "error")

    def warning(self, message):
        self._emit("[!]", message, "warning")

    def info(self, message):
        self._emit("[*]", message, "info")

    def debug(self, message):
        if self.debug_enabled:
            self._emit("[.]", message, "debug")


def plain_logger(stream=sys.stderr, debug=False):
    """Logger without colours or terminal detection, for piping and tests."""
    console = Console(file=stream, theme=THEME, no_color=True, highlight=False, soft_wrap=True)
    return Logger(console, debug=debug)
