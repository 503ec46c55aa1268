"""Operator commands typed into the collector's terminal.

The console runs beside the accept loop in its own thread. It shares no
state with sessions: every command is a side effect (open a browser, print
help, ask the server to stop).
"""

from __future__ import annotations

import enum
import logging
import sys
import threading
import webbrowser
from typing import IO, Callable

logger = logging.getLogger(__name__)

HELP_TEXT = """\
==================================================
Available commands
==================================================
E        - Open the dashboard in a web browser
H, HELP  - Show this help
Q, QUIT  - Stop the collector
=================================================="""


class ServerCommand(enum.Enum):
    OPEN_BROWSER = "open_browser"
    HELP = "help"
    QUIT = "quit"

    @classmethod
    def from_input(cls, text: str) -> ServerCommand | None:
        """Parse one line of operator input; ``None`` when unrecognized."""
        return _ALIASES.get(text.strip().upper())


_ALIASES = {
    "E": ServerCommand.OPEN_BROWSER,
    "H": ServerCommand.HELP,
    "HELP": ServerCommand.HELP,
    "Q": ServerCommand.QUIT,
    "QUIT": ServerCommand.QUIT,
    "EXIT": ServerCommand.QUIT,
}


class CommandConsole:
    """Reads commands from *stream* (stdin by default) in a daemon thread."""

    def __init__(
        self,
        on_quit: Callable[[], None],
        *,
        browser_url: str = "about:blank",
        stream: IO[str] | None = None,
        output: IO[str] | None = None,
        open_browser: Callable[[str], bool] = webbrowser.open,
    ) -> None:
        self._on_quit = on_quit
        self._browser_url = browser_url
        self._stream = stream if stream is not None else sys.stdin
        self._output = output if output is not None else sys.stdout
        self._open_browser = open_browser
        self._thread: threading.Thread | None = None

    def execute(self, command: ServerCommand) -> None:
        if command is ServerCommand.OPEN_BROWSER:
            logger.info("Opening %s in a web browser", self._browser_url)
            if not self._open_browser(self._browser_url):
                raise RuntimeError(f"no usable web browser for {self._browser_url}")
        elif command is ServerCommand.HELP:
            print(HELP_TEXT, file=self._output)
        elif command is ServerCommand.QUIT:
            logger.info("Shutting down collector...")
            self._on_quit()

    def handle_line(self, text: str) -> ServerCommand | None:
        """Parse and execute one input line, logging any failure."""
        command = ServerCommand.from_input(text)
        if command is None:
            if text.strip():
                logger.warning("Unknown command %r. Type 'H' for help.", text.strip())
            return None
        try:
            self.execute(command)
        except Exception:
            logger.exception("Command %s failed", command.name)
        return command

    def _run(self) -> None:
        for text in self._stream:
            if self.handle_line(text) is ServerCommand.QUIT:
                return

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="command-console", daemon=True)
        self._thread.start()
