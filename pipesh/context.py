"""Collaborators shared by all commands of a session"""

from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape

from .filesystem import LocalFileSystem
from .process import ProcessRunner

_stderr_console = Console(stderr=True, highlight=False)


def print_diagnostic(message: str) -> None:
    """Default diagnostic sink: a yellow line on stderr"""
    _stderr_console.print(f"[yellow]{escape(message)}[/yellow]")


class CommandContext:
    """Bundle of the services a command may need

    Attributes:
        filesystem: object with ``read_file(path)`` and ``current_directory()``
        runner: object with ``run(program, args, stdin)``
        diagnostic: callable receiving non-fatal warnings (missing files)
    """

    def __init__(
        self,
        filesystem: Optional[LocalFileSystem] = None,
        runner: Optional[ProcessRunner] = None,
        diagnostic: Optional[Callable[[str], None]] = None
    ):
        self.filesystem = filesystem or LocalFileSystem()
        self.runner = runner or ProcessRunner()
        self.diagnostic = diagnostic or print_diagnostic

    def warn(self, message: str) -> None:
        self.diagnostic(message)

    def __repr__(self):
        return f"CommandContext(filesystem={self.filesystem!r}, runner={self.runner!r})"
