"""Errors raised while executing commands"""

from typing import Optional


class ShellError(Exception):
    """Base class for errors that abort the current statement"""


class CommandNotFound(ShellError):
    """Raised when an external program cannot be launched"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name}: command not found")


class CommandExecutionError(ShellError):
    """Raised when a command fails (bad arguments, missing file, non-zero exit)"""

    def __init__(self, message: str, exit_code: Optional[int] = None):
        self.exit_code = exit_code
        super().__init__(message)
