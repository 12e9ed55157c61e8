"""Launching external programs"""

import logging
import subprocess
from typing import List, NamedTuple

logger = logging.getLogger(__name__)


class ProcessResult(NamedTuple):
    """Captured outcome of a finished program"""
    stdout: str
    stderr: str
    exit_code: int


class LaunchError(Exception):
    """The program could not be started (not found, not executable)"""

    def __init__(self, program: str, reason: str = ''):
        self.program = program
        self.reason = reason
        super().__init__(f"{program}: {reason}" if reason else program)


class ProcessRunner:
    """Runs a program to completion with the given stdin, capturing its output

    The wait is synchronous and has no timeout: a program that never exits
    blocks the caller.
    """

    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    def run(self, program: str, args: List[str], stdin: str = '') -> ProcessResult:
        """
        Run a program and wait for it

        Args:
            program: Program name (looked up on PATH) or path
            args: Program arguments
            stdin: Text written to the program's standard input before it is closed

        Returns:
            ProcessResult with captured stdout, stderr and exit code; line
            terminators are returned exactly as the program wrote them

        Raises:
            LaunchError: If the program cannot be started
        """
        argv = [program] + list(args)
        logger.debug("launching %s", argv)
        try:
            result = subprocess.run(
                argv,
                input=stdin.encode(self.encoding),
                capture_output=True,
            )
        except OSError as e:
            raise LaunchError(program, e.strerror or str(e)) from e
        except ValueError as e:
            # e.g. an embedded NUL byte in an argument
            raise LaunchError(program, str(e)) from e
        logger.debug("%s exited with status %d", program, result.returncode)
        return ProcessResult(
            result.stdout.decode(self.encoding, errors='replace'),
            result.stderr.decode(self.encoding, errors='replace'),
            result.returncode,
        )
