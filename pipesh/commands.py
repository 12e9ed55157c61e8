"""Built-in and external commands

Every command consumes the output of the previous command in a pipeline
(an empty string for the first one) and returns its own output as a string.
"""

import re
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional, Sequence, Tuple, Type

from .context import CommandContext
from .errors import CommandExecutionError, CommandNotFound
from .grep import LINE_SEPARATOR, GrepUsageError, compile_pattern, filter_lines, parse_grep_args
from .process import LaunchError


class Command(ABC):
    """Base class for commands that take part in a pipeline.

    A command is immutable once constructed: its arguments are stored as a
    tuple and never change.
    """

    name = ''

    def __init__(self, args: Iterable[str] = (), context: Optional[CommandContext] = None):
        """Initialize with the command arguments.

        Args:
            args: Command arguments (not including the command name itself)
            context: Collaborators for file, process and cwd access
        """
        self._args: Tuple[str, ...] = tuple(args)
        self.context = context or CommandContext()

    @property
    def args(self) -> Tuple[str, ...]:
        return self._args

    @abstractmethod
    def execute(self, pipe_input: str) -> str:
        """Execute the command.

        Args:
            pipe_input: Output of the previous command ('' for the first one)

        Returns:
            Output passed to the next command in the pipeline

        Raises:
            CommandExecutionError, CommandNotFound
        """

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.args == other.args

    def __hash__(self):
        return hash((type(self), self.args))

    def __repr__(self):
        return f"{type(self).__name__}({list(self.args)!r})"


class Echo(Command):
    """Print arguments separated by a single space; input is ignored"""

    name = 'echo'

    def execute(self, pipe_input: str) -> str:
        return ' '.join(self.args)


class Cat(Command):
    """
    Concatenate files, or pass the input through when no file is given

    Usage: cat [file...]

    A missing file is reported and skipped.
    """

    name = 'cat'

    def execute(self, pipe_input: str) -> str:
        if not self.args:
            return pipe_input

        filesystem = self.context.filesystem
        contents = []
        for filename in self.args:
            try:
                contents.append(filesystem.read_file(filename))
            except OSError as e:
                self.context.warn(f"cat: {filename}: {filesystem.get_error_message(e)}")
        return ''.join(contents)


def count_text(text: str) -> Tuple[int, int, int]:
    """Return (lines, words, characters) of text

    Lines are the segments produced by splitting on "\\n", so '' counts as
    one line and a trailing newline adds an empty last line.
    """
    return len(text.split('\n')), len(text.split()), len(text)


class Wc(Command):
    """
    Count lines, words and characters

    Usage: wc [file...]

    Unlike cat and grep, a missing file is an error.
    """

    name = 'wc'

    def execute(self, pipe_input: str) -> str:
        if not self.args:
            lines, words, chars = count_text(pipe_input)
            return f"{lines} {words} {chars}"

        filesystem = self.context.filesystem
        output = []
        total_lines = total_words = total_chars = 0
        for filename in self.args:
            try:
                text = filesystem.read_file(filename)
            except OSError as e:
                raise CommandExecutionError(
                    f"wc: {filename}: {filesystem.get_error_message(e)}") from e
            lines, words, chars = count_text(text)
            output.append(f"{filename}: {lines} {words} {chars}")
            total_lines += lines
            total_words += words
            total_chars += chars

        if len(self.args) > 1:
            output.append(f"total: {total_lines} {total_words} {total_chars}")
        return LINE_SEPARATOR.join(output)


class Grep(Command):
    """
    Print lines matching a regular expression

    Usage: grep [-i] [-w] [-A NUM] PATTERN [FILE...]

    Arguments are validated before any file is read. With files the input
    is ignored; a missing file is reported and skipped.
    """

    name = 'grep'

    def execute(self, pipe_input: str) -> str:
        options = parse_grep_args(self.args)
        if isinstance(options, GrepUsageError):
            raise CommandExecutionError(f"grep: {options}")

        try:
            regex = compile_pattern(options)
        except re.error as e:
            raise CommandExecutionError(f"grep: invalid pattern: {e}") from e

        if not options.files:
            return filter_lines(pipe_input, regex, options.after_context)

        filesystem = self.context.filesystem
        output = []
        for filename in options.files:
            try:
                text = filesystem.read_file(filename)
            except OSError as e:
                self.context.warn(f"grep: {filename}: {filesystem.get_error_message(e)}")
                continue
            output.append(filter_lines(text, regex, options.after_context))
        return ''.join(output)


class Pwd(Command):
    """Print the current working directory"""

    name = 'pwd'

    def execute(self, pipe_input: str) -> str:
        return self.context.filesystem.current_directory()


class Exit(Command):
    """Leave the shell (when it is the only command on the line)"""

    name = 'exit'

    def execute(self, pipe_input: str) -> str:
        return ''


class External(Command):
    """Run a program found on PATH, feeding it the pipeline input"""

    def __init__(self, program: str, args: Iterable[str] = (), context: Optional[CommandContext] = None):
        super().__init__(args, context)
        self.program = program

    @property
    def name(self) -> str:
        return self.program

    def execute(self, pipe_input: str) -> str:
        try:
            result = self.context.runner.run(self.program, list(self.args), pipe_input)
        except LaunchError as e:
            raise CommandNotFound(self.program) from e

        if result.exit_code != 0:
            error_lines = result.stderr.splitlines()
            message = error_lines[0] if error_lines else f"{self.program}: exit status {result.exit_code}"
            raise CommandExecutionError(message, exit_code=result.exit_code)
        return result.stdout

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return (self.program, self.args) == (other.program, other.args)

    def __hash__(self):
        return hash((type(self), self.program, self.args))

    def __repr__(self):
        return f"External({self.program!r}, {list(self.args)!r})"


# Registry of built-in commands
BUILTINS: Dict[str, Type[Command]] = {
    'echo': Echo,
    'cat': Cat,
    'wc': Wc,
    'grep': Grep,
    'pwd': Pwd,
    'exit': Exit,
}


def get_builtin(command: str) -> Optional[Type[Command]]:
    """Get a built-in command class"""
    return BUILTINS.get(command)


def create_command(command: str, args: Sequence[str] = (), context: Optional[CommandContext] = None) -> Command:
    """Build the command for a name: a built-in on exact match, otherwise an external program"""
    builtin = get_builtin(command)
    if builtin is not None:
        return builtin(args, context)
    return External(command, args, context)
