"""Shell implementation with REPL and statement execution"""

import logging
import os
import tempfile
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import FileHistory
from rich.console import Console
from rich.markup import escape

from .commands import BUILTINS
from .config import Config
from .context import CommandContext
from .errors import ShellError
from .parser import CommandParser, StatementParser
from .pipeline import PipelineExecutor, Status
from .variables import VariableStore
from .version import get_version_string

logger = logging.getLogger(__name__)


class BuiltinCompleter(Completer):
    """Completes built-in command names at the start of each pipeline stage"""

    def __init__(self):
        self.command_names = sorted(BUILTINS) + ['help']

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        words, in_word, in_quote = CommandParser.last_stage(text)
        if in_quote:
            return

        # Only the command word is completed
        if not words or (len(words) == 1 and in_word and text.endswith(words[0])):
            word = words[0] if in_word else ""
            for cmd in self.command_names:
                if cmd.startswith(word):
                    yield Completion(cmd, start_position=-len(word))


class Shell:
    """Simple shell with variables and pipeline support"""

    def __init__(
        self,
        config: Optional[Config] = None,
        console: Optional[Console] = None,
        context: Optional[CommandContext] = None
    ):
        self.config = config or Config.from_env()
        self.console = console or Console(highlight=False)
        self.variables = VariableStore()
        self.parser = StatementParser(self.variables, context)
        self.executor = PipelineExecutor(self.variables)

    def execute(self, line: str) -> Status:
        """
        Execute one input line and print its result

        Returns:
            Status.EXIT when the line was a lone exit command

        Raises:
            ShellError: If a command of the statement fails
        """
        statement = self.parser.parse(line)
        if statement is None:
            return Status.CONTINUE
        output, status = self.executor.execute(statement)

        if output:
            # Written as-is: no markup, tab expansion or wrapping
            stream = self.console.file
            stream.write(output)
            if not output.endswith('\n'):
                stream.write('\n')
            stream.flush()
        return status

    def run_line(self, line: str) -> Optional[Status]:
        """Execute a line, reporting a failed statement instead of raising

        Returns:
            The status, or None if the statement failed
        """
        try:
            return self.execute(line)
        except ShellError as e:
            logger.debug("statement failed: %r", e)
            self.report_error(e)
            return None

    def report_error(self, error: Exception, prefix: str = '') -> None:
        self.console.print(f"[red]{escape(prefix + str(error))}[/red]", highlight=False)

    def run_script(self, script_path: str) -> int:
        """Execute a script file line by line"""
        try:
            with open(script_path, 'r', encoding='utf-8') as f:
                lines = f.readlines()
        except FileNotFoundError:
            self.console.print(f"[red]pipesh: {escape(script_path)}: No such file or directory[/red]", highlight=False)
            return 127
        except (OSError, UnicodeDecodeError) as e:
            reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
            self.console.print(f"[red]pipesh: {escape(script_path)}: {escape(reason)}[/red]", highlight=False)
            return 1

        for line_num, line in enumerate(lines, 1):
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith('#'):
                continue

            try:
                status = self.execute(line)
            except ShellError as e:
                self.report_error(e, prefix=f"Error at line {line_num}: ")
                return 1
            if status is Status.EXIT:
                break
        return 0

    def _history(self):
        """FileHistory at the configured path, falling back to a temporary file"""
        history_path = self.config.history_file
        try:
            directory = os.path.dirname(history_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(history_path, "a"):
                pass
            return FileHistory(history_path)
        except OSError:
            temp_history = tempfile.NamedTemporaryFile(
                mode="w", delete=False, suffix="_pipesh_history"
            )
            temp_history.close()
            self.console.print(
                f"[yellow]Warning: Cannot use {escape(history_path)}, using temporary history file[/yellow]",
                highlight=False
            )
            return FileHistory(temp_history.name)

    def repl(self):
        """Run interactive REPL"""
        self.console.print(f"[bold cyan]{get_version_string()}[/bold cyan]", highlight=False)
        self.console.print("Type [cyan]'help'[/cyan] for help, [cyan]Ctrl+D[/cyan] or [cyan]'exit'[/cyan] to quit", highlight=False)

        session = PromptSession(
            history=self._history(),
            auto_suggest=AutoSuggestFromHistory(),
            completer=BuiltinCompleter(),
            complete_while_typing=True,
        )

        while True:
            try:
                line = session.prompt(self.config.prompt)
            except KeyboardInterrupt:
                continue
            except EOFError:
                break

            if line.strip() == 'help':
                self.show_help()
                continue

            try:
                if self.run_line(line) is Status.EXIT:
                    break
            except KeyboardInterrupt:
                self.console.print("\n^C", highlight=False)
            except Exception as e:
                logger.debug("unexpected error", exc_info=True)
                self.console.print(f"[red]Unexpected error: {escape(str(e))}[/red]", highlight=False)

        self.console.print("[cyan]Goodbye![/cyan]", highlight=False)

    def show_help(self):
        """Show help message"""
        help_text = """[bold cyan]pipesh[/bold cyan] - minimal shell with variables and pipelines

[bold yellow]Built-in Commands:[/bold yellow]
  [green]echo[/green] [args...]                - Print arguments separated by spaces
  [green]cat[/green] [file...]                 - Print files, or pass input through
  [green]wc[/green] [file...]                  - Count lines, words and characters
  [green]grep[/green] [-i] [-w] [-A n] regex [file...]
                                - Print matching lines (and n lines after each)
  [green]pwd[/green]                           - Print current working directory
  [green]exit[/green]                          - Exit the shell

Any other command name runs the program of that name.

[bold yellow]Syntax:[/bold yellow]
  name=value                    - Assign a variable
  $name, ${name}                - Substitute a variable ('' if unset)
  "..." or '...'                - Quote words containing spaces or |
  command1 | command2           - Feed the output of command1 to command2

[bold yellow]Examples:[/bold yellow]
  [dim]>[/dim] x=world
  [dim]>[/dim] echo "hello $x" | wc
  [dim]>[/dim] cat notes.txt | grep -i -A 2 todo

[bold yellow]Special Commands:[/bold yellow]
  [green]help[/green]                          - Show this help
  [green]Ctrl+C[/green]                        - Cancel current line
  [green]Ctrl+D[/green]                        - Exit the shell
"""
        self.console.print(help_text, highlight=False)
