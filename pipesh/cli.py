"""Main CLI entry point for pipesh"""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from .config import Config
from .shell import Shell
from .version import get_version_string


def setup_logging(level: str) -> None:
    """Send log records to stderr through rich"""
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.command()
@click.version_option(version=get_version_string(), prog_name="pipesh")
@click.option("-c", "command_string", default=None, help="Execute command string and exit")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level (can also set via PIPESH_LOG_LEVEL environment variable)",
)
@click.option("--prompt", default=None, help="REPL prompt (can also set via PIPESH_PROMPT)")
@click.option("--history-file", default=None, help="REPL history file (can also set via PIPESH_HISTFILE)")
@click.argument("script", required=False)
def main(command_string, log_level, prompt, history_file, script):
    """pipesh - minimal shell with variables and pipelines

    Runs COMMAND with -c, otherwise the SCRIPT file, otherwise an interactive REPL.
    """
    config = Config.from_args(prompt=prompt, history_file=history_file, log_level=log_level)
    setup_logging(config.log_level)
    shell = Shell(config=config)

    # Priority: -c flag > script file > interactive
    if command_string is not None:
        status = shell.run_line(command_string)
        sys.exit(0 if status is not None else 1)

    if script is not None:
        sys.exit(shell.run_script(script))

    shell.repl()


if __name__ == '__main__':
    main()
