"""Parsing of input lines into statements"""

import logging
import re
from typing import List, Optional, Tuple

from .commands import create_command
from .context import CommandContext
from .statements import Assignment, Pipeline, Statement
from .variables import VariableStore

logger = logging.getLogger(__name__)

# $name or ${name}
VARIABLE_PATTERN = re.compile(r'\$(?:\{([A-Za-z_][A-Za-z0-9_]*)\}|([A-Za-z_][A-Za-z0-9_]*))')
ASSIGNMENT_PATTERN = re.compile(r'([A-Za-z_][A-Za-z0-9_]*)=(.*)', re.DOTALL)

QUOTES = ('"', "'")
PIPE = '|'


class CommandParser:
    """Split shell command strings into pipeline components"""

    @staticmethod
    def substitute(line: str, variables: VariableStore) -> str:
        """
        Replace $name and ${name} with variable values

        Undefined variables expand to an empty string. A single left-to-right
        pass is made: substituted values are not scanned again.
        """
        def replace(match):
            return variables.lookup(match.group(1) or match.group(2))

        return VARIABLE_PATTERN.sub(replace, line)

    @staticmethod
    def tokenize(line: str) -> List[List[str]]:
        """
        Split a line into words, grouped by unquoted pipe symbols

        Quoting rules:
          - "..." and '...' are part of the current word, quotes stripped,
            whitespace and | inside are kept
          - quoted and unquoted pieces written next to each other form one word
          - an unterminated quote runs to the end of the line
          - empty groups (e.g. a trailing |) are dropped

        Example:
            >>> CommandParser.tokenize('echo "a  b"|wc')
            [['echo', 'a  b'], ['wc']]
        """
        groups, _, _ = CommandParser._scan(line)
        return [group for group in groups if group]

    @staticmethod
    def last_stage(line: str) -> Tuple[List[str], bool, bool]:
        """
        Words of the final pipeline stage of a partially typed line

        Returns:
            (words, in_word, in_quote) where in_word is True while the last
            word is still open (no whitespace or pipe after it) and in_quote
            is True inside an unterminated quote

        Example:
            >>> CommandParser.last_stage('echo "a|b" | gr')
            (['gr'], True, False)
        """
        groups, in_word, quote = CommandParser._scan(line)
        return groups[-1], in_word, quote is not None

    @staticmethod
    def _scan(line: str) -> Tuple[List[List[str]], bool, Optional[str]]:
        groups: List[List[str]] = []
        words: List[str] = []
        current: List[str] = []
        in_word = False
        quote = None

        def end_word():
            nonlocal in_word
            if in_word:
                words.append(''.join(current))
                current.clear()
                in_word = False

        for char in line:
            if quote:
                if char == quote:
                    quote = None
                else:
                    current.append(char)
            elif char in QUOTES:
                quote = char
                in_word = True
            elif char == PIPE:
                end_word()
                groups.append(words)
                words = []
            elif char.isspace():
                end_word()
            else:
                current.append(char)
                in_word = True

        open_word = in_word
        end_word()
        groups.append(words)
        return groups, open_word, quote

    @staticmethod
    def parse_pipeline(line: str) -> List[Tuple[str, List[str]]]:
        """
        Parse a command line into pipeline components

        Example:
            >>> CommandParser.parse_pipeline("cat file.txt | grep pattern")
            [('cat', ['file.txt']), ('grep', ['pattern'])]
        """
        return [(group[0], group[1:]) for group in CommandParser.tokenize(line)]


class StatementParser:
    """Turn a raw input line into an Assignment or a Pipeline"""

    def __init__(self, variables: VariableStore, context: Optional[CommandContext] = None):
        self.variables = variables
        self.context = context or CommandContext()

    def parse(self, line: str) -> Optional[Statement]:
        """
        Parse one line

        A line that is a single word of the form NAME=VALUE is an assignment.
        Anything else is a pipeline; each group's first word selects a
        built-in by exact name, other names become external programs.

        Returns:
            The statement, or None for a blank line
        """
        substituted = CommandParser.substitute(line, self.variables)
        components = CommandParser.parse_pipeline(substituted)
        if not components:
            return None

        if len(components) == 1 and not components[0][1]:
            match = ASSIGNMENT_PATTERN.fullmatch(components[0][0])
            if match:
                statement = Assignment(match.group(1), match.group(2))
                logger.debug("parsed %r", statement)
                return statement

        statement = Pipeline(
            create_command(command, args, self.context) for command, args in components
        )
        logger.debug("parsed %r", statement)
        return statement
