"""Pattern matching and context filtering for the grep built-in"""

import os
import re
from enum import Enum
from typing import List, Sequence, Union

# Emitted after every selected line, including the last one
LINE_SEPARATOR = os.linesep

_COUNT_PATTERN = re.compile(r'[+-]?\d+')


class GrepErrorKind(Enum):
    UNKNOWN_FLAG = 'unknown_flag'
    INVALID_NUMBER = 'invalid_number'
    NEGATIVE_COUNT = 'negative_count'
    MISSING_ARGUMENT = 'missing_argument'
    MISSING_PATTERN = 'missing_pattern'


class GrepUsageError:
    """Classified grep argument error, returned (not raised) by parse_grep_args"""

    def __init__(self, kind: GrepErrorKind, detail: str = ''):
        self.kind = kind
        self.detail = detail

    def __str__(self):
        if self.kind is GrepErrorKind.UNKNOWN_FLAG:
            return f"invalid option -- '{self.detail}'"
        if self.kind is GrepErrorKind.INVALID_NUMBER:
            return f"-A argument is not a number: {self.detail}"
        if self.kind is GrepErrorKind.NEGATIVE_COUNT:
            return f"-A argument < 0: {self.detail}"
        if self.kind is GrepErrorKind.MISSING_ARGUMENT:
            return f"option requires an argument -- '{self.detail}'"
        return "missing pattern"

    def __eq__(self, other):
        if not isinstance(other, GrepUsageError):
            return NotImplemented
        return (self.kind, self.detail) == (other.kind, other.detail)

    def __repr__(self):
        return f"GrepUsageError({self.kind.name}, {self.detail!r})"


class GrepOptions:
    """Parsed grep arguments"""

    def __init__(
        self,
        pattern: str,
        files: Sequence[str] = (),
        ignore_case: bool = False,
        whole_word: bool = False,
        after_context: int = 0
    ):
        self.pattern = pattern
        self.files = list(files)
        self.ignore_case = ignore_case
        self.whole_word = whole_word
        self.after_context = after_context

    def __eq__(self, other):
        if not isinstance(other, GrepOptions):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self):
        return (f"GrepOptions(pattern={self.pattern!r}, files={self.files!r}, "
                f"ignore_case={self.ignore_case}, whole_word={self.whole_word}, "
                f"after_context={self.after_context})")


def _parse_count(value: str) -> Union[int, GrepUsageError]:
    if not _COUNT_PATTERN.fullmatch(value):
        return GrepUsageError(GrepErrorKind.INVALID_NUMBER, value)
    count = int(value)
    if count < 0:
        return GrepUsageError(GrepErrorKind.NEGATIVE_COUNT, value)
    return count


def parse_grep_args(args: Sequence[str]) -> Union[GrepOptions, GrepUsageError]:
    """
    Parse grep arguments

    Usage: grep [-i] [-w] [-A NUM] PATTERN [FILE...]

    Options:
        -i, --ignore-case           Ignore case
        -w, --word-regexp           Match whole words only
        -A NUM, --after-context=NUM Print NUM lines of trailing context

    Short flags may be clustered (``-iw``) and the count may be attached
    (``-A2``). Options may come before or after positionals; ``--`` ends
    option parsing.

    Returns:
        GrepOptions on success, GrepUsageError describing the first problem otherwise
    """
    ignore_case = False
    whole_word = False
    after_context = 0
    positionals: List[str] = []
    options_done = False

    i = 0
    while i < len(args):
        arg = args[i]
        i += 1

        if options_done or arg == '-' or not arg.startswith('-'):
            positionals.append(arg)
            continue

        if arg == '--':
            options_done = True
            continue

        if arg.startswith('--'):
            name, eq, value = arg[2:].partition('=')
            if name == 'ignore-case' and not eq:
                ignore_case = True
            elif name == 'word-regexp' and not eq:
                whole_word = True
            elif name == 'after-context':
                if not eq:
                    if i >= len(args):
                        return GrepUsageError(GrepErrorKind.MISSING_ARGUMENT, name)
                    value = args[i]
                    i += 1
                count = _parse_count(value)
                if isinstance(count, GrepUsageError):
                    return count
                after_context = count
            else:
                return GrepUsageError(GrepErrorKind.UNKNOWN_FLAG, arg)
            continue

        cluster = arg[1:]
        for pos, char in enumerate(cluster):
            if char == 'i':
                ignore_case = True
            elif char == 'w':
                whole_word = True
            elif char == 'A':
                value = cluster[pos + 1:]
                if not value:
                    if i >= len(args):
                        return GrepUsageError(GrepErrorKind.MISSING_ARGUMENT, 'A')
                    value = args[i]
                    i += 1
                count = _parse_count(value)
                if isinstance(count, GrepUsageError):
                    return count
                after_context = count
                break
            else:
                return GrepUsageError(GrepErrorKind.UNKNOWN_FLAG, char)

    if not positionals:
        return GrepUsageError(GrepErrorKind.MISSING_PATTERN)

    return GrepOptions(
        pattern=positionals[0],
        files=positionals[1:],
        ignore_case=ignore_case,
        whole_word=whole_word,
        after_context=after_context,
    )


def compile_pattern(options: GrepOptions) -> re.Pattern:
    """
    Compile the search pattern

    Raises:
        re.error: If the pattern is not a valid regular expression
    """
    pattern = options.pattern
    if options.whole_word:
        pattern = rf'\b(?:{pattern})\b'
    flags = re.IGNORECASE if options.ignore_case else 0
    return re.compile(pattern, flags)


def filter_lines(text: str, regex: re.Pattern, after_context: int = 0) -> str:
    """
    Select matching lines of text plus up to after_context lines after each match

    The text is split on "\\n"; every selected line is terminated with
    LINE_SEPARATOR. A match resets the trailing context counter.
    """
    selected = []
    remaining = 0
    for line in text.split('\n'):
        if regex.search(line):
            selected.append(line + LINE_SEPARATOR)
            remaining = after_context
        elif remaining > 0:
            selected.append(line + LINE_SEPARATOR)
            remaining -= 1
    return ''.join(selected)
