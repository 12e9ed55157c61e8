"""Parsed statements: an assignment or a pipeline of commands"""

from typing import Iterable, Tuple, Union

from .commands import Command


class Assignment:
    """Representation of an assignment (a=kek)"""

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, Assignment):
            return NotImplemented
        return (self.name, self.value) == (other.name, other.value)

    def __repr__(self):
        return f"Assignment({self.name!r}, {self.value!r})"


class Pipeline:
    """Commands separated by pipes, executed left to right"""

    def __init__(self, commands: Iterable[Command]):
        self.commands: Tuple[Command, ...] = tuple(commands)
        if not self.commands:
            raise ValueError("a pipeline needs at least one command")

    def __len__(self):
        return len(self.commands)

    def __eq__(self, other):
        if not isinstance(other, Pipeline):
            return NotImplemented
        return self.commands == other.commands

    def __repr__(self):
        pipeline_str = ' | '.join(repr(c) for c in self.commands)
        return f"Pipeline({pipeline_str})"


Statement = Union[Assignment, Pipeline]
