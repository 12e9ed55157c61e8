"""Execution of parsed statements"""

import logging
from enum import Enum
from typing import Tuple

from .commands import Exit
from .statements import Assignment, Pipeline, Statement
from .variables import VariableStore

logger = logging.getLogger(__name__)


class Status(Enum):
    CONTINUE = 'continue'
    EXIT = 'exit'


class PipelineExecutor:
    """Runs statements against a variable store

    Pipelines are not streamed: each command computes its whole output
    before the next one starts.
    """

    def __init__(self, variables: VariableStore):
        self.variables = variables

    def execute(self, statement: Statement) -> Tuple[str, Status]:
        """
        Execute a statement

        Returns:
            (output, status); assignments produce '' and CONTINUE

        Raises:
            ShellError: The first command error aborts the rest of the pipeline
        """
        if isinstance(statement, Assignment):
            self.variables.set(statement.name, statement.value)
            return '', Status.CONTINUE

        if isinstance(statement, Pipeline):
            return self.run_pipeline(statement), self.status(statement)

        raise TypeError(f"not a statement: {statement!r}")

    @staticmethod
    def status(pipeline: Pipeline) -> Status:
        """EXIT only for a pipeline made of a single exit command"""
        if len(pipeline.commands) == 1 and isinstance(pipeline.commands[0], Exit):
            return Status.EXIT
        return Status.CONTINUE

    @staticmethod
    def run_pipeline(pipeline: Pipeline) -> str:
        """Connect the output of each command to the input of the next"""
        result = ''
        for command in pipeline.commands:
            logger.debug("running %r", command)
            result = command.execute(result)
        return result
