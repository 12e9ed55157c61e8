"""Fake collaborators shared by the test suites"""

from pipesh.context import CommandContext
from pipesh.filesystem import LocalFileSystem
from pipesh.process import LaunchError, ProcessResult


class FakeFileSystem(LocalFileSystem):
    """In-memory files and a fixed working directory"""

    def __init__(self, files=None, cwd='/home/user'):
        super().__init__()
        self.files = dict(files or {})
        self.cwd = cwd
        self.reads = []

    def read_file(self, path):
        self.reads.append(path)
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]

    def current_directory(self):
        return self.cwd


class FakeRunner:
    """Returns a canned result, or raises LaunchError when result is None"""

    def __init__(self, result=None):
        self.result = result
        self.calls = []

    def run(self, program, args, stdin=''):
        self.calls.append((program, list(args), stdin))
        if self.result is None:
            raise LaunchError(program, 'No such file or directory')
        return self.result


def make_context(files=None, cwd='/home/user', result=ProcessResult('', '', 0)):
    """Return (context, diagnostics) where diagnostics collects warnings"""
    diagnostics = []
    context = CommandContext(
        filesystem=FakeFileSystem(files, cwd),
        runner=FakeRunner(result),
        diagnostic=diagnostics.append,
    )
    return context, diagnostics
