"""pipesh - a minimal interactive shell with pipelines"""

from .version import __version__

__all__ = ['__version__']
