"""Configuration management for pipesh"""

import os

DEFAULT_PROMPT = 'pipesh> '
DEFAULT_HISTORY_FILE = '~/.pipesh_history'
DEFAULT_LOG_LEVEL = 'WARNING'


class Config:
    """Configuration for the shell"""

    def __init__(self):
        self.prompt = os.getenv('PIPESH_PROMPT', DEFAULT_PROMPT)
        self.history_file = os.path.expanduser(os.getenv('PIPESH_HISTFILE', DEFAULT_HISTORY_FILE))
        self.log_level = os.getenv('PIPESH_LOG_LEVEL', DEFAULT_LOG_LEVEL).upper()

    @classmethod
    def from_env(cls):
        """Create configuration from environment variables"""
        return cls()

    @classmethod
    def from_args(cls, prompt: str = None, history_file: str = None, log_level: str = None):
        """Create configuration from command line arguments"""
        config = cls()
        if prompt:
            config.prompt = prompt
        if history_file:
            config.history_file = os.path.expanduser(history_file)
        if log_level:
            config.log_level = log_level.upper()
        return config

    def __repr__(self):
        return (f"Config(prompt={self.prompt!r}, history_file={self.history_file!r}, "
                f"log_level={self.log_level!r})")
