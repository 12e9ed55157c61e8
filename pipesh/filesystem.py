"""Local file system and working directory access used by built-in commands"""

import os


class LocalFileSystem:
    """Thin layer over the local file system

    Commands never touch ``open`` or ``os.getcwd`` directly so that tests can
    substitute a fake with the same two methods.
    """

    def __init__(self, encoding: str = 'utf-8'):
        self.encoding = encoding

    def read_file(self, path: str) -> str:
        """
        Read the full contents of a file

        Args:
            path: File path, relative paths resolve against the process cwd

        Returns:
            File content as text

        Raises:
            FileNotFoundError: If the file does not exist
            OSError: If the file cannot be read (directory, permissions)
        """
        # newline='' keeps line terminators as they are on disk
        with open(path, 'r', encoding=self.encoding, errors='replace', newline='') as f:
            return f.read()

    def current_directory(self) -> str:
        """Return the current working directory of the process"""
        return os.getcwd()

    def get_error_message(self, error: Exception) -> str:
        """
        Get user-friendly error message

        Args:
            error: Exception object

        Returns:
            Formatted error message
        """
        if isinstance(error, FileNotFoundError):
            return "No such file or directory"
        if isinstance(error, IsADirectoryError):
            return "Is a directory"
        if isinstance(error, PermissionError):
            return "Permission denied"
        return str(error)
