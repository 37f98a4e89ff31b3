from __future__ import annotations


class JavaCompError(Exception):
    """Base class for failures that abort a request with a server error."""


class FilesystemError(JavaCompError):
    """The request workspace could not be created or written."""


class SpawnError(JavaCompError):
    """An external executable could not be launched at all."""

    def __init__(self, command: str, reason: str) -> None:
        super().__init__(f"could not start '{command}': {reason}")
        self.command = command
        self.reason = reason
