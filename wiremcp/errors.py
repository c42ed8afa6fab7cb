"""
WireMCP Error Types

Failures that end a single tool invocation. Each carries the diagnostic
text that is returned to the caller after the ``Error:`` prefix.
"""


class WireMCPError(Exception):
    """Base class for errors reported back to the tool caller."""


class CollaboratorUnavailableError(WireMCPError):
    """An external collaborator (tshark, a capture file) could not be used."""


class TsharkNotFoundError(CollaboratorUnavailableError):
    """No usable tshark binary was found."""

    def __init__(self, message: str = "tshark not found. Please install Wireshark (https://www.wireshark.org/download.html) and ensure it's in your PATH."):
        super().__init__(message)


class CaptureFileNotFoundError(CollaboratorUnavailableError):
    """A capture file passed by the caller does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File not found: {path}")


class TsharkError(CollaboratorUnavailableError):
    """tshark exited with an error or timed out."""

    def __init__(self, message: str, returncode: int | None = None):
        self.returncode = returncode
        super().__init__(message)


class MalformedOutputError(WireMCPError):
    """tshark output could not be parsed as a whole."""
