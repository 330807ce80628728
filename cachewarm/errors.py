"""
Exceptions raised while warming up the cache.

Every failure that aborts a run derives from WarmupError so that the command-line entry
point can report it and exit with the right code. Paths that merely fall outside of the
mount point are not errors and are only logged.
"""


class WarmupError(Exception):
    """Base class for all fatal errors of a warm-up run."""


class PathResolutionError(WarmupError):
    """Raised when a path cannot be made absolute, stat'ed or have its inode read."""


class NotMountedError(WarmupError):
    """Raised when a path does not lie inside of a mounted instance."""


class ChannelIOError(WarmupError):
    """Raised when the control file cannot be opened, written or read."""


class InputError(WarmupError):
    """Raised when the list of paths cannot be read."""


class ProtocolError(WarmupError, ValueError):
    """Raised for messages that do not follow the control file wire format."""


class RemoteFailure(WarmupError):
    """Raised when the service reports that a warm-up request failed."""

    def __init__(self, code: int) -> None:
        """Instantiate the exception with the status code sent by the service."""
        super().__init__(f"warm up failed: {code}")

        self.code = code
