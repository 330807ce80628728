"""Module for talking to the service through the control file in the mount point."""

from __future__ import annotations

import os
from typing import BinaryIO, Iterable, Optional

from cachewarm.constants import CONTROL_FILE_NAMES
from cachewarm.errors import ChannelIOError
from cachewarm.logger import log


class ControlChannel:
    """
    Open control file of a mounted instance.

    Writes and reads go straight to the file without any buffering, because the service
    treats every write() as a complete message and answers it with a status byte that
    becomes available through read().
    """

    def __init__(self, fileobj: BinaryIO, path: Optional[str] = None) -> None:
        """Wrap an already opened, unbuffered control file."""
        self._file = fileobj
        self.path = path

    @classmethod
    def open(
        cls, mount_root: str, names: Iterable[str] = CONTROL_FILE_NAMES
    ) -> ControlChannel:
        """Open the first control file that exists under the given mount point."""
        errors = []

        for name in names:
            path = os.path.join(mount_root, name)

            try:
                fileobj = open(path, "r+b", buffering=0)
            except OSError as e:
                log.debug(f"failed to open control file {path}: {e}")
                errors.append(e)
                continue

            log.debug(f"opened control file {path}")

            return cls(fileobj, path)

        reason = "".join(f"; {e}" for e in errors)
        raise ChannelIOError(f"failed to open control file under {mount_root}{reason}")

    def write(self, data: bytes) -> int:
        """Write a message to the control file and return the number of bytes sent."""
        try:
            written = self._file.write(data)
        except OSError as e:
            raise ChannelIOError(f"write message: {e}") from e

        return written if written is not None else 0

    def read(self, size: int) -> bytes:
        """Read up to the given number of bytes of response from the control file."""
        try:
            data = self._file.read(size)
        except OSError as e:
            raise ChannelIOError(f"read message: {e}") from e

        return data if data is not None else b""

    def close(self) -> None:
        """Close the control file."""
        self._file.close()

    def __enter__(self) -> ControlChannel:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
