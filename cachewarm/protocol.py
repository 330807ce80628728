"""
Wire format of the messages written to the control file.

The control file of a mounted instance accepts framed binary commands. Each frame starts
with a command code and the length of the payload that follows, which lets the service
read variable-sized messages from a plain byte stream. All integers are little-endian.

A fill cache frame looks like this:

    [4 bytes] command code (FILL_CACHE)
    [4 bytes] payload length (4 + 3 + length of path block)
    [4 bytes] path block length
    [N bytes] path block (paths as file system bytes joined by newlines)
    [2 bytes] number of workers
    [1 byte ] background flag

The path block length is redundant with the payload length, but the service validates
both, so it has to be sent regardless.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
import struct
from typing import Tuple

from cachewarm.constants import FILL_CACHE, MAX_THREADS
from cachewarm.errors import ProtocolError

# Command code and payload length
_HEADER = struct.Struct("<II")
_BLOCK_LENGTH = struct.Struct("<I")
# Number of workers and background flag
_TRAILER = struct.Struct("<HB")

# Status byte sent back by the service for a successful synchronous request.
STATUS_OK = 0

PATH_SEPARATOR = "\n"


@dataclass(frozen=True)
class FillCacheRequest:
    """Request to warm up the cache for a batch of paths relative to the mount point."""

    paths: Tuple[str, ...]
    threads: int
    background: bool = False

    def encode(self) -> bytes:
        """Serialize the request into a single frame for the control file."""
        if not 0 <= self.threads <= MAX_THREADS:
            raise ProtocolError(f"thread count {self.threads} out of range")

        # Paths are sent as raw file system bytes, even if they are not valid UTF-8
        block = os.fsencode(PATH_SEPARATOR).join(os.fsencode(p) for p in self.paths)
        payload_length = _BLOCK_LENGTH.size + _TRAILER.size + len(block)

        return b"".join(
            [
                _HEADER.pack(FILL_CACHE, payload_length),
                _BLOCK_LENGTH.pack(len(block)),
                block,
                _TRAILER.pack(self.threads, int(self.background)),
            ]
        )

    @staticmethod
    def decode(frame: bytes) -> FillCacheRequest:
        """
        Parse a frame produced by encode().

        Both length fields are checked against the actual size of the frame.
        """
        if len(frame) < _HEADER.size + _BLOCK_LENGTH.size + _TRAILER.size:
            raise ProtocolError(f"frame too short ({len(frame)} bytes)")

        command, payload_length = _HEADER.unpack_from(frame)

        if command != FILL_CACHE:
            raise ProtocolError(f"unexpected command {command}")

        if payload_length != len(frame) - _HEADER.size:
            raise ProtocolError(
                f"payload length {payload_length} does not match frame size"
            )

        (block_length,) = _BLOCK_LENGTH.unpack_from(frame, _HEADER.size)

        if _BLOCK_LENGTH.size + block_length + _TRAILER.size != payload_length:
            raise ProtocolError(
                f"path block length {block_length} does not match payload length"
            )

        block_start = _HEADER.size + _BLOCK_LENGTH.size
        block = frame[block_start : block_start + block_length]

        threads, background = _TRAILER.unpack_from(frame, block_start + block_length)

        paths = tuple(os.fsdecode(block).split(PATH_SEPARATOR)) if block else ()

        return FillCacheRequest(
            paths=paths, threads=threads, background=background != 0
        )
