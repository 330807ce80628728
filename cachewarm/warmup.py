"""
Module that turns a list of paths into fill cache requests for the control file.

Paths are made relative to the mount point and grouped into batches of at most
BATCH_MAX entries, because the service limits the size of a single message. Batches are
sent one after another in input order. In synchronous mode every batch is only
considered done once the service has replied with its status byte, which means that
the service has finished warming up all of its paths. In background mode the service
only queues the work and no reply is sent.
"""

from dataclasses import dataclass, field
import os
from typing import Callable, Iterable, List, Optional, Protocol, Sequence

from cachewarm.constants import BATCH_MAX
from cachewarm.errors import ChannelIOError, InputError, RemoteFailure
from cachewarm.logger import log, summarize
from cachewarm.protocol import FillCacheRequest, PATH_SEPARATOR, STATUS_OK


class Channel(Protocol):
    """Byte channel that fill cache requests are written to."""

    def write(self, data: bytes) -> int:
        ...

    def read(self, size: int) -> bytes:
        ...


@dataclass
class WarmupResult:
    """Outcome of warming up a list of paths."""

    warmed: int = 0
    requests: int = 0
    skipped: List[str] = field(default_factory=list)


def read_paths(arguments: Sequence[str], filename: Optional[str] = None) -> List[str]:
    """
    Collect the paths to warm up from the command-line and an optional file.

    The file contains one path per line. Surrounding whitespace is stripped and blank
    lines are ignored. Lines are decoded like file names, so paths that are not valid
    UTF-8 are kept intact.
    """
    paths = list(arguments)

    if filename:
        try:
            with open(filename, "rb") as f:
                for line in f:
                    path = line.strip()

                    if path:
                        paths.append(os.fsdecode(path))
        except OSError as e:
            raise InputError(f"failed to read paths from {filename}: {e}") from e

    return paths


def relative_path(path: str, mount_root: str) -> Optional[str]:
    """
    Make an absolute path relative to the mount point.

    Returns None if the path doesn't lie within the mount point. The mount point itself
    is represented as "/".
    """
    if path == mount_root:
        return "/"

    prefix = mount_root.rstrip("/") + "/"

    if path.startswith(prefix):
        return path[len(prefix) :]
    else:
        return None


def send_command(
    channel: Channel, batch: Sequence[str], threads: int, background: bool
) -> None:
    """
    Send a fill cache request for a batch of paths and wait for it to complete.

    If background is set, the request is handed off to the service without waiting for
    (or receiving) a reply.
    """
    frame = FillCacheRequest(tuple(batch), threads, background).encode()

    log.debug(f"sending fill cache request for {summarize(list(batch))}")

    written = channel.write(frame)

    if written != len(frame):
        raise ChannelIOError(f"write message: wrote {written} of {len(frame)} bytes")

    if background:
        log.info(f"warm-up cache for {len(batch)} paths in background")
        return

    status = channel.read(1)

    if len(status) != 1:
        raise ChannelIOError(f"read message: got {len(status)} bytes of status")

    if status[0] != STATUS_OK:
        raise RemoteFailure(status[0])


def warm_up(
    paths: Iterable[str],
    mount_root: str,
    channel: Channel,
    threads: int,
    background: bool = False,
    batch_size: int = BATCH_MAX,
    progress: Optional[Callable[[int], None]] = None,
) -> WarmupResult:
    """
    Warm up the cache for all paths that lie within the mount point.

    Paths outside of the mount point and paths that cannot be represented in a request
    are skipped with a warning. Any failure to communicate with the service, or a failed
    request, aborts the whole operation.
    """
    if not 0 < batch_size <= BATCH_MAX:
        raise ValueError(f"batch size must be between 1 and {BATCH_MAX}")

    result = WarmupResult()
    batch: List[str] = []

    def flush() -> None:
        send_command(channel, batch, threads, background)

        result.warmed += len(batch)
        result.requests += 1

        if progress is not None:
            progress(len(batch))

        batch.clear()

    for path in paths:
        rel_path = relative_path(os.path.abspath(path), mount_root)

        if rel_path is None:
            log.warning(f"path {path} is not under mount point {mount_root}")
            result.skipped.append(path)
            continue

        if PATH_SEPARATOR in rel_path:
            log.warning(f"path {path!r} contains a newline and cannot be warmed up")
            result.skipped.append(path)
            continue

        try:
            os.fsencode(rel_path)
        except UnicodeEncodeError:
            log.warning(f"path {path!r} cannot be encoded as a file name")
            result.skipped.append(path)
            continue

        batch.append(rel_path)

        if len(batch) >= batch_size:
            flush()

    if batch:
        flush()

    return result
