"""Module that implements the logic of a warm-up run on top of its components."""

from abc import ABC
import contextlib

from cachewarm.args import Arguments
from cachewarm.config import Config
from cachewarm.control import ControlChannel
from cachewarm.logger import log
from cachewarm.mount import resolve_mount_root
from cachewarm.progress import WarmupProgress
from cachewarm.warmup import read_paths, warm_up


class Operations(ABC):
    """Base class for the operations logic of a run."""

    def run(self) -> int:
        """Run the operations and clean up properly in case of errors."""
        with contextlib.ExitStack() as stack:
            return self._run(stack)

        # https://github.com/python/mypy/issues/7726
        assert False, "unreachable"

    def _run(self, stack: contextlib.ExitStack) -> int:
        """Run the actual operations."""
        raise NotImplementedError()


class WarmupOperations(Operations):
    """Class that warms up the cache for the paths given on the command-line."""

    def __init__(self, args: Arguments, config: Config):
        """Initialize operations based on command-line arguments and config."""
        self._args = args

        self._threads = (
            args.threads if args.threads is not None else config.warmup.threads
        )
        self._background = (
            args.background if args.background is not None else config.warmup.background
        )
        self._batch_size = config.warmup.batch_size

    def _run(self, stack: contextlib.ExitStack) -> int:
        """Send fill cache requests for all paths to the instance they live in."""
        paths = read_paths(self._args.paths, self._args.file)

        if len(paths) == 0:
            log.info("nothing to warm up")
            return 0

        # All paths are expected to live in the same instance as the first one
        mount_root = resolve_mount_root(paths[0])
        log.debug(f"found mount point {mount_root}")

        channel = stack.enter_context(ControlChannel.open(mount_root))
        progress = stack.enter_context(
            WarmupProgress(len(paths), quiet=self._background)
        )

        result = warm_up(
            paths,
            mount_root,
            channel,
            threads=self._threads,
            background=self._background,
            batch_size=self._batch_size,
            progress=progress,
        )

        if result.requests == 0:
            log.info("nothing to warm up")
        elif self._background:
            log.info(f"requested warm-up of {result.warmed} paths in background")
        else:
            log.info(f"warmed up {result.warmed} paths")

        if result.skipped:
            log.warning(f"skipped {len(result.skipped)} paths that cannot be warmed up")

        return 0
