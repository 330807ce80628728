"""
Module that finds the mount point of the instance that a path belongs to.

The root directory of a mounted instance always has inode number 1, which is something
that regular directories on other file systems practically never have. That makes it
possible to find the mount point by walking up the parent directories of any path
inside of it until we hit a directory with that inode.
"""

import os
import stat
from typing import Callable

from cachewarm.constants import ROOT_INODE
from cachewarm.errors import NotMountedError, PathResolutionError
from cachewarm.logger import log


def get_file_inode(path: str) -> int:
    """Look up the inode number of the entry at the given path."""
    return os.stat(path).st_ino


def resolve_mount_root(
    start_path: str, get_inode: Callable[[str], int] = get_file_inode
) -> str:
    """
    Find the mount point of the instance that contains the specified path.

    The path may refer to either a file or a directory. Raises PathResolutionError if
    the path or one of its parents cannot be looked up and NotMountedError if none of
    its parents (up to, but excluding /) is the root of an instance.
    """
    path = os.path.abspath(start_path)

    try:
        st = os.stat(path)
    except OSError as e:
        raise PathResolutionError(f"failed to stat path {path}: {e}") from e

    if stat.S_ISDIR(st.st_mode):
        candidate = path
    else:
        candidate = os.path.dirname(path)

    while candidate != "/":
        try:
            inode = get_inode(candidate)
        except OSError as e:
            raise PathResolutionError(
                f"failed to lookup inode for {candidate}: {e}"
            ) from e

        log.debug(f"inode of {candidate} is {inode}")

        if inode == ROOT_INODE:
            return candidate

        candidate = os.path.dirname(candidate)

    raise NotMountedError(f"path {path} is not inside a mounted instance")
