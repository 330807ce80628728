"""Module defining the command-line arguments and providing a parser for them."""

from __future__ import annotations

import argparse
from typing import List, Optional

from cachewarm.constants import MAX_THREADS, VERSION


class Arguments(argparse.Namespace):
    """Parsed command-line arguments."""

    paths: List[str]
    file: Optional[str]

    threads: Optional[int]
    background: Optional[bool]

    config: str
    debug: bool

    @classmethod
    def parse(cls, args: Optional[List[str]] = None) -> Arguments:
        """
        Parse command-line arguments from the given list of strings.

        Defaults to sys.argv if none are specified.
        """
        return cls._get_parser().parse_args(args, namespace=cls())

    @classmethod
    def _get_parser(cls) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="cachewarm",
            description="Build cache for target directories/files.",
            usage="cachewarm [option...] [path...]",
        )

        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {VERSION}",
            help="show the program version",
        )

        # Paths to warm up
        parser.add_argument(
            "paths", type=str, nargs="*", help="files and directories to warm up"
        )

        # File with additional paths, one per line
        parser.add_argument(
            "-f", "--file", type=str, help="file containing a list of paths"
        )

        # Number of workers used by the service, defaults to the config file
        parser.add_argument(
            "-p",
            "--threads",
            type=cls._parse_threads,
            help="number of concurrent workers (default is 50)",
        )

        # Hand off requests without waiting for them to complete
        parser.add_argument(
            "-b",
            "--background",
            action="store_true",
            default=None,
            help="run in background",
        )
        parser.add_argument(
            "--no-background",
            action="store_false",
            default=None,
            help="wait for requests to complete, even if the config says otherwise",
            dest="background",
        )

        # Path to (optional) config file
        parser.add_argument(
            "--config",
            type=str,
            help="path to config file (default is ~/.cachewarm/config)",
            default="~/.cachewarm/config",
        )

        # Enable debug output
        parser.add_argument(
            "--debug", action="store_true", help="enable debug information"
        )

        return parser

    @staticmethod
    def _parse_threads(arg: str) -> int:
        try:
            val = int(arg)
            assert 0 < val <= MAX_THREADS
            return val
        except (ValueError, AssertionError):
            raise argparse.ArgumentTypeError(f"expected number in 1..{MAX_THREADS}")
