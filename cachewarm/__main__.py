"""
Module implementing the command-line interface and invoking the main logic of cachewarm.

cachewarm asks a mounted instance to fetch the contents of the given files and
directories into its local cache ahead of time, so that the first real access to them
is fast. The instance is found by looking for its root directory among the parents of
the first path, and requests are sent through the control file in that directory.
"""

import logging
import os
import signal
import sys
from typing import List, NoReturn, Optional

import cachewarm.constants as constants
from cachewarm.errors import RemoteFailure, WarmupError
from cachewarm.logger import log
import cachewarm.operations as operations
from .args import Arguments
from .config import Config


def main(arguments: Optional[List[str]] = None) -> NoReturn:
    """
    Warm up the cache for the paths in the given arguments.

    Defaults to parsing command-line arguments from sys.argv if none are specified.
    """
    # Parse command-line arguments.
    args = Arguments.parse(arguments)

    # Configure debug logging.
    if args.debug:
        log.setLevel(logging.DEBUG)
    else:
        log.setLevel(logging.INFO)

    config = Config.load(os.path.expanduser(args.config))

    try:
        exit_code = operations.WarmupOperations(args, config).run()
    except KeyboardInterrupt:
        exit_code = 128 + signal.SIGINT
    except RemoteFailure as e:
        log.error(str(e))
        exit_code = constants.ERROR_CODE
    except WarmupError as e:
        log.error(f"failed to warm up: {e}")
        exit_code = constants.ERROR_CODE
    except Exception as e:
        log.error(f"unexpected failure: {e}")
        exit_code = constants.ERROR_CODE

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
