"""Module defining various global constants."""

# cachewarm version
VERSION = "1.0.0"

# Special exit code for when cachewarm itself fails.
ERROR_CODE = 254

# Inode number of the root directory of a mounted instance.
ROOT_INODE = 1

# Command code of the fill cache message understood by the control file.
FILL_CACHE = 1004

# Maximum number of paths the service accepts in a single fill cache message.
BATCH_MAX = 10240

# Number of workers the service uses for warming up if not specified otherwise.
DEFAULT_THREADS = 50

# Largest thread count that fits the 16-bit field of the fill cache message.
MAX_THREADS = 0xFFFF

# Names of the control file in the mount root, in order of preference.
# The second one is used by older versions of the service.
CONTROL_FILE_NAMES = (".jfs.control", ".control")
