"""Module for configuration variables with defaults that are overridable by a file."""

from __future__ import annotations

from configparser import ConfigParser, SectionProxy
from dataclasses import dataclass, field

from cachewarm.constants import BATCH_MAX, DEFAULT_THREADS, MAX_THREADS
from cachewarm.logger import log


@dataclass
class WarmupConfig:
    """Configuration variables related to warming up the cache."""

    threads: int = DEFAULT_THREADS
    background: bool = False

    batch_size: int = BATCH_MAX

    @staticmethod
    def load(section: SectionProxy) -> WarmupConfig:
        """Load overridden variables from a section within a config file."""
        config = WarmupConfig()

        threads = section.getint("threads", fallback=config.threads)

        if 0 < threads <= MAX_THREADS:
            config.threads = threads
        else:
            log.error(f"ignoring invalid thread count {threads} in config")

        config.background = section.getboolean("background", fallback=config.background)

        batch_size = section.getint("batch_size", fallback=config.batch_size)

        if 0 < batch_size <= BATCH_MAX:
            config.batch_size = batch_size
        else:
            log.error(f"ignoring invalid batch size {batch_size} in config")

        return config


@dataclass
class Config:
    """Configuration variables."""

    warmup: WarmupConfig = field(default_factory=WarmupConfig)

    @staticmethod
    def load(filename: str) -> Config:
        """Load overridden configuration variables from a config file."""
        parser = ConfigParser()

        config = Config()

        try:
            with open(filename, "r") as f:
                parser.read_string(f.read(), filename)

            if "warmup" in parser:
                config.warmup = WarmupConfig.load(parser["warmup"])
        except FileNotFoundError:
            log.debug(f"no config file at {filename}")
        except Exception as e:
            # An unreadable config file is not considered a fatal error since we can
            # fall back to defaults.
            log.error(f"failed to read config file {filename}: {e}")
        else:
            log.debug(f"loaded config: {config}")

        return config
