"""
ECIES Toolkit Logging

The library logs through one named logger ("ECIES" by default). Its level
and file output come from the environment at import (ECIES_LOG_LEVEL,
ECIES_LOG_DIR, see ecies.config) and can be changed at runtime. Handlers
are swapped on the same `logging.Logger` object, so module-level
references taken at import keep working after a reconfiguration.

Records carry lengths, curve and scheme names and public key fingerprints.
Keys, shared secrets and plaintext are never passed to the logger.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LevelSpec = Union[int, str]


def parse_level(value: Optional[LevelSpec], default: int) -> int:
    """
    Resolve a logging level given as an int or a name ("debug", "INFO").

    None or an empty string resolve to `default`.

    Raises:
        ValueError: If the name is not a logging level
    """
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {value}")
    return level


class ECIESLogger:
    """
    Logger factory for the toolkit, cached by name.

    Handlers are left at NOTSET so the logger level is the only filter and
    a level change never needs to touch them.
    """

    _loggers = {}

    @classmethod
    def get_logger(
        cls,
        name: str,
        level: LevelSpec = logging.WARNING,
        log_dir: Optional[str] = None,
        console_output: bool = True,
    ) -> logging.Logger:
        """Return the cached logger, configuring it on first use."""
        if name in cls._loggers:
            return cls._loggers[name]
        return cls.configure(name, level=level, log_dir=log_dir, console_output=console_output)

    @classmethod
    def configure(
        cls,
        name: str,
        level: Optional[LevelSpec] = None,
        log_dir: Optional[str] = None,
        console_output: bool = True,
    ) -> logging.Logger:
        """
        (Re)build the handlers of logger `name`.

        Handlers from a previous configuration are removed and closed, which
        releases any open log file.

        Args:
            name: Logger name
            level: int or level name; None keeps the current level (WARNING if unset)
            log_dir: Directory for `<name>.log`; None disables file output
            console_output: Also write to stderr

        Returns:
            The configured logger
        """
        logger = logging.getLogger(name)
        logger.setLevel(parse_level(level, logger.level or logging.WARNING))
        logger.propagate = False

        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        handlers = []
        if console_output:
            handlers.append(logging.StreamHandler(sys.stderr))
        if log_dir:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_path / f"{name}.log", encoding="utf-8"))

        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
        for handler in handlers:
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        # No output requested: keep records away from logging.lastResort
        if not handlers:
            logger.addHandler(logging.NullHandler())

        cls._loggers[name] = logger
        return logger

    @classmethod
    def set_level(cls, name: str, level: LevelSpec) -> int:
        """
        Change the level of logger `name`, configuring it if needed.

        Returns:
            int: the resolved level
        """
        logger = cls.get_logger(name)
        resolved = parse_level(level, logger.level)
        logger.setLevel(resolved)
        return resolved
