"""
==============================================
Centralized logging configuration for dbutils.
==============================================

Library modules (sql.*, events.*, utils.*) only ever call
logging.getLogger(__name__). Nothing here runs on import: the command line
entry point (main.py) or an embedding application calls
setup_logging_from_config() once at startup.

Output:
- Console handler on stdout, optionally colored with a level emoji
- Optional file handler under DBUTILS_LOG_DIR (plain text, UTF-8)

Executed statements reach these handlers through the `events.sql_events`
logger once install_sql_logger() has been called; they are logged at DEBUG
and failures at ERROR.

Example:
    >>> from core.logger import get_logger, setup_logging
    >>>
    >>> setup_logging(log_level='DEBUG', log_file='dbutils.log')
    >>> get_logger(__name__).info("Connected")
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from core.config import Config, config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
COLORED_LOG_FORMAT = '%(emoji)s ' + LOG_FORMAT
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_RESET = '\033[0m'


def _level(name: str) -> int:
    """Resolve a level name such as 'debug' to its numeric value."""
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return level


class ColoredFormatter(logging.Formatter):
    """Console formatter adding ANSI colors and a level emoji.

    Formats a copy of the record, so file handlers sharing the record still
    see the plain level name.

    Attributes:
        LEVEL_STYLES: Level name to (ANSI color, emoji) mapping
    """

    LEVEL_STYLES = {
        'DEBUG': ('\033[36m', '🔍'),      # Cyan
        'INFO': ('\033[32m', 'ℹ️ '),      # Green
        'WARNING': ('\033[33m', '⚠️ '),   # Yellow
        'ERROR': ('\033[31m', '❌'),      # Red
        'CRITICAL': ('\033[35m', '🔥'),   # Magenta
    }

    def format(self, record):
        styled = logging.makeLogRecord(record.__dict__)
        color, emoji = self.LEVEL_STYLES.get(record.levelname, ('', ''))
        styled.emoji = emoji
        if color:
            styled.levelname = f"{color}{record.levelname}{_RESET}"
        return super().format(styled)


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a module logger, optionally pinning its level.

    Args:
        name: Logger name (typically __name__ of calling module)
        level: Optional level name (DEBUG/INFO/WARNING/ERROR/CRITICAL)

    Example:
        >>> sql_logger = get_logger('events.sql_events', level='DEBUG')
    """
    logger = logging.getLogger(name)
    if level:
        logger.setLevel(_level(level))
    return logger


def _console_handler(level: int, use_colors: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if use_colors:
        handler.setFormatter(ColoredFormatter(COLORED_LOG_FORMAT, datefmt=DATE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _file_handler(level: int, log_file: str, log_dir: Optional[str]) -> logging.Handler:
    log_path = Path(log_dir) if log_dir else Path('logs')
    log_path.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_path / log_file, encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    log_level: str = 'INFO',
    log_file: Optional[str] = None,
    log_dir: Optional[str] = None,
    console_output: bool = True,
    use_colors: bool = True
) -> List[logging.Handler]:
    """Configure the root logger.

    Replaces any handlers already on the root logger. Call once at
    application startup.

    Args:
        log_level: Logging level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        log_file: Optional log file name (e.g., 'dbutils.log')
        log_dir: Directory for log_file (defaults to 'logs/')
        console_output: Write to stdout
        use_colors: Color the console output

    Returns:
        The handlers installed on the root logger

    Raises:
        ValueError: If log_level is not a known level name

    Example:
        >>> setup_logging(log_level='DEBUG', log_file='dbutils.log', use_colors=False)
    """
    level = _level(log_level)

    handlers = []
    if console_output:
        handlers.append(_console_handler(level, use_colors))
    if log_file:
        handlers.append(_file_handler(level, log_file, log_dir))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in handlers:
        root_logger.addHandler(handler)

    return handlers


def setup_logging_from_config(
    settings: Optional[Config] = None,
    log_level: Optional[str] = None
) -> List[logging.Handler]:
    """Configure logging from the DBUTILS_LOG_* settings.

    Args:
        settings: Config instance (defaults to the global config)
        log_level: Overrides settings.log_level (e.g. for --verbose)
    """
    settings = settings or config
    return setup_logging(
        log_level=log_level or settings.log_level,
        log_file=settings.log_file,
        log_dir=str(settings.log_dir),
        console_output=True,
        use_colors=settings.log_colors
    )
