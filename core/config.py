"""
=====================================
Configuration management for dbutils.
=====================================

Loads all configuration from environment variables (.env file) and provides
a centralized Config singleton for application-wide access.

The configuration system ensures:
- Single source of truth for all settings
- Type conversion of numeric and boolean values
- Sensible defaults (in-memory SQLite, INFO logging)

Example:
    >>> from core.config import config
    >>>
    >>> # Database connection
    >>> engine_url = config.get_connection_string()
    >>>
    >>> # Access individual settings
    >>> print(f"Log level: {config.log_level}")
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

_TRUE_VALUES = ('1', 'true', 'yes', 'on')


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean environment variable."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


@dataclass
class DatabaseConfig:
    """Database configuration settings.

    Attributes:
        url: SQLAlchemy database URL
        echo: Enable SQLAlchemy statement echo
    """

    url: str
    echo: bool = False

    def get_connection_string(self) -> str:
        """Get the SQLAlchemy database URL."""
        return self.url


@dataclass
class LoggingConfig:
    """Logging configuration settings.

    Attributes:
        level: Logging level name (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        log_file: Optional log file name
        log_dir: Directory holding the log file
        use_colors: Colored console output
    """

    level: str = 'INFO'
    log_file: Optional[str] = None
    log_dir: Path = Path('logs')
    use_colors: bool = True


class Config:
    """Centralized configuration manager.

    Attributes:
        db: DatabaseConfig instance with database connection settings
        logging: LoggingConfig instance with logging settings

    Properties:
        database_url: SQLAlchemy database URL
        db_echo: SQLAlchemy echo flag
        log_level: Logging level name
        log_file: Optional log file name
        log_dir: Log directory
        log_colors: Colored console output flag

    Example:
        >>> config = Config()
        >>> conn_str = config.get_connection_string()
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.db = DatabaseConfig(
            url=os.getenv('DBUTILS_DATABASE_URL', 'sqlite:///:memory:'),
            echo=_env_flag('DBUTILS_DB_ECHO', False)
        )

        self.logging = LoggingConfig(
            level=os.getenv('DBUTILS_LOG_LEVEL', 'INFO').upper(),
            log_file=os.getenv('DBUTILS_LOG_FILE') or None,
            log_dir=Path(os.getenv('DBUTILS_LOG_DIR', 'logs')),
            use_colors=_env_flag('DBUTILS_LOG_COLORS', True)
        )

    @property
    def database_url(self) -> str:
        """Get SQLAlchemy database URL."""
        return self.db.url

    @property
    def db_echo(self) -> bool:
        return self.db.echo

    @property
    def log_level(self) -> str:
        return self.logging.level

    @property
    def log_file(self) -> Optional[str]:
        return self.logging.log_file

    @property
    def log_dir(self) -> Path:
        return self.logging.log_dir

    @property
    def log_colors(self) -> bool:
        return self.logging.use_colors

    def get_connection_string(self) -> str:
        """Get database connection string.

        Returns:
            SQLAlchemy-compatible database URL
        """
        return self.db.get_connection_string()


# Global configuration instance
config = Config()
