import logging
import sys
import threading
from datetime import datetime
from os import makedirs, path
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

from .config import AppConfig, Environment, load_logging_config, resolve_environment
from ..utils.retention import clear_latest_items

# Constants
FIELDS = [
    "name",
    "process",
    "processName",
    "threadName",
    "thread",
    "asctime",
    "created",
    "msecs",
    "pathname",
    "module",
    "filename",
    "funcName",
    "levelno",
    "levelname",
    "message",
]


class LoggingConfigurator:
    """
    Encapsulated logging configuration with environment-specific setups,
    thread-safe configuration, and flexible handler management.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        self.config = config or AppConfig(environment=resolve_environment(), logging=load_logging_config())
        self.root_logger = logging.getLogger()
        self._configured = False
        self._handlers = []
        self._lock = threading.Lock()

    @property
    def environment(self) -> Environment:
        return self.config.environment

    def configure(self):
        """Configure logging once globally (thread-safe)."""
        with self._lock:
            if self._configured:
                return

            # Only drop handlers we installed; leave foreign ones (e.g. pytest's) alone
            self._remove_own_handlers()
            self.root_logger.setLevel(logging.DEBUG)

            json_formatter = self._create_json_formatter()
            level = getattr(logging, self.config.logging.level)

            if self.environment == Environment.DEVELOPMENT:
                self._add_handler(self._create_console_handler(self._create_console_formatter(), level))
            elif self.environment == Environment.PRODUCTION:
                self._add_handler(self._create_console_handler(json_formatter, level))

            log_dir = self.config.logging.get_log_dir()
            if log_dir is not None:
                error_handler, info_handler = self._create_file_handlers(str(log_dir), json_formatter)
                self._add_handler(error_handler)
                self._add_handler(info_handler)

            self._configured = True

    def _add_handler(self, handler: logging.Handler):
        self.root_logger.addHandler(handler)
        self._handlers.append(handler)

    def _remove_own_handlers(self):
        for handler in self._handlers:
            self.root_logger.removeHandler(handler)
            handler.close()
        self._handlers.clear()

    def _create_json_formatter(self) -> JsonFormatter:
        """Create JSON formatter for structured logging."""
        json_format = " ".join(map(lambda field_name: f"%({field_name})s", FIELDS))
        return JsonFormatter(json_format)

    def _create_console_formatter(self) -> logging.Formatter:
        """Create console formatter for development output."""
        return logging.Formatter('%(levelname)s:%(name)s:%(message)s')

    def _create_console_handler(self, formatter: logging.Formatter, level: int) -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        handler.setLevel(level)
        return handler

    def _create_file_handlers(self, log_dir: str, formatter: JsonFormatter) -> tuple:
        """Create error and info file handlers with directory management."""
        date_str = datetime.now().strftime("%Y-%m-%d")
        time_str = datetime.now().strftime("%H_%M")
        log_root_path = path.join(log_dir, date_str)

        if path.exists(log_root_path):
            clear_latest_items(log_root_path, self.config.logging.log_files_horizon)

        base_path = path.join(log_root_path, time_str)
        makedirs(base_path, exist_ok=True)

        error_handler = logging.FileHandler(path.join(base_path, "error_log.log"), mode="a")
        error_handler.setFormatter(formatter)
        error_handler.setLevel(logging.ERROR)

        info_handler = logging.FileHandler(path.join(base_path, "info_log.log"), mode="a")
        info_handler.setFormatter(formatter)
        info_handler.setLevel(logging.INFO)

        return error_handler, info_handler

    def get_logger(self, name: str) -> logging.Logger:
        """Get a configured logger for the given name."""
        self.configure()
        return logging.getLogger(name)

    def reconfigure(self, config: Optional[AppConfig] = None):
        """Reconfigure logging (useful for testing or runtime changes)."""
        if config is not None:
            self.config = config
        self._configured = False
        self.configure()


_configurator = LoggingConfigurator()


def configure_logging(config: Optional[AppConfig] = None):
    """Configure logging, optionally replacing the active configuration."""
    if config is None:
        _configurator.configure()
    else:
        _configurator.reconfigure(config)


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger."""
    return _configurator.get_logger(name)


# Configure on import
configure_logging()

logger = get_logger("fsprune")
