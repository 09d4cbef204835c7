import structlog
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional


class LogConfig:
    """Handler and formatter setup shared by the CLI and the tests"""

    def __init__(self, debug: bool = False, log_file: Optional[Path] = None):
        self.debug = debug
        self.log_file = log_file

        # Console stays quiet unless something goes wrong; stdout belongs to the token
        self.log_level = logging.DEBUG if debug else logging.WARNING
        self.file_log_level = logging.DEBUG  # Always debug for files

        self.detailed_formatter = logging.Formatter(
            '%(asctime)s | %(name)-20s | %(levelname)-8s | %(funcName)-20s:%(lineno)-4d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        self.simple_formatter = logging.Formatter('%(message)s')

    def create_rotating_handler(self, filepath: Path, max_bytes: int = 5*1024*1024, backup_count: int = 3) -> logging.Handler:
        """Create a rotating file handler with proper configuration"""
        filepath.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            filepath,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        handler.setLevel(self.file_log_level)
        handler.setFormatter(self.detailed_formatter)
        return handler

    def create_console_handler(self) -> logging.Handler:
        """Create console handler for stderr"""
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(self.log_level)
        handler.setFormatter(self.simple_formatter)
        return handler


def configure_logging(debug: bool = False, log_file: Optional[Path] = None):
    """Configure stdlib logging and structlog for a single CLI run"""
    config = LogConfig(debug=debug, log_file=log_file)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    # The root level is the lowest of all handler levels
    root_logger.setLevel(logging.DEBUG if log_file else config.log_level)
    root_logger.addHandler(config.create_console_handler())
    if log_file:
        root_logger.addHandler(config.create_rotating_handler(log_file))

    # httpx logs full request URLs at INFO, and those carry the API key
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    configure_structlog(config)

    logger = structlog.get_logger("logging")
    logger.debug("Logging system initialized",
                 log_level=logging.getLevelName(config.log_level),
                 log_file=str(log_file) if log_file else None,
                 debug_mode=debug)


def configure_structlog(config: LogConfig):
    """Configure structlog with proper processors"""
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.ConsoleRenderer(colors=config.debug),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger for the given name"""
    return structlog.get_logger(name)
