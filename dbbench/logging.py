import logging
import os
import sys

from rich.logging import RichHandler

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingManager:
    def __init__(self, command_type, log_dir=None):
        self.command_type = command_type
        self.log_dir = log_dir
        self.init_logging()

    def init_logging(self):
        """Initialize logging based on command type."""
        log_level = os.getenv("DBBENCH_LOGGING_LEVEL", "INFO").upper()

        if log_level not in LOG_LEVELS:
            log_level = "INFO"

        handlers = [self.get_rich_handler()]
        # Listing benchmarks never touches a database, keep it off disk
        if self.command_type == "run":
            handlers.insert(0, self.get_file_handler())

        logging.basicConfig(level=log_level, handlers=handlers, force=True)

        # Set up exception handling
        self.setup_exception_handler()

    @staticmethod
    def setup_exception_handler():
        """Set up exception handling to log uncaught exceptions."""

        def handle_uncaught_exception(exc_type, exc_value, exc_traceback):
            if issubclass(exc_type, KeyboardInterrupt):
                sys.__excepthook__(exc_type, exc_value, exc_traceback)
                return

            logging.error(
                "Uncaught exception",
                exc_info=(exc_type, exc_value, exc_traceback),
            )
            sys.exit(1)

        sys.excepthook = handle_uncaught_exception

    def get_file_handler(self):
        """Return a file handler for logging."""
        file_log_format = "{levelname:<8} {asctime} - {name}:{funcName} - {message}"
        date_format = "%Y-%m-%d %H:%M:%S"

        # Determine log file path
        if self.log_dir:
            os.makedirs(self.log_dir, exist_ok=True)
            log_file = os.path.join(self.log_dir, "dbbench.log")
        else:
            log_file = "dbbench.log"

        file_handler = logging.FileHandler(log_file)

        file_formatter = logging.Formatter(
            file_log_format, datefmt=date_format, style="{"
        )
        file_handler.setFormatter(file_formatter)

        return file_handler

    @staticmethod
    def get_rich_handler():
        """Return a rich handler for logging."""

        rich_handler = RichHandler(rich_tracebacks=True)
        rich_formatter = logging.Formatter("%(message)s", style="%")
        rich_handler.setFormatter(rich_formatter)
        return rich_handler


def init_logger(name: str):
    return logging.getLogger(name)
