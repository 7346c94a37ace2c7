import logging
import sys
import traceback
from contextlib import suppress
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Union


class ColoredFormatter(logging.Formatter):
    """Brackets format, colored by level on the console"""

    COLORS = {
        'DEBUG': '\033[94m',    # Blue
        'INFO': '\033[92m',     # Green
        'WARNING': '\033[93m',  # Yellow
        'ERROR': '\033[91m',    # Red
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = False):
        self.use_colors = use_colors
        # Format: [time] [level] [class] message
        super().__init__('[%(asctime)s] [%(levelname)s] [%(class_name)s] %(message)s')

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, 'class_name'):
            record.class_name = 'Main'

        formatted = super().format(record)
        if self.use_colors and record.levelname in self.COLORS:
            formatted = f"{self.COLORS[record.levelname]}{formatted}{self.RESET}"
        return formatted


class ClassLogger:
    """Per-component logger with its own minimum level"""

    def __init__(self, main_logger: logging.Logger, class_name: str, level: int):
        self.main_logger = main_logger
        self.class_name = class_name
        self.level = level

    def _log(self, level: int, message: str, exc_info: bool = False) -> None:
        if level < self.level:
            return
        record = self.main_logger.makeRecord(
            self.main_logger.name, level, "", 0, message, (), sys.exc_info() if exc_info else None
        )
        record.class_name = self.class_name
        self.main_logger.handle(record)

    def debug(self, message: str) -> None:
        self._log(logging.DEBUG, message)

    def info(self, message: str) -> None:
        self._log(logging.INFO, message)

    def warning(self, message: str) -> None:
        self._log(logging.WARNING, message)

    def error(self, message: str, exception: Optional[BaseException] = None) -> None:
        """Log an error; with an exception, add its type and origin plus the traceback"""
        if exception is None:
            self._log(logging.ERROR, message)
            return

        tb = traceback.extract_tb(exception.__traceback__)
        filename, lineno = (tb[-1].filename, tb[-1].lineno) if tb else ("unknown", 0)
        self._log(
            logging.ERROR,
            f"{message} | Type: {type(exception).__name__} | File: {filename} | Line: {lineno}",
            exc_info=True,
        )


class HybridLogger:
    """
    Hands out ClassLoggers that share one console handler (stderr, colored)
    and, when log_dir is set, one timestamped log file.
    """

    def __init__(self, name: str = "soundboard", log_dir: Optional[Union[str, Path]] = None):
        self.name = name
        self.log_dir = Path(log_dir) if log_dir is not None else None
        self.log_file: Optional[Path] = None
        self.class_loggers: Dict[str, ClassLogger] = {}

        self.main_logger = logging.getLogger(name)
        self.main_logger.setLevel(logging.DEBUG)
        self.main_logger.propagate = False
        self.main_logger.handlers.clear()

        # Console goes to stderr so command output on stdout stays clean
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ColoredFormatter(use_colors=True))
        self.main_logger.addHandler(console_handler)

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = self.log_dir / f"{name}_{datetime.now().strftime('%Y-%m-%d_%H-%M-%S')}.log"
            file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
            file_handler.setFormatter(ColoredFormatter(use_colors=False))
            self.main_logger.addHandler(file_handler)

    def get_class_logger(self, class_name: str, level: int = logging.INFO) -> ClassLogger:
        """
        Get the logger for a component, creating it on first use.

        Args:
            class_name: Name shown in the [class] column
            level: Minimum level for this component

        Returns:
            ClassLogger: The same instance for repeated calls with one name
        """
        if class_name not in self.class_loggers:
            self.class_loggers[class_name] = ClassLogger(self.main_logger, class_name, level)
        return self.class_loggers[class_name]

    def get_main_logger(self, level: int = logging.INFO) -> ClassLogger:
        """Get the application logger (class_name="Main")"""
        return self.get_class_logger("Main", level)

    def cleanup(self) -> None:
        """Flush and close all handlers"""
        for handler in self.main_logger.handlers:
            with suppress(OSError, ValueError):
                handler.flush()
                handler.close()
        self.main_logger.handlers.clear()
