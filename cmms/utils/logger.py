"""
Application logging
One JSON-formatted "cmms" logger per process; modules log through dotted
children of it (e.g. "cmms.business.repository").

Environment:
- CMMS_LOG_LEVEL: level name for the logger and console (default DEBUG)
- CMMS_LOG_DIR: directory for cmms.log and errors.log (default logs/)
"""

import logging
import json
import os
from pathlib import Path
import threading

ROOT_LOGGER_NAME = "cmms"

# Output key -> LogRecord attribute
RECORD_FIELDS = {
    "timestamp": "asctime",
    "level": "levelname",
    "logger": "name",
    "module": "module",
    "function": "funcName",
    "line": "lineno",
    "message": "message",
}


class SingletonLogger:
    """Builds the root "cmms" logger once, however many modules ask for it"""
    _instance = None
    _lock = threading.Lock()
    _logger = None

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(SingletonLogger, cls).__new__(cls)
        return cls._instance

    def get_logger(self, name: str = ROOT_LOGGER_NAME) -> logging.Logger:
        if self._logger is None:
            with self._lock:
                if self._logger is None:
                    self._logger = self._create_logger()
        if name.startswith(ROOT_LOGGER_NAME + "."):
            return logging.getLogger(name)
        return self._logger

    @staticmethod
    def _create_logger() -> logging.Logger:
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        level = getattr(logging, os.environ.get("CMMS_LOG_LEVEL", "DEBUG").upper(), logging.DEBUG)
        logger.setLevel(level)
        logger.handlers.clear()

        formatter = JsonFormatter(RECORD_FIELDS)
        log_dir = Path(os.environ.get("CMMS_LOG_DIR", "logs"))
        log_dir.mkdir(parents=True, exist_ok=True)

        # (handler, minimum level); log files are truncated on each run
        handlers = (
            (logging.FileHandler(log_dir / "cmms.log", mode='w', encoding='utf-8'), logging.INFO),
            (logging.FileHandler(log_dir / "errors.log", mode='w', encoding='utf-8'), logging.ERROR),
            (logging.StreamHandler(), level),
        )
        for handler, handler_level in handlers:
            handler.setLevel(handler_level)
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger


class JsonFormatter(logging.Formatter):
    """
    Render each record as one JSON object.

    Args:
        fields (dict): Output key -> LogRecord attribute name
        time_format (str): strftime format for "asctime"
    """

    def __init__(self, fields: dict = None, time_format: str = "%Y-%m-%dT%H:%M:%S"):
        super().__init__(datefmt=time_format)
        self.fields = fields if fields is not None else {"message": "message"}

    def usesTime(self) -> bool:
        return "asctime" in self.fields.values()

    def format(self, record) -> str:
        record.message = record.getMessage()
        if self.usesTime():
            record.asctime = self.formatTime(record, self.datefmt)

        payload = {key: getattr(record, attribute, None) for key, attribute in self.fields.items()}
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(payload, default=str)


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger attached to the shared "cmms" handlers.

    Args:
        name (str): "cmms" or a dotted child such as "cmms.business.bulk_import";
            any other name returns the root "cmms" logger

    Returns:
        logging.Logger: Logger instance
    """
    return SingletonLogger().get_logger(name)
