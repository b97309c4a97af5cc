"""Structured logging (timestamp, process, module, etc.) for the trie
tooling.

Library modules only create loggers with `logging.getLogger(__name__)`;
handlers are installed once by the program using them, through
`setup_logging()`.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Union

LOG_FILE_PATH = Path(__file__).parent.parent.parent / "logs/mytrie.log"
_LOG_LEVEL = logging.INFO

LOG_FORMAT = (
    "level=%(levelname)s | time=%(asctime)s | process=%(process)d | "
    "thread=%(thread)d | module=%(module)s | funcName=%(funcName)s | "
    "lineno=%(lineno)d | message=%(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_file_path: Union[Path, str] = LOG_FILE_PATH,
    level: int = _LOG_LEVEL,
) -> logging.Handler:
    """Send all log records to a rotating log file.

    Any handler already attached to the root logger is removed first,
    so calling this twice does not duplicate records.

    Args:
        log_file_path (Union[Path, str]): The file to write records to.
        Its directory is created if needed.
        level (int): The minimum level of the records to keep.

    Returns:
        logging.Handler: The installed file handler.

    """
    log_file_path = Path(log_file_path)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(file_handler)
    return file_handler


def log(
    operation: str,
    key_count: int,
    execution_time_ms: float,
) -> None:
    """Log the details of a timed trie operation using the configured
    logging system.

    Args:
        operation (str): The name of the operation, e.g. "insert".
        key_count (int): The number of keys the operation handled.
        execution_time_ms (float): The execution time in milliseconds.

    """
    # Use standard logging, the handlers will direct it appropriately
    logging.info(
        "Operation: '%s', Keys: %d, Execution Time: %.2f ms",
        operation,
        key_count,
        execution_time_ms,
    )
