import logging
import os
import sys
import threading
from enum import Enum
from typing import Optional, Union

logging.addLevelName(logging.WARNING, "WARN")

loglevel = os.getenv("DHTACCESS_LOGLEVEL", os.getenv("LOGLEVEL", "INFO"))

_env_colors = os.getenv("DHTACCESS_COLORS")
if _env_colors is not None:
    use_colors = _env_colors.lower() == "true"
else:
    use_colors = sys.stderr.isatty()


class TextStyle:
    """
    ANSI escape codes. Details: https://en.wikipedia.org/wiki/ANSI_escape_code#Colors
    """

    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[31m"
    BLUE = "\033[34m"
    PURPLE = "\033[35m"
    ORANGE = "\033[38;5;208m"  # From 8-bit palette

    if not use_colors:
        # Set the constants above to empty strings
        _codes = locals()
        _codes.update({_name: "" for _name in list(_codes) if _name.isupper()})


class CustomFormatter(logging.Formatter):
    """Prints the caller as module.function:line, relative to the dhtaccess package, and colors the level"""

    _LEVEL_TO_COLOR = {
        logging.DEBUG: TextStyle.PURPLE,
        logging.INFO: TextStyle.BLUE,
        logging.WARNING: TextStyle.ORANGE,
        logging.ERROR: TextStyle.RED,
        logging.CRITICAL: TextStyle.RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        module_path = record.name.split(".")
        if module_path[0] == _PACKAGE_NAME:
            module_path = module_path[1:]
        record.caller = f"{'.'.join(module_path)}.{record.funcName}:{record.lineno}"

        # Aliases for the format argument
        record.levelcolor = self._LEVEL_TO_COLOR.get(record.levelno, "")
        record.bold = TextStyle.BOLD
        record.reset = TextStyle.RESET

        return super().format(record)


_PACKAGE_NAME = __name__.split(".")[0]
LOG_FORMAT = "{asctime}.{msecs:03.0f} [{bold}{levelcolor}{levelname}{reset}] [{bold}{caller}{reset}] {message}"
DATE_FORMAT = "%b %d %H:%M:%S"

_init_lock = threading.RLock()
_default_handler = None


def _initialize_if_necessary():
    global _current_mode, _default_handler

    with _init_lock:
        if _default_handler is not None:
            return

        formatter = CustomFormatter(fmt=LOG_FORMAT, style="{", datefmt=DATE_FORMAT)
        _default_handler = logging.StreamHandler()
        _default_handler.setFormatter(formatter)

        _current_mode = HandlerMode.NOWHERE  # Corresponds to the initial logger state
        use_dhtaccess_log_handler(HandlerMode.IN_DHTACCESS)  # Overriding it to the desired default


def get_logger(name: Optional[str] = None) -> logging.Logger:
    _initialize_if_necessary()
    return logging.getLogger(name)


def _enable_default_handler(name: Optional[str]) -> None:
    logger = get_logger(name)
    logger.addHandler(_default_handler)
    logger.propagate = False
    logger.setLevel(loglevel)


def _disable_default_handler(name: Optional[str]) -> None:
    logger = get_logger(name)
    logger.removeHandler(_default_handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


class HandlerMode(Enum):
    NOWHERE = 0
    IN_DHTACCESS = 1
    IN_ROOT_LOGGER = 2


def use_dhtaccess_log_handler(where: Union[HandlerMode, str]) -> None:
    """
    Choose which loggers get the dhtaccess handler: ``"in_dhtaccess"`` (default, package loggers only),
    ``"in_root_logger"`` (every logger in the process, e.g. for CLI tools and tests) or ``"nowhere"``.
    """
    global _current_mode

    if isinstance(where, str):
        # We allow `where` to be a string, so a developer does not have to import the enum for one usage
        where = HandlerMode[where.upper()]

    _initialize_if_necessary()

    if _current_mode == HandlerMode.IN_DHTACCESS:
        _disable_default_handler(_PACKAGE_NAME)
    elif _current_mode == HandlerMode.IN_ROOT_LOGGER:
        _disable_default_handler(None)

    _current_mode = where

    if _current_mode == HandlerMode.IN_DHTACCESS:
        _enable_default_handler(_PACKAGE_NAME)
    elif _current_mode == HandlerMode.IN_ROOT_LOGGER:
        _enable_default_handler(None)
