import logging
import sys
import os
from typing import Optional

import colorama
from colorama import Fore, Style

# Environment switches
NO_COLOR_ENV = "NO_COLOR"
LOG_LEVEL_ENV = "ECO_ROUTE_LOG_LEVEL"


class ColoredFormatter(logging.Formatter):
    """
    Console formatter that colours the whole line by level.
    INFO lines are printed bare (wizard output); other levels keep a prefix.
    """
    COLORS = {
        logging.DEBUG: Fore.BLUE,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }

    def __init__(self, use_color: bool = True):
        super().__init__("%(message)s")
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno != logging.INFO:
            message = f"{record.levelname}: {message}"
        if self.use_color:
            color = self.COLORS.get(record.levelno, "")
            message = f"{color}{message}{Style.RESET_ALL}"
        return message


def level_from_env(default: int) -> int:
    """
    Console level from $ECO_ROUTE_LOG_LEVEL (e.g. "DEBUG"); unknown names keep `default`.
    """
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def setup_logging(
    console_level: int = logging.INFO,
    file_path: Optional[str] = None,
    file_level: int = logging.DEBUG,
    no_color: bool = False
) -> logging.Logger:
    """
    Sets up the root logger with:
    - Console handler (coloured by level when attached to a terminal)
    - Optional File handler (plain text, timestamped)
    """
    colorama.init()

    if os.environ.get(NO_COLOR_ENV):
        no_color = True

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers when called twice
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level_from_env(console_level))
    is_tty = sys.stdout.isatty() if hasattr(sys.stdout, "isatty") else False
    console_handler.setFormatter(ColoredFormatter(use_color=is_tty and not no_color))
    logger.addHandler(console_handler)

    if file_path:
        file_handler = logging.FileHandler(file_path, mode='w', encoding='utf-8')
        file_handler.setLevel(file_level)
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )
        logger.addHandler(file_handler)

    return logger
