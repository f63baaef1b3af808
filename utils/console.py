"""Console and logging setup for the tart CLI.

In debug mode every Rich console line is mirrored, without markup, into the
debug log file alongside the regular log records.
"""

import logging
import os
from typing import Optional
from rich.console import Console as RichConsole
from rich.text import Text

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DebugCapturingConsole(RichConsole):
    """Rich Console that also writes the plain text of each print to a logger"""

    def __init__(self, debug_logger: logging.Logger, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.debug_logger = debug_logger

    def print(self, *objects, **kwargs):
        super().print(*objects, **kwargs)

        if self.debug_logger.isEnabledFor(logging.DEBUG):
            plain_text = " ".join(
                Text.from_markup(obj).plain if isinstance(obj, str) else str(obj)
                for obj in objects
            ).rstrip()
            if plain_text:
                self.debug_logger.debug(f"[CONSOLE] {plain_text}")


def setup_logging(level: str = "info", debug_log_file: Optional[str] = None) -> Optional[logging.Logger]:
    """
    Configure the root logger for a CLI run.

    Args:
        level: Log level name for the console handler
        debug_log_file: When given, also append DEBUG records to this file

    Returns:
        The console capture logger in debug mode, otherwise None
    """
    root_logger = logging.getLogger()

    # Clear existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if debug_log_file else getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    root_logger.setLevel(console_handler.level)

    if not debug_log_file:
        return None

    log_file = os.path.abspath(debug_log_file)
    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    console_logger = logging.getLogger("tart.console")
    console_logger.setLevel(logging.DEBUG)
    # Root handlers would echo captured console lines back to the terminal
    console_logger.propagate = False
    console_logger.handlers = [file_handler]

    logging.getLogger(__name__).info(f"Debug logging enabled - appending to {log_file}")
    return console_logger


def create_console(debug_logger: Optional[logging.Logger] = None) -> RichConsole:
    """Return a capturing console when a debug logger is given, a plain one otherwise"""
    if debug_logger:
        return DebugCapturingConsole(debug_logger=debug_logger)
    return RichConsole()
