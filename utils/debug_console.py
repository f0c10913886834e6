"""Rich console that mirrors its output into the debug log.

With --debug, everything the CLI shows the user is also written as plain
text to the debug log file, interleaved with the log records of the
login flow, so a single file tells the whole story of a failed login.
"""

import logging
from typing import Optional

from rich.console import Console

CONSOLE_LOGGER = "snap.console"


class DebugCapturingConsole(Console):
    """Console that records what it prints and forwards it to a logger.

    Output is recorded by rich itself (record=True) and exported as plain
    text after every print, so markup and ANSI styling never reach the log.
    """

    def __init__(self, debug_logger: logging.Logger, **kwargs):
        kwargs["record"] = True
        super().__init__(**kwargs)
        self.debug_logger = debug_logger

    def print(self, *objects, **kwargs):
        super().print(*objects, **kwargs)
        self._forward_recording()

    def _forward_recording(self):
        text = self.export_text(clear=True)
        if not self.debug_logger.isEnabledFor(logging.DEBUG):
            return
        for line in text.rstrip().splitlines():
            self.debug_logger.debug(f"[CONSOLE] {line}")


def create_debug_console(debug_logger: Optional[logging.Logger] = None, **kwargs) -> Console:
    """Return a capturing console when a debug logger is given, else a plain one"""
    if debug_logger is not None:
        return DebugCapturingConsole(debug_logger, **kwargs)
    return Console(**kwargs)


def setup_debug_logger(log_file: str = "snap_debug.log") -> logging.Logger:
    """
    Set up the logger that receives mirrored console output.

    Args:
        log_file: Path to the debug log file

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(CONSOLE_LOGGER)
    logger.setLevel(logging.DEBUG)

    # Re-running setup must not duplicate lines
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
    logger.addHandler(file_handler)

    # The root logger may write to the same file
    logger.propagate = False

    return logger
