"""Logging and debug console setup for CLI"""

import logging

from rich.console import Console

import settings
from utils.debug_console import create_debug_console, setup_debug_logger


def setup_console(debug: bool) -> Console:
    """
    Configure logging and return the console for user-facing output

    With debug enabled every log record and all console output is written
    to settings.DEBUG_LOG_FILE; otherwise warnings and errors go to stderr.

    Args:
        debug: Whether debug mode is enabled

    Returns:
        Console instance (either regular or debug-enabled)
    """
    if not debug:
        level = getattr(logging, str(settings.LOG_LEVEL).upper(), logging.WARNING)
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
        return Console()

    logging.basicConfig(
        filename=settings.DEBUG_LOG_FILE,
        level=logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    debug_logger = setup_debug_logger(settings.DEBUG_LOG_FILE)
    console = create_debug_console(debug_logger=debug_logger)

    debug_logger.debug("[CLI] ===== CLI SESSION STARTED =====")
    debug_logger.debug(f"[CLI] snap version {settings.VERSION}, config file {settings.CONFIG_FILE}")

    return console
