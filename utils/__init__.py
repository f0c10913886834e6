"""Shared utilities package for the snap CLI"""

from .storage import ConfigStore
from .debug_console import (
    DebugCapturingConsole,
    create_debug_console,
    setup_debug_logger,
)

__all__ = [
    "ConfigStore",
    "DebugCapturingConsole",
    "create_debug_console",
    "setup_debug_logger",
]
