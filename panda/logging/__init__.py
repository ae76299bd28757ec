# panda/logging/__init__.py
from .logger import configure_logging, get_logger
from .tags import CLI, CONFIG, LEDGER, RENDER, SCAN, VERIFY

__all__ = [
    "get_logger",
    "configure_logging",
    "CLI",
    "CONFIG",
    "SCAN",
    "LEDGER",
    "VERIFY",
    "RENDER",
]
