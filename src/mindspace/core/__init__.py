"""Core utilities: logging, exceptions, constants."""

from mindspace.core.exceptions import MindspaceError
from mindspace.core.logging import get_logger, setup_logging

__all__ = [
    "MindspaceError",
    "get_logger",
    "setup_logging",
]
