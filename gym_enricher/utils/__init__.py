"""Shared utilities."""
from .logger import logger, setup_logger

__all__ = ["logger", "setup_logger"]
