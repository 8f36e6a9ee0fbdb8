"""Logging setup for the deepsum namespace."""

from deepsum.logging.logger import TextFormatter, get_logger, setup_logging

__all__ = ["TextFormatter", "get_logger", "setup_logging"]
