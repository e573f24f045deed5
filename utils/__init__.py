"""Shared utilities package for the hosted-login core"""

from .logging_setup import setup_logging

__all__ = [
    "setup_logging",
]
