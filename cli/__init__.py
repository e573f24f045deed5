"""CLI package for the hosted-login navigation policy

Replays recorded navigation traces and classifies URLs from the terminal.
"""

from cli.main import main

__all__ = [
    "main",
]
