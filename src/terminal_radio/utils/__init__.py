"""
Cross-cutting utilities for Terminal Radio.

Contains:
- parsers: Quote-aware command parsing
"""

from .parsers import parse_command, split_args

__all__ = [
    "split_args",
    "parse_command",
]
