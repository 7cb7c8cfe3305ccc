"""
Shared utilities for restyle.

Common functionality used across contexts:
- Logger setup
- HTML escaping and text helpers
"""

from restyle.utils.text_processing import (
    escape_html,
    normalize_whitespace,
    set_max_consecutive_blank_lines,
)

__all__ = ["escape_html", "normalize_whitespace", "set_max_consecutive_blank_lines"]
