"""
Text processing utilities for escaping, formatting and display.
"""

import re

# Characters escaped before a record value is placed into markup
HTML_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#039;",
    }
)


def escape_html(text) -> str:
    """
    Escape a value for safe insertion into HTML text or attribute positions.

    Escapes the five markup-significant characters in a single pass, so an
    ampersand introduced by one replacement is never escaped again.

    Args:
        text: Value to escape (None and empty values yield "")

    Returns:
        Escaped string

    Example:
        >>> escape_html("<script>&\\"'</script>")
        '&lt;script&gt;&amp;&quot;&#039;&lt;/script&gt;'
        >>> escape_html(None)
        ''
    """
    if not text:
        return ""
    return str(text).translate(HTML_ESCAPE_TABLE)


def normalize_whitespace(text: str, replacement: str = " ") -> str:
    """
    Collapse every run of whitespace into a single replacement string.

    Example:
        >>> normalize_whitespace("Ada   Lovelace", "_")
        'Ada_Lovelace'
    """
    return re.sub(r"\s+", replacement, text)


def set_max_consecutive_blank_lines(content: str, max_consecutive: int = 1) -> str:
    """
    Normalize consecutive blank lines to a maximum number.

    Args:
        content: The text content to normalize
        max_consecutive: Maximum number of consecutive blank lines to allow.
                        Use 0 to remove all blank lines, 1 for standard
                        normalization (default: 1)

    Returns:
        Content with normalized blank lines

    Example:
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=1)
        'text\\n\\nmore'
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=0)
        'text\\nmore'
    """
    if max_consecutive == 0:
        # Match ANY blank lines (1 or more)
        pattern = r"\n\s*\n(\s*\n)*"
    else:
        # Match 2+ consecutive blank lines only
        pattern = r"\n\s*\n(\s*\n)+"

    # max_consecutive=1 means "\n\n", one blank line
    replacement = "\n" * (max_consecutive + 1)

    return re.sub(pattern, replacement, content)
