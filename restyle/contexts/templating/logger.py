"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from restyle.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(log_dir: Path = None, source: str = "preset") -> Path:
    """
    Setup logger for templating context.

    Args:
        log_dir: Directory for this templating session
        source: Where the template came from ("preset" or "file")

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="template",
        log_dir=log_dir,
        extra_provenance={"Template source": source},
    )


# Wrapper functions with automatic [template] prefix


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level templating-specific logging helpers


def log_block_expansion(kind: str, blocks: int, entries: int) -> None:
    """Log how many repeat blocks were expanded and with how many entries."""
    _log_debug(f"Expanded {blocks} {kind} block(s) x {entries} entries")


def log_render_summary(template_length: int, output_length: int, leftover_tokens: int) -> None:
    """Log sizes before and after a merge, plus how many unresolved tokens cleanup removed."""
    _log_debug(
        f"Merged template ({template_length} chars) into {output_length} chars; "
        f"removed {leftover_tokens} unresolved token(s)"
    )
