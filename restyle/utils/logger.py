"""
Session logging for restyle commands.

Each CLI session writes a DEBUG-level log file under its own directory
and echoes INFO and above to stderr, so merged markup on stdout stays clean.
Context-specific wrappers live in contexts/{context}/logger.py.
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

load_dotenv()
LOGS_PATH = Path(os.getenv("RESTYLE_LOGS_PATH", "outs/logs"))

# Console colors for levels that need attention
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def setup_logger(context_name: str, log_dir: Path = None, extra_provenance: dict = None) -> Path:
    """
    Point loguru at a session log file for one context and log provenance.

    Args:
        context_name: Context identifier ("template" or "render")
        log_dir: Directory for this logging session (defaults to RESTYLE_LOGS_PATH)
        extra_provenance: Additional key-value pairs for the provenance header

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            context_name="render",
            log_dir=Path("outs/logs/export_20251114_123456"),
            extra_provenance={"Export format": "markdown"}
        )
    """
    log_dir = Path(log_dir) if log_dir is not None else LOGS_PATH
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    log_provenance({"Log file": log_file, **(extra_provenance or {})})

    return log_file


def log_provenance(extra_context: dict = None) -> None:
    """Log the invoking command, working directory and Python version, plus extra_context."""
    logger.info("=" * 80)
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
