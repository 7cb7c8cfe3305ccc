"""
Document Shells

Wraps merged resume markup in a complete HTML document, either for the
browser print dialog or for a standalone HTML download. Shells are Jinja2
templates under rendering/shells/; the document title is escaped, the merged
body is inserted verbatim.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from restyle.contexts.rendering.logger import _log_debug
from restyle.contexts.templating.defaults import DEFAULT_FULL_NAME
from restyle.contexts.templating.layout_limits import PAGE_SIZES, PageSize
from restyle.contexts.templating.resume_record import ResumeRecord
from restyle.utils.text_processing import normalize_whitespace

load_dotenv()
SHELLS_PATH = Path(__file__).parent / "shells"
TAILWIND_CDN = os.getenv("RESTYLE_TAILWIND_CDN", "https://cdn.tailwindcss.com")

# Delay before the print dialog opens, so the CDN stylesheet can apply
PRINT_DELAY_MS = 1000

_env = Environment(
    loader=FileSystemLoader(str(SHELLS_PATH)),
    # Catches silent failures
    undefined=StrictUndefined,
    autoescape=True,
)


def _display_name(record: ResumeRecord) -> str:
    return record.full_name or DEFAULT_FULL_NAME


def build_print_document(
    markup: str,
    record: ResumeRecord,
    page_size: PageSize = PAGE_SIZES["A4"],
) -> str:
    """
    Wrap merged markup in a document that opens the print dialog once loaded.

    Args:
        markup: Output of the merge engine
        record: Record the markup was rendered from (used for the title)
        page_size: Page size for the @page rule

    Returns:
        Full HTML document
    """
    template = _env.get_template("print.html.jinja")
    _log_debug(f"Building print document ({page_size.width}x{page_size.height}mm)")
    return template.render(
        title=f"{_display_name(record)} - Resume",
        tailwind_cdn=TAILWIND_CDN,
        page_size=page_size,
        body=markup,
        print_delay_ms=PRINT_DELAY_MS,
    )


def build_download_document(markup: str, record: ResumeRecord) -> str:
    """
    Wrap merged markup in a standalone HTML document for download.

    Args:
        markup: Output of the merge engine
        record: Record the markup was rendered from (used for the title)

    Returns:
        Full HTML document starting with <!DOCTYPE html>
    """
    template = _env.get_template("download.html.jinja")
    return template.render(
        title=f"{_display_name(record)} Resume",
        tailwind_cdn=TAILWIND_CDN,
        body=markup,
    )


def export_filename(full_name: str, extension: str) -> str:
    """
    Build the export file name for a candidate.

    Example:
        >>> export_filename("Ada  King Lovelace", "md")
        'Ada_King_Lovelace_resume.md'
    """
    stem = normalize_whitespace((full_name or DEFAULT_FULL_NAME).strip(), "_")
    stem = stem.replace("/", "_").replace("\\", "_")
    return f"{stem}_resume.{extension}"
