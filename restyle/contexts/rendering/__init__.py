"""
Rendering Context

Responsibilities:
- Wraps merged markup in full HTML documents for printing and download
- Exports resume records as Markdown, JSON and plain text
- Writes export files with consistent naming

Owns: Document shells, record exporters, export file naming
Never: Modifies template content or record data
"""

from restyle.contexts.rendering.document import (
    build_download_document,
    build_print_document,
    export_filename,
)
from restyle.contexts.rendering.exporters import (
    EXPORT_FORMATS,
    export_resume,
    to_json,
    to_markdown,
    to_plaintext,
)

__all__ = [
    "build_download_document",
    "build_print_document",
    "export_filename",
    "EXPORT_FORMATS",
    "export_resume",
    "to_json",
    "to_markdown",
    "to_plaintext",
]
