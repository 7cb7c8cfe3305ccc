"""
Record Exporters

Formats a resume record as Markdown, JSON or plain text, and writes export
files. These exporters work from the record directly; only the HTML export
goes through the merge engine.
"""

import json
from pathlib import Path
from typing import Callable, Dict, Optional

from restyle.contexts.rendering.document import build_download_document, export_filename
from restyle.contexts.rendering.logger import _log_debug, log_export_result
from restyle.contexts.templating.engine import render
from restyle.contexts.templating.resume_record import ResumeRecord
from restyle.utils.text_processing import set_max_consecutive_blank_lines

SECTION_RULE = "---"


def to_markdown(record: ResumeRecord) -> str:
    """
    Format a record as a Markdown resume.

    Name is the # header, title and sections are ## headers, and each
    experience or education entry is a ### header.
    """
    contact = record.contact
    parts = [f"# {record.full_name}", "", f"## {record.title}", ""]

    parts.append(f"📧 {contact.email} | 📱 {contact.phone} | 📍 {contact.location}")
    if contact.linkedin:
        parts.append(f"🔗 {contact.linkedin}")
    if contact.website:
        parts.append(f"🌐 {contact.website}")

    parts += ["", SECTION_RULE, "", "## Summary", record.summary, "", SECTION_RULE, ""]

    parts.append("## Experience")
    for entry in record.experience:
        parts += ["", f"### {entry.role} @ {entry.company}", f"*{entry.duration}*", ""]
        parts += [f"- {line}" for line in entry.description]

    parts += ["", SECTION_RULE, "", "## Education"]
    for entry in record.education:
        parts += ["", f"### {entry.school}", f"{entry.degree} | {entry.year}"]

    parts += ["", SECTION_RULE, "", "## Skills", " • ".join(record.skills), ""]

    return set_max_consecutive_blank_lines("\n".join(parts), max_consecutive=1)


def to_json(record: ResumeRecord) -> str:
    """Format a record as indented JSON in the camelCase wire shape."""
    return json.dumps(record.to_dict(), indent=2, ensure_ascii=False)


def to_plaintext(record: ResumeRecord) -> str:
    """Format a record as a plain-text resume."""
    contact = record.contact
    parts = [
        record.full_name,
        record.title,
        "",
        f"Contact: {contact.email} | {contact.phone} | {contact.location}",
        "",
        "Summary:",
        record.summary,
        "",
        "Experience:",
    ]

    for entry in record.experience:
        parts += ["", f"{entry.role} - {entry.company} ({entry.duration})"]
        parts += [f"  • {line}" for line in entry.description]

    parts += ["", "Education:"]
    parts += [f"{entry.school} - {entry.degree} ({entry.year})" for entry in record.education]

    parts += ["", "Skills:", ", ".join(record.skills), ""]

    return "\n".join(parts)


# Format name -> (file extension, formatter taking the record)
EXPORT_FORMATS: Dict[str, tuple] = {
    "markdown": ("md", to_markdown),
    "json": ("json", to_json),
    "text": ("txt", to_plaintext),
    "html": ("html", None),
}


def export_resume(
    record: ResumeRecord,
    export_format: str,
    output_dir: Path,
    template: Optional[str] = None,
) -> Path:
    """
    Write a record export to disk.

    Args:
        record: Record to export
        export_format: One of EXPORT_FORMATS ("html", "markdown", "json", "text")
        output_dir: Directory for the export file (created if missing)
        template: Template markup, required for "html"

    Returns:
        Path to the written file

    Raises:
        ValueError: If the format is unknown, or "html" is requested without a template
    """
    if export_format not in EXPORT_FORMATS:
        raise ValueError(
            f"Unknown export format '{export_format}'. Valid formats: {list(EXPORT_FORMATS)}"
        )

    extension, formatter = EXPORT_FORMATS[export_format]

    if export_format == "html":
        if not template:
            raise ValueError("HTML export requires a template")
        content = build_download_document(render(template, record), record)
    else:
        content = formatter(record)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / export_filename(record.full_name, extension)

    _log_debug(f"Writing {export_format} export to {output_path}")
    output_path.write_text(content, encoding="utf-8")
    log_export_result(export_format, output_path, len(content.encode("utf-8")))

    return output_path
