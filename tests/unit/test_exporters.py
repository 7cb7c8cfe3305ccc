"""Unit tests for document shells and record exporters."""

import json

import pytest

from restyle.contexts.rendering import (
    build_download_document,
    build_print_document,
    export_filename,
    export_resume,
    to_json,
    to_markdown,
    to_plaintext,
)
from restyle.contexts.rendering.document import TAILWIND_CDN
from restyle.contexts.templating.layout_limits import PAGE_SIZES
from restyle.contexts.templating.resume_record import ResumeRecord


@pytest.fixture
def record():
    return ResumeRecord.from_dict(
        {
            "fullName": "Ada Lovelace",
            "title": "Analyst",
            "contact": {"email": "ada@example.com", "phone": "555-0100", "location": "London"},
            "summary": "First programmer.",
            "experience": [
                {
                    "company": "Analytical Engines",
                    "role": "Programmer",
                    "duration": "1842 - 1843",
                    "description": ["Wrote notes", "Computed numbers"],
                }
            ],
            "education": [{"school": "Home", "degree": "Mathematics", "year": "1835"}],
            "skills": ["Mathematics", "Poetry"],
        }
    )


# Document shells


@pytest.mark.unit
def test_download_document(record):
    """Test the download shell wraps the markup verbatim."""
    body = '<div class="p-4">A &amp; B</div>'
    document = build_download_document(body, record)

    assert document.startswith("<!DOCTYPE html>")
    assert "<title>Ada Lovelace Resume</title>" in document
    assert f'<script src="{TAILWIND_CDN}"></script>' in document
    assert f"<body>{body}</body>" in document


@pytest.mark.unit
def test_download_document_escapes_title():
    """Test the document title is escaped while the body is not."""
    record = ResumeRecord(full_name="<Ada>")
    document = build_download_document("<p>x</p>", record)

    assert "<title>&lt;Ada&gt; Resume</title>" in document
    assert "<p>x</p>" in document


@pytest.mark.unit
def test_download_document_default_name():
    """Test an unnamed record falls back to the default name."""
    assert "<title>Your Name Resume</title>" in build_download_document("", ResumeRecord())


@pytest.mark.unit
def test_print_document(record):
    """Test the print shell sets the page size and triggers printing."""
    document = build_print_document("<p>body</p>", record, PAGE_SIZES["LETTER"])

    assert "<title>Ada Lovelace - Resume</title>" in document
    assert "size: 216mm 279mm" in document
    assert "window.print()" in document
    assert "<p>body</p>" in document


@pytest.mark.unit
@pytest.mark.parametrize(
    "name, extension, expected",
    [
        ("Ada Lovelace", "md", "Ada_Lovelace_resume.md"),
        ("Ada  King\tLovelace", "json", "Ada_King_Lovelace_resume.json"),
        ("  Ada  ", "txt", "Ada_resume.txt"),
        ("AC/DC", "html", "AC_DC_resume.html"),
        ("", "md", "Your_Name_resume.md"),
    ],
)
def test_export_filename(name, extension, expected):
    """Test export file naming."""
    assert export_filename(name, extension) == expected


# Exporters


@pytest.mark.unit
def test_to_markdown(record):
    """Test Markdown export structure."""
    markdown = to_markdown(record)

    assert markdown.startswith("# Ada Lovelace\n")
    assert "## Analyst" in markdown
    assert "### Programmer @ Analytical Engines" in markdown
    assert "*1842 - 1843*" in markdown
    assert "- Wrote notes\n- Computed numbers" in markdown
    assert "### Home\nMathematics | 1835" in markdown
    assert "Mathematics • Poetry" in markdown
    assert "\n\n\n" not in markdown


@pytest.mark.unit
def test_to_markdown_optional_contact_lines(record):
    """Test LinkedIn and website lines appear only when present."""
    assert "🔗" not in to_markdown(record)

    with_links = ResumeRecord.from_dict({**record.to_dict(), "contact": {"linkedin": "in/ada"}})
    assert "🔗 in/ada" in to_markdown(with_links)


@pytest.mark.unit
def test_to_json(record):
    """Test JSON export is the indented wire shape."""
    exported = to_json(record)

    assert json.loads(exported) == record.to_dict()
    assert '\n  "fullName": "Ada Lovelace"' in exported


@pytest.mark.unit
def test_to_json_keeps_unicode():
    """Test non-ASCII text is written as-is."""
    assert "Zoë" in to_json(ResumeRecord(full_name="Zoë"))


@pytest.mark.unit
def test_to_plaintext(record):
    """Test plain-text export sections."""
    text = to_plaintext(record)

    assert text.startswith("Ada Lovelace\nAnalyst\n")
    assert "Contact: ada@example.com | 555-0100 | London" in text
    assert "Programmer - Analytical Engines (1842 - 1843)" in text
    assert "  • Wrote notes" in text
    assert "Home - Mathematics (1835)" in text
    assert "Mathematics, Poetry" in text


@pytest.mark.unit
@pytest.mark.parametrize(
    "export_format, filename",
    [
        ("markdown", "Ada_Lovelace_resume.md"),
        ("json", "Ada_Lovelace_resume.json"),
        ("text", "Ada_Lovelace_resume.txt"),
    ],
)
def test_export_resume_record_formats(record, tmp_path, export_format, filename):
    """Test record exports are written with the expected names."""
    output_path = export_resume(record, export_format, tmp_path / "exports")

    assert output_path == tmp_path / "exports" / filename
    assert output_path.read_text(encoding="utf-8").strip()


@pytest.mark.unit
def test_export_resume_html(record, tmp_path):
    """Test HTML export merges the template into a download document."""
    output_path = export_resume(record, "html", tmp_path, template="<h1>{{fullName}}</h1>")

    content = output_path.read_text(encoding="utf-8")
    assert output_path.name == "Ada_Lovelace_resume.html"
    assert content.startswith("<!DOCTYPE html>")
    assert "<body><h1>Ada Lovelace</h1></body>" in content


@pytest.mark.unit
def test_export_resume_html_requires_template(record, tmp_path):
    """Test HTML export without a template is rejected."""
    with pytest.raises(ValueError, match="requires a template"):
        export_resume(record, "html", tmp_path)


@pytest.mark.unit
def test_export_resume_unknown_format(record, tmp_path):
    """Test an unknown export format is rejected."""
    with pytest.raises(ValueError, match="Unknown export format"):
        export_resume(record, "pdf", tmp_path)
