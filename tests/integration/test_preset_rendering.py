"""
Integration tests for merging records into the preset template library.
"""

import json
import re

import pytest

from restyle.contexts.intake import normalize_record, parse_model_reply
from restyle.contexts.rendering import build_download_document, build_print_document
from restyle.contexts.templating import PresetRegistry, ResumeRecord, inspect_template, render
from restyle.contexts.templating.defaults import DEFAULT_PHOTO_SRC

PRESET_IDS = ["minimal-bw", "professional-two-col", "creative-colorful", "modern-fresh", "default"]

LEFTOVER_SYNTAX = re.compile(r"{{|}}|<!--\s*(START|END)_|_LOOP_(START|END)\s*-->", re.IGNORECASE)

RECORD = {
    "fullName": "Grace <Hopper>",
    "title": "Rear Admiral & Engineer",
    "contact": {
        "email": "grace@example.com",
        "phone": "555-0199",
        "location": "Arlington, VA",
        "linkedin": "in/grace",
        "website": "grace.dev",
    },
    "summary": "Pioneer of compilers.",
    "experience": [
        {
            "company": "US Navy",
            "role": "Officer",
            "duration": "1943 - 1986",
            "description": ["Led COBOL work", "Popularised 'debugging'"],
        },
        {"company": "Remington Rand", "role": "Engineer", "duration": "1949 - 1967"},
        {"company": "Harvard", "role": "Programmer", "duration": "1944 - 1949"},
    ],
    "education": [
        {"school": "Yale", "degree": "PhD Mathematics", "year": "1934"},
        {"school": "Vassar", "degree": "BA Mathematics", "year": "1928"},
    ],
    "skills": ["COBOL", "Compilers", "Leadership"],
}


@pytest.fixture(scope="module")
def registry():
    return PresetRegistry()


@pytest.mark.integration
@pytest.mark.parametrize("preset_id", PRESET_IDS)
def test_preset_renders_without_leftovers(registry, preset_id):
    """Test every preset merges fully, leaving no tokens or loop markers."""
    html = render(registry.get_preset(preset_id).html_template, RECORD)

    assert not LEFTOVER_SYNTAX.search(html)
    assert "Grace &lt;Hopper&gt;" in html
    assert "Rear Admiral &amp; Engineer" in html
    assert "<Hopper>" not in html


@pytest.mark.integration
@pytest.mark.parametrize("preset_id", PRESET_IDS)
def test_preset_repeats_every_entry(registry, preset_id):
    """Test each experience, education entry and skill appears once per preset."""
    html = render(registry.get_preset(preset_id).html_template, RECORD)

    for company in ("US Navy", "Remington Rand", "Harvard"):
        assert html.count(company) == 1
    for school in ("Yale", "Vassar"):
        assert html.count(school) == 1
    for skill in RECORD["skills"]:
        assert f">{skill}</span>" in html
    assert "<li>Popularised &#039;debugging&#039;</li>" in html


@pytest.mark.integration
@pytest.mark.parametrize("preset_id", PRESET_IDS)
def test_preset_with_empty_record(registry, preset_id):
    """Test presets render an empty record with defaults and no leftovers."""
    html = render(registry.get_preset(preset_id).html_template, {})

    assert not LEFTOVER_SYNTAX.search(html)
    assert "Your Name" in html


@pytest.mark.integration
@pytest.mark.parametrize("preset_id", PRESET_IDS)
def test_presets_use_known_vocabulary(registry, preset_id):
    """Test no preset carries tokens outside the merge vocabulary."""
    vocabulary = inspect_template(registry.get_preset(preset_id).html_template)

    assert vocabulary.unknown_tokens == []
    assert vocabulary.experience_blocks == 1
    assert vocabulary.education_blocks == 1
    assert vocabulary.skill_tokens


@pytest.mark.integration
def test_photo_presets_use_default_avatar(registry):
    """Test presets with a photo slot fall back to the generic avatar."""
    html = render(registry.get_preset("modern-fresh").html_template, RECORD)
    assert DEFAULT_PHOTO_SRC.replace("&", "&amp;") in html


@pytest.mark.integration
def test_minimal_preset_keeps_plain_comments(registry):
    """Test ordinary HTML comments in a preset survive the merge."""
    html = render(registry.get_preset("minimal-bw").html_template, RECORD)
    assert "<!-- Header -->" in html


@pytest.mark.integration
def test_model_reply_to_print_document(registry):
    """Test the full path from model reply to printable document."""
    preset = registry.get_preset("professional-two-col")
    reply = "Here is the data:\n```json\n" + json.dumps(RECORD) + "\n```"

    record = parse_model_reply(reply, preset.layout_limits)
    document = build_print_document(render(preset.html_template, record), record, preset.page_size)

    expected = normalize_record(ResumeRecord.from_dict(RECORD), preset.layout_limits)
    assert record.experience == expected.experience
    assert "window.print()" in document
    assert "Remington Rand" in document
    assert not LEFTOVER_SYNTAX.search(document)


@pytest.mark.integration
def test_download_document_for_preset(registry):
    """Test a preset merge wrapped as a download document."""
    record = ResumeRecord.from_dict(RECORD)
    document = build_download_document(
        render(registry.get_preset("creative-colorful").html_template, record), record
    )

    assert document.startswith("<!DOCTYPE html>")
    assert "<title>Grace &lt;Hopper&gt; Resume</title>" in document
    assert "grace.dev" in document
