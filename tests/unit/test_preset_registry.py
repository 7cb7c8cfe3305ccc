"""Unit tests for PresetRegistry class."""

from pathlib import Path

import pytest

from restyle.contexts.templating.exceptions import PresetNotFoundError
from restyle.contexts.templating.layout_limits import (
    PAGE_SIZES,
    LayoutLimits,
    analyze_layout_limits,
)
from restyle.contexts.templating.preset_registry import (
    CATEGORIES,
    PresetRegistry,
    ResumeTemplate,
    default_template,
)

PRESET_IDS = ["minimal-bw", "professional-two-col", "creative-colorful", "modern-fresh", "default"]


@pytest.mark.unit
def test_preset_registry_init():
    """Test PresetRegistry initialization."""
    registry = PresetRegistry()
    assert registry.presets_path.exists()
    assert registry._cache == {}


@pytest.mark.unit
def test_get_preset_minimal_bw():
    """Test loading the minimal-bw preset."""
    registry = PresetRegistry()
    preset = registry.get_preset("minimal-bw")

    assert isinstance(preset, ResumeTemplate)
    assert preset.name == "Minimal Black & White"
    assert preset.category == "simple"
    assert "{{fullName}}" in preset.html_template
    assert preset.page_size == PAGE_SIZES["A4"]


@pytest.mark.unit
def test_preset_caching():
    """Test that presets are cached after first load."""
    registry = PresetRegistry()

    preset1 = registry.get_preset("modern-fresh")
    assert registry.is_cached("modern-fresh")

    preset2 = registry.get_preset("modern-fresh")
    assert preset1 is preset2


@pytest.mark.unit
def test_clear_cache():
    """Test clearing the preset cache."""
    registry = PresetRegistry()
    registry.get_preset("minimal-bw")

    registry.clear_cache()

    assert not registry.is_cached("minimal-bw")
    assert registry._catalogue is None


@pytest.mark.unit
def test_get_preset_not_found():
    """Test error handling for an unknown preset id."""
    registry = PresetRegistry()

    with pytest.raises(PresetNotFoundError) as exc_info:
        registry.get_preset("nonexistent")

    assert exc_info.value.preset_id == "nonexistent"
    assert "minimal-bw" in exc_info.value.available
    assert "nonexistent" in str(exc_info.value)


@pytest.mark.unit
def test_preset_not_found_is_key_error():
    """Test PresetNotFoundError can be caught as KeyError."""
    with pytest.raises(KeyError):
        PresetRegistry().get_preset("nonexistent")


@pytest.mark.unit
def test_get_preset_path():
    """Test getting a preset markup path."""
    path = PresetRegistry().get_preset_path("minimal-bw")

    assert isinstance(path, Path)
    assert path.name == "minimal-bw.html"


@pytest.mark.unit
def test_list_presets():
    """Test listing every catalogued preset in order."""
    presets = PresetRegistry().list_presets()

    assert [preset.id for preset in presets] == PRESET_IDS
    assert all(preset.category in CATEGORIES for preset in presets)


@pytest.mark.unit
def test_list_by_category():
    """Test filtering presets by category."""
    registry = PresetRegistry()

    assert [p.id for p in registry.list_by_category("simple")] == ["minimal-bw", "default"]
    assert registry.list_by_category("unknown") == []


@pytest.mark.unit
def test_preset_limits_follow_markup():
    """Test preset limits match the analysis of the preset markup."""
    registry = PresetRegistry()

    for preset in registry.list_presets():
        assert preset.layout_limits == analyze_layout_limits(preset.html_template)

    assert registry.get_preset("professional-two-col").layout_limits.summary == 150
    assert registry.get_preset("minimal-bw").layout_limits == LayoutLimits()


@pytest.mark.unit
def test_default_template():
    """Test the fallback template markup."""
    markup = default_template()

    assert markup == PresetRegistry().get_preset("default").html_template
    assert "{{fullName}}" in markup


@pytest.mark.unit
def test_custom_presets_path(tmp_path):
    """Test a registry reading from a custom directory."""
    (tmp_path / "presets.yaml").write_text(
        "one:\n  name: One\n  category: modern\n  page_size: LETTER\n  layout_limits:\n    title: 30\n",
        encoding="utf-8",
    )
    (tmp_path / "one.html").write_text("\n<h1>{{fullName}}</h1>\n", encoding="utf-8")

    preset = PresetRegistry(tmp_path).get_preset("one")

    assert preset.html_template == "<h1>{{fullName}}</h1>"
    assert preset.page_size == PAGE_SIZES["LETTER"]
    assert preset.layout_limits.title == 30
    assert preset.tags == []


@pytest.mark.unit
def test_catalogue_overrides_win_over_analysis(tmp_path):
    """Test catalogue layout limits replace the values analysed from markup."""
    (tmp_path / "presets.yaml").write_text(
        "two:\n  name: Two\n  layout_limits:\n    summary: 120\n", encoding="utf-8"
    )
    (tmp_path / "two.html").write_text(
        '<div class="grid grid-cols-2">{{summary}}</div>', encoding="utf-8"
    )

    limits = PresetRegistry(tmp_path).get_preset("two").layout_limits

    assert limits.summary == 120
    assert limits.skill_count == 6


@pytest.mark.unit
def test_missing_markup_file(tmp_path):
    """Test a catalogued preset without markup raises FileNotFoundError."""
    (tmp_path / "presets.yaml").write_text("ghost:\n  name: Ghost\n", encoding="utf-8")

    with pytest.raises(FileNotFoundError):
        PresetRegistry(tmp_path).get_preset("ghost")


@pytest.mark.unit
def test_missing_catalogue(tmp_path):
    """Test a directory without presets.yaml raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        PresetRegistry(tmp_path).list_presets()
