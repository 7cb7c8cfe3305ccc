"""
Preset Template Registry

Loads and caches the library of preset HTML templates. Presets are the
alternative to a template produced by the vision step: a user can pick one
directly instead of uploading a style reference.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv
from omegaconf import OmegaConf

from restyle.contexts.templating.exceptions import PresetNotFoundError
from restyle.contexts.templating.layout_limits import (
    PAGE_SIZES,
    LayoutLimits,
    PageSize,
    analyze_layout_limits,
)
from restyle.contexts.templating.logger import _log_debug, _log_info

load_dotenv()
PRESETS_PATH = Path(os.getenv("RESTYLE_PRESETS_PATH", Path(__file__).parent / "presets"))

CATALOGUE_FILENAME = "presets.yaml"
CATEGORIES = ("simple", "professional", "creative", "modern")


@dataclass
class ResumeTemplate:
    """
    A preset template with its catalogue metadata.

    Attributes:
        id: Preset identifier (also the markup file stem)
        name: Display name
        category: One of CATEGORIES
        description: One-line description
        html_template: Template markup using the token vocabulary
        layout_limits: Field limits suited to this layout
        page_size: Physical page size
        tags: Free-form tags
    """

    id: str
    name: str
    category: str
    description: str
    html_template: str
    layout_limits: LayoutLimits = field(default_factory=LayoutLimits)
    page_size: PageSize = field(default_factory=lambda: PAGE_SIZES["A4"])
    tags: List[str] = field(default_factory=list)


class PresetRegistry:
    """
    Registry for loading and caching preset templates.

    Presets are stored as {presets_path}/{id}.html, catalogued in
    {presets_path}/presets.yaml with name, category, description, tags,
    page size and optional layout limit overrides. A preset's layout limits
    are analyze_layout_limits() of its markup with those overrides applied.
    """

    def __init__(self, presets_path: Path = None):
        """
        Initialize the preset registry.

        Args:
            presets_path: Directory holding presets.yaml and the .html files.
                          Defaults to RESTYLE_PRESETS_PATH from environment
        """
        if presets_path is None:
            presets_path = PRESETS_PATH

        self.presets_path = Path(presets_path)
        self._catalogue: Dict[str, Dict[str, Any]] = None
        self._cache: Dict[str, ResumeTemplate] = {}

    @property
    def catalogue(self) -> Dict[str, Dict[str, Any]]:
        """Preset metadata keyed by id, loaded on first access."""
        if self._catalogue is None:
            catalogue_path = self.presets_path / CATALOGUE_FILENAME
            if not catalogue_path.exists():
                raise FileNotFoundError(f"Preset catalogue not found at {catalogue_path}")
            self._catalogue = OmegaConf.to_container(OmegaConf.load(catalogue_path), resolve=True)
            _log_info(f"Loaded preset catalogue ({len(self._catalogue)} presets) from {catalogue_path}")
        return self._catalogue

    def get_preset(self, preset_id: str) -> ResumeTemplate:
        """
        Get a preset by id, loading and caching it if necessary.

        Args:
            preset_id: Preset identifier (e.g., 'minimal-bw')

        Returns:
            ResumeTemplate

        Raises:
            PresetNotFoundError: If the id is not catalogued
            FileNotFoundError: If the catalogued markup file is missing
        """
        if preset_id in self._cache:
            return self._cache[preset_id]

        if preset_id not in self.catalogue:
            raise PresetNotFoundError(
                preset_id, available=list(self.catalogue), presets_path=self.presets_path
            )

        template_path = self.get_preset_path(preset_id)
        if not template_path.exists():
            raise FileNotFoundError(f"Markup for preset '{preset_id}' not found at {template_path}")

        meta = self.catalogue[preset_id]
        markup = template_path.read_text(encoding="utf-8").strip()

        # Limits follow the markup, as for any template; catalogue overrides win
        limits = analyze_layout_limits(markup).with_overrides(meta.get("layout_limits"))

        preset = ResumeTemplate(
            id=preset_id,
            name=meta.get("name", preset_id),
            category=meta.get("category", "simple"),
            description=meta.get("description", ""),
            html_template=markup,
            layout_limits=limits,
            page_size=PAGE_SIZES.get(meta.get("page_size", "A4"), PAGE_SIZES["A4"]),
            tags=list(meta.get("tags") or []),
        )
        _log_debug(f"Loaded preset '{preset_id}' from {template_path}")

        self._cache[preset_id] = preset
        return preset

    def get_preset_path(self, preset_id: str) -> Path:
        """
        Get the file path for a preset's markup.

        Args:
            preset_id: Preset identifier

        Returns:
            Path to {id}.html
        """
        return self.presets_path / f"{preset_id}.html"

    def list_presets(self) -> List[ResumeTemplate]:
        """Return every catalogued preset in catalogue order."""
        return [self.get_preset(preset_id) for preset_id in self.catalogue]

    def list_by_category(self, category: str) -> List[ResumeTemplate]:
        """Return catalogued presets of one category."""
        return [preset for preset in self.list_presets() if preset.category == category]

    def clear_cache(self):
        """Clear the preset cache and force the catalogue to reload."""
        self._cache.clear()
        self._catalogue = None

    def is_cached(self, preset_id: str) -> bool:
        """
        Check if a preset is in the cache.

        Args:
            preset_id: Preset identifier

        Returns:
            True if cached, False otherwise
        """
        return preset_id in self._cache


def default_template(registry: PresetRegistry = None) -> str:
    """Markup of the fallback template used when template extraction fails."""
    return (registry or PresetRegistry()).get_preset("default").html_template
