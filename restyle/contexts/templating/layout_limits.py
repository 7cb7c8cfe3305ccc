"""
Layout Limits

Per-template character and count budgets for record fields. A template's
layout decides how much text fits in each slot; upstream extraction truncates
record fields to these limits before the merge so the rendered page keeps its
shape.
"""

import dataclasses
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from restyle.contexts.templating.logger import _log_debug
from restyle.contexts.templating.marker_patterns import MarkerRegex


@dataclass(frozen=True)
class LayoutLimits:
    """
    Maximum characters per field and maximum entries per collection.

    Defaults suit a single-column A4 template.
    """

    full_name: int = 15
    title: int = 25
    summary: int = 200
    exp_company: int = 20
    exp_role: int = 20
    exp_description: int = 60
    exp_count: int = 3
    skill_name: int = 12
    skill_count: int = 8
    edu_school: int = 25
    edu_degree: int = 20
    edu_count: int = 2

    def with_overrides(self, overrides: Optional[Mapping[str, Any]] = None) -> "LayoutLimits":
        """
        Return a copy with overrides applied on top of these limits.

        Unknown keys are ignored; values are coerced to int.
        """
        if not overrides:
            return self
        names = {f.name for f in dataclasses.fields(self)}
        return dataclasses.replace(
            self, **{key: int(value) for key, value in overrides.items() if key in names}
        )

    def to_dict(self) -> Dict[str, int]:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class PageSize:
    """
    Physical page size in millimetres.

    Attributes:
        width: Width (mm)
        height: Height (mm)
    """

    width: float
    height: float


PAGE_SIZES: Dict[str, PageSize] = {
    "A4": PageSize(width=210, height=297),
    "LETTER": PageSize(width=216, height=279),
    "CUSTOM": PageSize(width=210, height=297),
}

# Markup hints used by analyze_layout_limits
TWO_COLUMN_HINTS = ("grid-cols-2", "w-2/5", "w-3/5")
BADGE_HINTS = ("rounded-full", "badge")
SKILL_SECTION = re.compile(r"skill", re.IGNORECASE)


def _experience_section(template: str) -> Optional[str]:
    """Markup of the first complete experience block, in either marker spelling."""
    for pattern in MarkerRegex.EXPERIENCE_BLOCKS:
        match = pattern.search(template)
        if match:
            return match.group(0)
    return None


def is_two_column(template: str) -> bool:
    """True when the markup suggests a two-column layout."""
    return any(hint in template for hint in TWO_COLUMN_HINTS) or (
        "flex" in template and "w-1/3" in template
    )


def analyze_layout_limits(template: str, base: Optional[LayoutLimits] = None) -> LayoutLimits:
    """
    Infer field limits from a template's markup.

    Heuristics:
    - Two-column layouts shrink summary, description length and skill count.
    - A photo slot leaves less room beside it for name and title.
    - Small fonts inside the experience block allow longer description lines.
    - Badge-style skill lists take shorter, more numerous skills.

    Args:
        template: HTML template markup
        base: Starting limits (defaults to LayoutLimits())

    Returns:
        Adjusted LayoutLimits
    """
    limits = (base or LayoutLimits()).to_dict()
    template = template or ""

    if is_two_column(template):
        limits.update(summary=150, exp_description=50, skill_count=6)

    if "{{photo_src}}" in template or "photo" in template:
        limits.update(full_name=12, title=20)

    experience_section = _experience_section(template)
    if experience_section:
        if "text-xs" in experience_section:
            limits["exp_description"] = 80
        elif "text-sm" in experience_section:
            limits["exp_description"] = 60

    if SKILL_SECTION.search(template) and any(hint in template for hint in BADGE_HINTS):
        limits.update(skill_name=10, skill_count=10)

    _log_debug(f"Analyzed layout limits: {limits}")
    return LayoutLimits(**limits)
