"""
Templating Context

Responsibilities:
- Defines the template token vocabulary and repeat-block markers
- Defines the structured resume record merged into templates
- Merges templates with records into escaped, populated markup
- Manages the preset template library and per-layout field limits

Owns: Template merge engine, record data structure, preset library
Never: Parses uploaded files or calls model endpoints
"""

from restyle.contexts.templating.engine import (
    TemplateVocabulary,
    inspect_template,
    render,
)
from restyle.contexts.templating.layout_limits import (
    PAGE_SIZES,
    LayoutLimits,
    PageSize,
    analyze_layout_limits,
)
from restyle.contexts.templating.preset_registry import (
    PresetRegistry,
    ResumeTemplate,
    default_template,
)
from restyle.contexts.templating.resume_record import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ResumeRecord,
    with_field,
)

__all__ = [
    # Merge engine
    "render",
    "inspect_template",
    "TemplateVocabulary",
    # Record data structure
    "ResumeRecord",
    "ContactInfo",
    "ExperienceEntry",
    "EducationEntry",
    "with_field",
    # Presets and layout
    "PresetRegistry",
    "ResumeTemplate",
    "default_template",
    "LayoutLimits",
    "PageSize",
    "PAGE_SIZES",
    "analyze_layout_limits",
]
