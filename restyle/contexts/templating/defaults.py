"""
Default values for restyle templating.

Provides shared defaults used by:
- engine.py (fallback scalar values, generated list/badge markup)
- layout_limits.py (page sizes)
- intake/record_normalizer.py (placeholder labels for missing fields)
"""

from typing import Dict

# Returned by the engine when either input is missing
LOADING_PLACEHOLDER = '<div class="p-8 text-center text-gray-500">Loading resume preview...</div>'

# Fallback labels substituted when the record leaves these blank
DEFAULT_FULL_NAME = "Your Name"
DEFAULT_TITLE = "Job Title"

# Generic avatar used when the record has no photo reference
DEFAULT_PHOTO_SRC = (
    "https://api.dicebear.com/9.x/notionists/svg?seed=Felix&backgroundColor=e5e7eb"
)

# Wrapper for the generated experience description list
DESCRIPTION_LIST_CLASS = "list-disc pl-5 space-y-1 text-sm text-gray-600"

# Badge styling per tag-list token spelling
BADGE_CLASSES: Dict[str, str] = {
    "{{skill_tags}}": (
        "inline-block bg-indigo-100 text-indigo-700 text-xs font-medium "
        "px-3 py-1 rounded-full mr-2 mb-2"
    ),
    "{{skills}}": (
        "inline-block bg-gray-100 text-gray-700 text-xs font-medium "
        "px-3 py-1 rounded-full mr-2 mb-2"
    ),
}

# Placeholder labels used when normalizing model-extracted records
NORMALIZED_DEFAULTS: Dict[str, str] = {
    "full_name": "Candidate",
    "title": "Job Seeker",
    "email": "contact@example.com",
    "phone": "Contact via HR",
    "location": "TBD",
    "summary": "Experienced professional with a strong industry background.",
    "company": "Company Name",
    "role": "Role Title",
    "duration": "Dates",
    "school": "School Name",
    "degree": "Degree / Major",
    "year": "Year",
}

DEFAULT_SKILLS = ["Skill 1", "Skill 2", "Skill 3"]
