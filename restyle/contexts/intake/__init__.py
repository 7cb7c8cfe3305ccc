"""
Intake Context

Responsibilities:
- Parses structured records out of model replies
- Truncates record fields to a template's layout limits
- Fills required fields with placeholder labels

Owns: Record validation before merge
Never: Renders markup or chooses templates
"""

from restyle.contexts.intake.record_normalizer import (
    extract_json_object,
    normalize_record,
    parse_model_reply,
    truncate,
)

__all__ = ["extract_json_object", "normalize_record", "parse_model_reply", "truncate"]
