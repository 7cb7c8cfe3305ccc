"""Custom exceptions for the templating and intake contexts."""

from pathlib import Path
from typing import List, Optional


class PresetNotFoundError(KeyError):
    """
    Exception raised when a preset template id is not in the catalogue.

    Attributes:
        preset_id: The id that was requested
        available: Ids present in the catalogue
        presets_path: Directory the catalogue was loaded from
    """

    def __init__(
        self,
        preset_id: str,
        available: Optional[List[str]] = None,
        presets_path: Optional[Path] = None,
    ):
        self.preset_id = preset_id
        self.available = available or []
        self.presets_path = presets_path

        parts = [f"Preset '{preset_id}' not found"]
        if presets_path:
            parts.append(f"in {presets_path}")
        if self.available:
            parts.append(f"(available: {', '.join(self.available)})")

        self.message = " ".join(parts)
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class InvalidRecordStructureError(ValueError):
    """
    Exception raised when record data cannot be interpreted as a resume record.

    This is raised for structurally wrong input (e.g., a list where the record
    mapping is expected, or a dotted update path that does not exist). Missing
    or empty fields are never an error.
    """

    pass


class RecordParseError(ValueError):
    """
    Exception raised when a model reply does not contain a parseable JSON record.

    Attributes:
        message: Error description
        reply_snippet: Leading part of the offending reply
        original_error: The underlying JSON decoding error, if any
    """

    def __init__(
        self,
        message: str,
        reply_snippet: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.reply_snippet = reply_snippet
        self.original_error = original_error

        parts = [message]

        if reply_snippet:
            snippet = reply_snippet[:200] + "..." if len(reply_snippet) > 200 else reply_snippet
            parts.append(f"\nReply:\n{snippet}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))
