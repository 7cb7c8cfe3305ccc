"""
Resume Record Data Structures

Defines the structured resume record merged into templates. The record arrives
from upstream extraction in a camelCase JSON shape (the "wire shape"); these
dataclasses give it a typed, snake_case Python form.

Wire shape:
    {
      "fullName": str, "title": str, "photoUrl": str,
      "contact": {"email", "phone", "location", "linkedin", "website"},
      "summary": str,
      "experience": [{"company", "role", "duration", "description": [str]}],
      "education": [{"school", "degree", "year"}],
      "skills": [str]
    }
"""

import dataclasses
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from restyle.contexts.templating.exceptions import InvalidRecordStructureError


def _text(value: Any) -> str:
    """Coerce a scalar field to str; None becomes an empty string."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidRecordStructureError(
            f"Expected a mapping for {where}, got {type(value).__name__}"
        )
    return value


def _sequence(value: Any, where: str) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise InvalidRecordStructureError(
            f"Expected a list for {where}, got {type(value).__name__}"
        )
    return list(value)


def _lines(value: Any) -> List[str]:
    # A single description string is treated as one line
    if isinstance(value, str):
        return [value]
    return [_text(line) for line in _sequence(value, "experience description")]


def _set(instance: Any, name: str, value: Any) -> None:
    object.__setattr__(instance, name, value)


@dataclass(frozen=True)
class ContactInfo:
    """
    Contact sub-fields of a resume record.

    Attributes:
        email: Email address
        phone: Phone number
        location: City/region
        linkedin: LinkedIn handle or URL
        website: Personal website URL
    """

    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    website: str = ""

    def __post_init__(self):
        for f in dataclasses.fields(self):
            _set(self, f.name, _text(getattr(self, f.name)))

    @classmethod
    def from_dict(cls, data: Any) -> "ContactInfo":
        data = _mapping(data, "contact")
        return cls(**{f.name: data.get(f.name) for f in dataclasses.fields(cls)})


@dataclass(frozen=True)
class ExperienceEntry:
    """
    One work experience entry.

    Attributes:
        company: Employer name
        role: Position held
        duration: Free-form date range (e.g., "2021 - Present")
        description: Ordered description lines, one bullet each
    """

    company: str = ""
    role: str = ""
    duration: str = ""
    description: List[str] = field(default_factory=list)

    def __post_init__(self):
        for name in ("company", "role", "duration"):
            _set(self, name, _text(getattr(self, name)))
        _set(self, "description", _lines(self.description))

    @classmethod
    def from_dict(cls, data: Any) -> "ExperienceEntry":
        data = _mapping(data, "experience entry")
        return cls(
            company=data.get("company"),
            role=data.get("role"),
            duration=data.get("duration"),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class EducationEntry:
    """
    One education entry.

    Attributes:
        school: Institution name
        degree: Degree and/or major
        year: Graduation year or range
    """

    school: str = ""
    degree: str = ""
    year: str = ""

    def __post_init__(self):
        for f in dataclasses.fields(self):
            _set(self, f.name, _text(getattr(self, f.name)))

    @classmethod
    def from_dict(cls, data: Any) -> "EducationEntry":
        data = _mapping(data, "education entry")
        return cls(school=data.get("school"), degree=data.get("degree"), year=data.get("year"))


def _entry(value: Any, entry_cls: type) -> Any:
    """Keep entry instances, build entries from mappings."""
    return value if isinstance(value, entry_cls) else entry_cls.from_dict(value)


@dataclass(frozen=True)
class ResumeRecord:
    """
    Structured resume data merged into a template.

    Every field is optional. Missing scalars are empty strings and missing
    collections are empty lists; the merge engine decides what to show for them.
    Fields are coerced on construction, so a record built directly (e.g. with
    contact=None, or an entry given as a mapping) has the same shape as one
    built by from_dict.

    Attributes:
        full_name: Candidate name ("fullName" on the wire)
        title: Headline job title
        contact: Contact sub-fields
        summary: Profile paragraph
        photo_url: Photo reference, URL or data URI ("photoUrl" on the wire)
        experience: Experience entries in display order
        education: Education entries in display order
        skills: Flat list of skill strings

    Raises:
        InvalidRecordStructureError: If a field has the wrong container type
    """

    full_name: str = ""
    title: str = ""
    contact: ContactInfo = field(default_factory=ContactInfo)
    summary: str = ""
    photo_url: str = ""
    experience: List[ExperienceEntry] = field(default_factory=list)
    education: List[EducationEntry] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)

    def __post_init__(self):
        for name in ("full_name", "title", "summary", "photo_url"):
            _set(self, name, _text(getattr(self, name)))
        _set(self, "contact", _entry(self.contact, ContactInfo))
        _set(
            self,
            "experience",
            [_entry(e, ExperienceEntry) for e in _sequence(self.experience, "experience")],
        )
        _set(
            self,
            "education",
            [_entry(e, EducationEntry) for e in _sequence(self.education, "education")],
        )
        _set(self, "skills", [_text(skill) for skill in _sequence(self.skills, "skills")])

    @classmethod
    def from_dict(cls, data: Any) -> "ResumeRecord":
        """
        Build a record from the wire shape, tolerating missing and null fields.

        Args:
            data: Mapping in the camelCase wire shape

        Returns:
            ResumeRecord instance

        Raises:
            InvalidRecordStructureError: If a field has the wrong container type
        """
        data = _mapping(data, "record")
        return cls(
            full_name=data.get("fullName"),
            title=data.get("title"),
            contact=data.get("contact"),
            summary=data.get("summary"),
            photo_url=data.get("photoUrl"),
            experience=data.get("experience"),
            education=data.get("education"),
            skills=data.get("skills"),
        )

    @classmethod
    def load(cls, path: Path) -> "ResumeRecord":
        """
        Load a record from a JSON or YAML file in the wire shape.

        Args:
            path: Path to a .json, .yaml or .yml file

        Returns:
            ResumeRecord instance

        Raises:
            InvalidRecordStructureError: If the file is not valid JSON/YAML or has
                                         the wrong container types
        """
        path = Path(path)
        try:
            if path.suffix.lower() == ".json":
                data = json.loads(path.read_text(encoding="utf-8"))
            else:
                data = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
        except (json.JSONDecodeError, yaml.YAMLError, OmegaConfBaseException) as e:
            raise InvalidRecordStructureError(f"Could not parse {path.name}: {e}") from e
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Return the record in the camelCase wire shape."""
        return {
            "fullName": self.full_name,
            "title": self.title,
            "photoUrl": self.photo_url,
            "contact": dataclasses.asdict(self.contact),
            "summary": self.summary,
            "experience": [dataclasses.asdict(entry) for entry in self.experience],
            "education": [dataclasses.asdict(entry) for entry in self.education],
            "skills": list(self.skills),
        }


def with_field(record: ResumeRecord, path: str, value: Any) -> ResumeRecord:
    """
    Return a copy of a record with one field replaced, addressed by dotted path.

    Path segments are dataclass field names or list indices. Every container on
    the path is rebuilt, so the original record and its lists stay untouched.

    Args:
        record: Record to update
        path: Dotted path, e.g. "summary", "contact.email", "experience.0.role",
              "experience.1.description.0" or "skills.2"
        value: New value for the addressed field

    Returns:
        New ResumeRecord

    Raises:
        InvalidRecordStructureError: If the path does not address an existing field

    Example:
        >>> updated = with_field(record, "contact.email", "ada@example.com")
        >>> record.contact.email == updated.contact.email
        False
    """
    segments = path.split(".")
    if not path or not all(segments):
        raise InvalidRecordStructureError(f"Invalid field path: '{path}'")
    return _replace_at(record, segments, value, path)


def _replace_at(node: Any, segments: List[str], value: Any, path: str) -> Any:
    if not segments:
        return value

    head, rest = segments[0], segments[1:]

    if isinstance(node, list):
        try:
            index = int(head)
            child = node[index]
        except (ValueError, IndexError) as e:
            raise InvalidRecordStructureError(
                f"Field path '{path}' has no list element '{head}'"
            ) from e
        updated = list(node)
        updated[index] = _replace_at(child, rest, value, path)
        return updated

    if dataclasses.is_dataclass(node):
        names = {f.name for f in dataclasses.fields(node)}
        if head not in names:
            raise InvalidRecordStructureError(
                f"Field path '{path}' has no field '{head}' on {type(node).__name__}"
            )
        return dataclasses.replace(
            node, **{head: _replace_at(getattr(node, head), rest, value, path)}
        )

    raise InvalidRecordStructureError(f"Field path '{path}' descends into a scalar at '{head}'")
