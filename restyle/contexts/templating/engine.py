"""
Template Merge Engine

Merges an HTML template containing placeholder tokens and repeat-block markers
with a resume record, producing populated, escaped markup.

Processing order (each step works on the output of the previous one):
1. Scalar tokens ({{fullName}}, {{email}}, ...)
2. Experience repeat blocks (exp_* tokens, description list)
3. Education repeat blocks (edu_* tokens)
4. Skill tag list ({{skill_tags}} / {{skills}})
5. Cleanup of unresolved tokens and leftover marker comments

Inserted values are held in a ValueStash and only restored after cleanup, so
text inside a record value is never read as template syntax by a later step.

The engine never raises: missing inputs yield LOADING_PLACEHOLDER, missing
fields yield empty strings or defaults, and unresolved tokens are removed.
"""

import re
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Pattern, Sequence, Tuple, Union

from restyle.contexts.templating.defaults import (
    BADGE_CLASSES,
    DEFAULT_FULL_NAME,
    DEFAULT_PHOTO_SRC,
    DEFAULT_TITLE,
    DESCRIPTION_LIST_CLASS,
    LOADING_PLACEHOLDER,
)
from restyle.contexts.templating.exceptions import InvalidRecordStructureError
from restyle.contexts.templating.logger import (
    _log_debug,
    _log_warning,
    log_block_expansion,
    log_render_summary,
)
from restyle.contexts.templating.marker_patterns import (
    EducationTokens,
    ExperienceTokens,
    MarkerRegex,
    ScalarTokens,
    SkillTokens,
)
from restyle.contexts.templating.resume_record import (
    EducationEntry,
    ExperienceEntry,
    ResumeRecord,
)
from restyle.utils.text_processing import escape_html

RecordLike = Union[ResumeRecord, Mapping[str, Any]]


def render(template: Optional[str], data: Optional[RecordLike]) -> str:
    """
    Merge a template with a resume record.

    Args:
        template: HTML template with tokens and repeat-block markers (may be empty/None)
        data: ResumeRecord, or a mapping in the camelCase wire shape (may be None)

    Returns:
        Populated markup, or LOADING_PLACEHOLDER when either input is missing

    Example:
        >>> template = (
        ...     "<p>{{fullName}}</p><!-- START_EDUCATION_LOOP -->"
        ...     "<span>{{edu_school}}</span><!-- END_EDUCATION_LOOP -->"
        ... )
        >>> render(template, {"fullName": "A&B", "education": [{"school": "X"}, {"school": "Y"}]})
        '<p>A&amp;B</p><span>X</span><span>Y</span>'
    """
    if not template or data is None:
        _log_warning("Missing template or record, returning loading placeholder")
        return LOADING_PLACEHOLDER

    record = _as_record(data)
    stash = ValueStash()

    html = substitute_scalars(template, record, stash)
    html = expand_experience(html, record.experience, stash)
    html = expand_education(html, record.education, stash)
    html = substitute_skill_tags(html, record.skills, stash)
    html, removed = cleanup_leftovers(html)
    html = stash.restore(html)

    log_render_summary(len(template), len(html), removed)
    return html


def _as_record(data: RecordLike) -> ResumeRecord:
    """Coerce input to a ResumeRecord, degrading malformed data to an empty record."""
    if isinstance(data, ResumeRecord):
        return data
    try:
        return ResumeRecord.from_dict(data)
    except InvalidRecordStructureError as e:
        _log_warning(f"Record could not be interpreted, merging with empty record: {e}")
        return ResumeRecord()


class ValueStash:
    """
    Keeps merged values out of the markup until every merge step has run.

    Each step inserts an opaque placeholder instead of the value itself, so
    record text that looks like a token or marker is never seen by later
    steps or by cleanup. restore() swaps the values back in at the end.
    """

    def __init__(self):
        self._values: List[str] = []
        self._nonce = uuid.uuid4().hex
        self._placeholder = re.compile(rf"\x00{self._nonce}:(\d+)\x00")

    def hold(self, value: str) -> str:
        """Store a ready-to-insert value and return its placeholder."""
        self._values.append(value)
        return f"\x00{self._nonce}:{len(self._values) - 1}\x00"

    def restore(self, html: str) -> str:
        return self._placeholder.sub(lambda match: self._values[int(match.group(1))], html)


# Step 1: scalar tokens


def scalar_values(record: ResumeRecord) -> Dict[str, str]:
    """
    Map each scalar token to its escaped replacement value.

    Name and title fall back to fixed labels, the photo to a generic avatar,
    everything else to an empty string.
    """
    tokens = ScalarTokens()
    contact = record.contact
    return {
        tokens.FULL_NAME: escape_html(record.full_name or DEFAULT_FULL_NAME),
        tokens.TITLE: escape_html(record.title or DEFAULT_TITLE),
        tokens.EMAIL: escape_html(contact.email),
        tokens.PHONE: escape_html(contact.phone),
        tokens.LOCATION: escape_html(contact.location),
        tokens.SUMMARY: escape_html(record.summary),
        tokens.LINKEDIN: escape_html(contact.linkedin),
        tokens.WEBSITE: escape_html(contact.website),
        tokens.PHOTO_SRC: escape_html(record.photo_url or DEFAULT_PHOTO_SRC),
    }


def substitute_scalars(html: str, record: ResumeRecord, stash: ValueStash) -> str:
    """Replace every occurrence of each scalar token with its escaped value."""
    for token, value in scalar_values(record).items():
        if token in html:
            html = html.replace(token, stash.hold(value))
    return html


# Steps 2 and 3: repeat blocks


def description_list(lines: Sequence[str]) -> str:
    """
    Build the unordered list replacing {{exp_description}}.

    Returns an empty string when there are no lines.
    """
    if not lines:
        return ""
    items = "".join(f"<li>{escape_html(line)}</li>" for line in lines)
    return f'<ul class="{DESCRIPTION_LIST_CLASS}">{items}</ul>'


def fill_experience(unit: str, entry: ExperienceEntry, stash: ValueStash) -> str:
    """Resolve exp_* tokens in one repeat unit for one experience entry."""
    tokens = ExperienceTokens()
    values = {
        tokens.COMPANY: escape_html(entry.company),
        tokens.ROLE: escape_html(entry.role),
        tokens.DURATION: escape_html(entry.duration),
        tokens.DESCRIPTION: description_list(entry.description),
    }
    return _fill_tokens(unit, values, stash)


def fill_education(unit: str, entry: EducationEntry, stash: ValueStash) -> str:
    """Resolve edu_* tokens in one repeat unit for one education entry."""
    tokens = EducationTokens()
    values = {
        tokens.SCHOOL: escape_html(entry.school),
        tokens.DEGREE: escape_html(entry.degree),
        tokens.YEAR: escape_html(entry.year),
    }
    return _fill_tokens(unit, values, stash)


def _fill_tokens(fragment: str, values: Dict[str, str], stash: ValueStash) -> str:
    for token, value in values.items():
        if token in fragment:
            fragment = fragment.replace(token, stash.hold(value))
    return fragment


def expand_repeat_blocks(
    html: str,
    patterns: Sequence[Pattern],
    entries: Sequence[Any],
    fill: Callable[[str, Any, ValueStash], str],
    fallback_prefix: str,
    kind: str,
    stash: ValueStash,
) -> str:
    """
    Expand every complete marker pair of an entity kind, then apply the bare-token fallback.

    For each accepted spelling, each matched span (markers included) is replaced
    by the repeat unit filled once per entry, joined with no delimiter. An empty
    collection resolves the block to an empty string. A block missing either
    marker is not matched and is left as-is.

    If bare tokens of the kind remain afterwards (template had no markers around
    them) and the collection is not empty, they are filled from the first entry.

    Args:
        html: Template text
        patterns: Compiled block patterns, one per accepted spelling
        entries: Collection items in display order
        fill: Resolves the kind's tokens in a fragment for one entry
        fallback_prefix: Token prefix identifying bare tokens of this kind
        kind: Entity kind name for logging
        stash: Holds inserted values until the merge finishes

    Returns:
        Template text with this kind's blocks expanded
    """
    for pattern in patterns:

        def expand(match) -> str:
            unit = match.group("unit")
            return "".join(fill(unit, entry, stash) for entry in entries)

        html, blocks = pattern.subn(expand, html)
        if blocks:
            log_block_expansion(kind, blocks, len(entries))

    if entries and fallback_prefix in html:
        _log_debug(f"Bare {kind} tokens outside any block, filling from first entry")
        html = fill(html, entries[0], stash)

    return html


def expand_experience(
    html: str, experience: Sequence[ExperienceEntry], stash: ValueStash
) -> str:
    """Expand experience repeat blocks (either marker spelling)."""
    return expand_repeat_blocks(
        html,
        MarkerRegex.EXPERIENCE_BLOCKS,
        experience,
        fill_experience,
        ExperienceTokens.PREFIX,
        "experience",
        stash,
    )


def expand_education(html: str, education: Sequence[EducationEntry], stash: ValueStash) -> str:
    """Expand education repeat blocks (either marker spelling)."""
    return expand_repeat_blocks(
        html,
        MarkerRegex.EDUCATION_BLOCKS,
        education,
        fill_education,
        EducationTokens.PREFIX,
        "education",
        stash,
    )


# Step 4: skill tag list


def skill_badges(skills: Sequence[str], token: str = SkillTokens.SKILL_TAGS) -> str:
    """Build one badge per skill using the styling associated with a tag-list token."""
    css = BADGE_CLASSES[token]
    return "".join(f'<span class="{css}">{escape_html(skill)}</span>' for skill in skills)


def substitute_skill_tags(html: str, skills: Sequence[str], stash: ValueStash) -> str:
    """Replace each tag-list token spelling with its badge markup."""
    for token in BADGE_CLASSES:
        if token in html:
            html = html.replace(token, stash.hold(skill_badges(skills, token)))
    return html


# Step 5: cleanup


def cleanup_leftovers(html: str) -> Tuple[str, int]:
    """
    Remove unresolved {{word}} tokens and leftover well-formed loop marker comments.

    Returns:
        (cleaned html, number of tokens removed)
    """
    html, removed = MarkerRegex.ANY_TOKEN.subn("", html)
    for pattern in MarkerRegex.LEFTOVER_MARKERS:
        html = pattern.sub("", html)
    return html, removed


# Template inspection


@dataclass
class TemplateVocabulary:
    """
    Summary of which parts of the token vocabulary a template uses.

    Attributes:
        scalar_tokens: Known scalar tokens present
        experience_blocks: Complete experience marker pairs found
        education_blocks: Complete education marker pairs found
        skill_tokens: Tag-list token spellings present
        unknown_tokens: {{word}} tokens outside the known vocabulary
    """

    scalar_tokens: List[str] = field(default_factory=list)
    experience_blocks: int = 0
    education_blocks: int = 0
    skill_tokens: List[str] = field(default_factory=list)
    unknown_tokens: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when the template would receive no data at all."""
        return not (
            self.scalar_tokens
            or self.experience_blocks
            or self.education_blocks
            or self.skill_tokens
        )


def inspect_template(template: str) -> TemplateVocabulary:
    """
    Report which tokens and repeat blocks a template contains.

    Lets upstream code reject a template that would render without any data
    merged in, before it reaches the engine.
    """
    template = template or ""
    known = (
        set(vars(ScalarTokens()).values())
        | set(vars(ExperienceTokens()).values())
        | set(vars(EducationTokens()).values())
        | set(vars(SkillTokens()).values())
    )
    found = MarkerRegex.ANY_TOKEN.findall(template)

    return TemplateVocabulary(
        scalar_tokens=[t for t in vars(ScalarTokens()).values() if t in template],
        experience_blocks=sum(len(p.findall(template)) for p in MarkerRegex.EXPERIENCE_BLOCKS),
        education_blocks=sum(len(p.findall(template)) for p in MarkerRegex.EDUCATION_BLOCKS),
        skill_tokens=[t for t in vars(SkillTokens()).values() if t in template],
        unknown_tokens=sorted({t for t in found if t not in known}),
    )
