"""
Template Token and Marker Patterns

Centralized token strings and compiled regex patterns used by the merge engine.
Organized into frozen dataclasses by category for immutability and clear grouping.
"""

import re
from dataclasses import dataclass
from typing import Pattern, Tuple


@dataclass(frozen=True)
class ScalarTokens:
    """
    Top-level scalar tokens, each replaced by one escaped record value.
    """
    FULL_NAME: str = '{{fullName}}'
    TITLE: str = '{{title}}'
    EMAIL: str = '{{email}}'
    PHONE: str = '{{phone}}'
    LOCATION: str = '{{location}}'
    SUMMARY: str = '{{summary}}'
    LINKEDIN: str = '{{linkedin}}'
    WEBSITE: str = '{{website}}'
    PHOTO_SRC: str = '{{photo_src}}'


@dataclass(frozen=True)
class ExperienceTokens:
    """
    Tokens resolved per experience entry inside an experience repeat block.
    """
    COMPANY: str = '{{exp_company}}'
    ROLE: str = '{{exp_role}}'
    DURATION: str = '{{exp_duration}}'
    DESCRIPTION: str = '{{exp_description}}'

    # Any bare token of this family, used by the single-entry fallback
    PREFIX: str = '{{exp_'


@dataclass(frozen=True)
class EducationTokens:
    """
    Tokens resolved per education entry inside an education repeat block.
    """
    SCHOOL: str = '{{edu_school}}'
    DEGREE: str = '{{edu_degree}}'
    YEAR: str = '{{edu_year}}'

    PREFIX: str = '{{edu_'


@dataclass(frozen=True)
class SkillTokens:
    """
    Tag-list tokens. Both spellings behave identically but pick different badge styling.
    """
    SKILL_TAGS: str = '{{skill_tags}}'
    SKILLS: str = '{{skills}}'


def _loop_block(start: str, end: str) -> Pattern:
    """Compile a repeat-block regex capturing the repeat unit between two marker comments."""
    return re.compile(
        rf'<!--\s*{start}\s*-->(?P<unit>[\s\S]*?)<!--\s*{end}\s*-->',
        re.IGNORECASE,
    )


class MarkerRegex:
    """
    Compiled patterns for repeat-block markers and leftover cleanup.

    Each entity kind accepts two marker-pair spellings. Both are part of the
    template vocabulary produced upstream and must stay recognized.
    """

    EXPERIENCE_BLOCKS: Tuple[Pattern, ...] = (
        _loop_block('START_EXPERIENCE_LOOP', 'END_EXPERIENCE_LOOP'),
        _loop_block('EXPERIENCE_LOOP_START', 'EXPERIENCE_LOOP_END'),
    )

    EDUCATION_BLOCKS: Tuple[Pattern, ...] = (
        _loop_block('START_EDUCATION_LOOP', 'END_EDUCATION_LOOP'),
        _loop_block('EDUCATION_LOOP_START', 'EDUCATION_LOOP_END'),
    )

    # Single well-formed marker comments left behind after expansion
    LEFTOVER_MARKERS: Tuple[Pattern, ...] = (
        re.compile(r'<!--\s*(START|END)_(EXPERIENCE|EDUCATION)_LOOP\s*-->', re.IGNORECASE),
        re.compile(r'<!--\s*(EXPERIENCE|EDUCATION)_LOOP_(START|END)\s*-->', re.IGNORECASE),
    )

    # Generic {{word}} token shape
    ANY_TOKEN: Pattern = re.compile(r'{{\w+}}')
