"""Rank Rules — normalizes free-text rank labels and classifies them into groups and grades.

Invariants:
    - normalize_rank is idempotent: normalize_rank(normalize_rank(x)) == normalize_rank(x)
    - classify_rank never raises; None/empty input → (OTHER, None)
    - Rules are evaluated in list order, first match wins
    - Grade detection (containment) and group detection (prefix) are independent

Design Decisions:
    - Explicit ordered (pattern, classification) tables instead of chained substring checks:
      "letjen" and "jenderal" can both appear in one label, order decides
    - Group detection uses starts-with on the normalized label, matching how rank counts
      are bucketed for statistics
"""

import re
from dataclasses import dataclass

from officer_records.core.domain_types import PatiGrade, RankGroup


_TNI_SUFFIX = re.compile(r"\s+tni\b.*$", re.DOTALL)
_WHITESPACE = re.compile(r"\s+")

GRADE_RULES: tuple[tuple[str, PatiGrade], ...] = (
    ("brigjen", PatiGrade.BRIGJEN),
    ("mayjen", PatiGrade.MAYJEN),
    ("letjen", PatiGrade.LETJEN),
    ("jenderal", PatiGrade.JENDERAL),
)

GROUP_RULES: tuple[tuple[tuple[str, ...], RankGroup], ...] = (
    (("brigjen", "mayjen", "letjen", "jenderal"), RankGroup.PATI),
    (("mayor", "letkol", "kolonel"), RankGroup.PAMEN),
    (("kapten", "lettu", "letda"), RankGroup.PAMA),
)

# Ranks reported individually by the rank statistics, highest first.
KNOWN_RANKS: tuple[str, ...] = (
    "jenderal", "letjen", "mayjen", "brigjen",
    "kolonel", "letkol", "mayor",
    "kapten", "lettu", "letda",
)


@dataclass(frozen=True)
class RankClassification:
    """Result of classify_rank."""
    group: RankGroup
    grade: PatiGrade | None = None


def normalize_rank(rank: str | None) -> str:
    """Lower-case, drop dots, cut the 'TNI ...' suffix, collapse whitespace."""
    if not rank:
        return ""
    value = rank.lower().replace(".", "")
    value = _TNI_SUFFIX.sub("", value)
    return _WHITESPACE.sub(" ", value).strip()


def detect_grade(rank: str | None) -> PatiGrade | None:
    """First PATI grade contained in the normalized rank, if any."""
    normalized = normalize_rank(rank)
    if not normalized:
        return None
    for pattern, grade in GRADE_RULES:
        if pattern in normalized:
            return grade
    return None


def detect_group(rank: str | None) -> RankGroup:
    """Rank group by prefix of the normalized rank."""
    normalized = normalize_rank(rank)
    if not normalized:
        return RankGroup.OTHER
    for prefixes, group in GROUP_RULES:
        if normalized.startswith(prefixes):
            return group
    return RankGroup.OTHER


def classify_rank(rank: str | None) -> RankClassification:
    """Classify a rank label into (group, grade). Never raises."""
    return RankClassification(group=detect_group(rank), grade=detect_grade(rank))


def rank_patterns_for_group(group: RankGroup) -> tuple[str, ...]:
    """Substrings used to filter stored ranks by group. OTHER has none."""
    for prefixes, rule_group in GROUP_RULES:
        if rule_group == group:
            return prefixes
    return ()
