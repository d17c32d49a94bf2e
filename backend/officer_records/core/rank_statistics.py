"""Rank Statistics — bucket per-rank head counts into groups or known ranks.

Invariants:
    - Input is (raw rank label, count) pairs as returned by a GROUP BY on personnel.pangkat
    - tally_by_group only reports PATI / PAMEN / PAMA; OTHER labels are dropped
    - tally_by_rank always returns every KNOWN_RANKS key, zero-filled
"""

from collections.abc import Iterable

from officer_records.core.domain_types import RankGroup
from officer_records.core.rank_rules import KNOWN_RANKS, detect_group, normalize_rank


def tally_by_group(rank_counts: Iterable[tuple[str | None, int]]) -> dict[str, int]:
    totals = {RankGroup.PATI.value: 0, RankGroup.PAMEN.value: 0, RankGroup.PAMA.value: 0}
    for rank, count in rank_counts:
        group = detect_group(rank)
        if group.value in totals:
            totals[group.value] += count
    return totals


def tally_by_rank(rank_counts: Iterable[tuple[str | None, int]]) -> dict[str, int]:
    """Exact normalized match against the ten known officer ranks."""
    totals = {rank: 0 for rank in KNOWN_RANKS}
    for rank, count in rank_counts:
        normalized = normalize_rank(rank)
        if normalized in totals:
            totals[normalized] += count
    return totals
