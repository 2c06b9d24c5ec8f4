#!/usr/bin/env python3
"""
Supervisor Matching Score

    score = 0.7 * topical_score + 0.3 * capacity_score

- topical_score: Jaccard index of the student's and supervisor's domain tags,
  compared trimmed and case-folded. 0 when either side is empty.
- capacity_score: remaining capacity normalized by max_quota. 0 when the
  supervisor is full or max_quota <= 0.

All three values are rounded to the nearest hundredth on output only, as
``floor(x * 100 + 0.5) / 100`` on the float value: exact halves such as 0.125
go up, while 0.285 (stored as 0.28499...) goes down. The weighted sum uses the
unrounded components.

Every function here is pure and total: malformed tag data is coerced to an
empty list and missing numeric fields are read as 0.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Protocol, runtime_checkable

from core.matching.tags import normalize_tags, tag_key, tag_keys

TOPIC_WEIGHT = 0.70
CAPACITY_WEIGHT = 0.30


@runtime_checkable
class SupervisorProto(Protocol):
    domains: Any
    max_quota: int
    current_load: int


@dataclass
class MatchScore:
    """Composite score of one student/supervisor pair."""
    score: float = 0.0
    topical_score: float = 0.0
    capacity_score: float = 0.0
    common_domains: List[str] = field(default_factory=list)
    remaining_capacity: int = 0


@dataclass
class RankedSupervisor:
    supervisor: Any
    match: MatchScore

    @property
    def score(self) -> float:
        return self.match.score


# ----------------------------
# Helpers
# ----------------------------
def _round2(x: float) -> float:
    # Halves go up, unlike round(); no decimal correction.
    return math.floor(x * 100 + 0.5) / 100


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def _quota(supervisor: Any) -> int:
    return _as_int(getattr(supervisor, "max_quota", 0))


def _load(supervisor: Any) -> int:
    return _as_int(getattr(supervisor, "current_load", 0))


# ----------------------------
# Components
# ----------------------------
def jaccard_similarity(domains_a: Any, domains_b: Any) -> float:
    """|A ∩ B| / |A ∪ B| over case-folded tags; 0.0 if either set is empty."""
    set_a = tag_keys(normalize_tags(domains_a))
    set_b = tag_keys(normalize_tags(domains_b))
    if not set_a or not set_b:
        return 0.0
    return len(set_a & set_b) / len(set_a | set_b)


def capacity_score(supervisor: SupervisorProto) -> float:
    max_quota = _quota(supervisor)
    if max_quota <= 0:
        return 0.0
    remaining = max_quota - _load(supervisor)
    if remaining <= 0:
        return 0.0
    return remaining / max_quota


def common_domains(student_domains: Any, supervisor_domains: Any) -> List[str]:
    """Shared tags, reported with the supervisor's original spelling."""
    wanted = tag_keys(normalize_tags(student_domains))
    return [d for d in normalize_tags(supervisor_domains) if tag_key(d) in wanted]


def is_eligible(supervisor: Any) -> bool:
    """Available and below quota."""
    if not getattr(supervisor, "available", False):
        return False
    return _load(supervisor) < _quota(supervisor)


# ----------------------------
# Public API
# ----------------------------
def score_supervisor(student_domains: Any, supervisor: SupervisorProto) -> MatchScore:
    supervisor_domains = getattr(supervisor, "domains", None)

    topical = jaccard_similarity(student_domains, supervisor_domains)
    capacity = capacity_score(supervisor)
    composite = TOPIC_WEIGHT * topical + CAPACITY_WEIGHT * capacity

    return MatchScore(
        score=_round2(composite),
        topical_score=_round2(topical),
        capacity_score=_round2(capacity),
        common_domains=common_domains(student_domains, supervisor_domains),
        remaining_capacity=_quota(supervisor) - _load(supervisor),
    )


def rank_supervisors(
    student_domains: Any,
    supervisors: Iterable[Any],
    top_k: Optional[int] = None
) -> List[RankedSupervisor]:
    """
    Rank eligible supervisors for a student, best first.

    Unavailable or full supervisors are excluded. ``sorted`` is stable, so
    equal scores keep their input order.
    """
    ranked = [
        RankedSupervisor(supervisor=s, match=score_supervisor(student_domains, s))
        for s in (supervisors or [])
        if is_eligible(s)
    ]
    ranked = sorted(ranked, key=lambda r: r.match.score, reverse=True)

    if top_k is not None and top_k > 0:
        ranked = ranked[:top_k]
    return ranked
