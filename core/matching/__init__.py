#!/usr/bin/env python3
"""
Matching Module - supervisor suggestions for a student project.

Public API:
- rank_supervisors: filter and rank supervisors for a tag set
- score_supervisor: composite score of a single pair
- jaccard_similarity / capacity_score: score components
- encode_tags / decode_tags / normalize_tags: domain tag codec
"""

from core.matching.scorer import (
    CAPACITY_WEIGHT,
    TOPIC_WEIGHT,
    MatchScore,
    RankedSupervisor,
    capacity_score,
    is_eligible,
    jaccard_similarity,
    rank_supervisors,
    score_supervisor,
)
from core.matching.tags import decode_tags, encode_tags, is_utf8_text, normalize_tags

__all__ = [
    'CAPACITY_WEIGHT',
    'TOPIC_WEIGHT',
    'MatchScore',
    'RankedSupervisor',
    'capacity_score',
    'is_eligible',
    'jaccard_similarity',
    'rank_supervisors',
    'score_supervisor',
    'decode_tags',
    'encode_tags',
    'is_utf8_text',
    'normalize_tags',
]
