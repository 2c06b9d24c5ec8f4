"""
Tests for the supervisor matching score and ranking.
"""

import unittest
from dataclasses import dataclass, field
from typing import Any, List

from core.matching import (
    capacity_score,
    is_eligible,
    jaccard_similarity,
    rank_supervisors,
    score_supervisor,
)


@dataclass
class FakeSupervisor:
    name: str
    domains: Any = field(default_factory=list)
    max_quota: Any = 10
    current_load: Any = 0
    available: bool = True


class TestJaccardSimilarity(unittest.TestCase):

    def test_symmetric(self):
        a = ["Communication", "Médias", "Politique"]
        b = ["Médias", "Journalisme"]
        self.assertEqual(jaccard_similarity(a, b), jaccard_similarity(b, a))

    def test_identical_sets(self):
        self.assertEqual(jaccard_similarity(["Médias", "Cinéma"], ["Cinéma", "Médias"]), 1.0)

    def test_empty_side_is_zero(self):
        self.assertEqual(jaccard_similarity(["Médias"], []), 0.0)
        self.assertEqual(jaccard_similarity([], ["Médias"]), 0.0)
        self.assertEqual(jaccard_similarity([], []), 0.0)
        self.assertEqual(jaccard_similarity(None, None), 0.0)

    def test_case_and_whitespace_insensitive(self):
        self.assertEqual(jaccard_similarity(["  médias "], ["MÉDIAS"]), 1.0)

    def test_duplicates_count_once(self):
        self.assertAlmostEqual(jaccard_similarity(["Médias", "médias"], ["Médias", "Cinéma"]), 0.5)

    def test_encoded_and_malformed_input(self):
        self.assertEqual(jaccard_similarity('["Médias"]', ["Médias"]), 1.0)
        self.assertEqual(jaccard_similarity("not json", ["Médias"]), 0.0)
        self.assertEqual(jaccard_similarity(42, ["Médias"]), 0.0)


class TestCapacityScore(unittest.TestCase):

    def test_full_supervisor_scores_zero(self):
        self.assertEqual(capacity_score(FakeSupervisor("p", max_quota=10, current_load=10)), 0.0)

    def test_empty_supervisor_scores_one(self):
        self.assertEqual(capacity_score(FakeSupervisor("p", max_quota=10, current_load=0)), 1.0)

    def test_over_quota_is_clamped(self):
        self.assertEqual(capacity_score(FakeSupervisor("p", max_quota=3, current_load=5)), 0.0)

    def test_non_positive_quota(self):
        self.assertEqual(capacity_score(FakeSupervisor("p", max_quota=0, current_load=0)), 0.0)
        self.assertEqual(capacity_score(FakeSupervisor("p", max_quota=-2, current_load=0)), 0.0)

    def test_missing_numbers_read_as_zero(self):
        self.assertEqual(capacity_score(FakeSupervisor("p", max_quota=None, current_load=None)), 0.0)
        self.assertEqual(capacity_score(FakeSupervisor("p", max_quota=4, current_load="x")), 1.0)


class TestScoreSupervisor(unittest.TestCase):

    def test_scenario_partial_overlap_with_free_supervisor(self):
        supervisor = FakeSupervisor("X", domains=["Médias", "Journalisme"], max_quota=2, current_load=0)

        result = score_supervisor(["Communication", "Médias"], supervisor)

        self.assertAlmostEqual(result.topical_score, 0.33)
        self.assertAlmostEqual(result.capacity_score, 1.0)
        self.assertAlmostEqual(result.score, 0.53)
        self.assertEqual(result.common_domains, ["Médias"])
        self.assertEqual(result.remaining_capacity, 2)

    def test_composite_uses_unrounded_components(self):
        # 0.7 * 2/3 + 0.3 * 1/8 = 0.504; the rounded components would give 0.508
        supervisor = FakeSupervisor("p", domains=["A", "B", "C"], max_quota=8, current_load=7)
        result = score_supervisor(["A", "B"], supervisor)
        self.assertAlmostEqual(result.topical_score, 0.67)
        self.assertAlmostEqual(result.capacity_score, 0.13)
        self.assertAlmostEqual(result.score, 0.50)

    def test_exact_halves_round_up(self):
        # 1/8 = 0.125 exactly; banker's rounding would give 0.12
        supervisor = FakeSupervisor("p", domains=[], max_quota=8, current_load=7)
        result = score_supervisor([], supervisor)
        self.assertAlmostEqual(result.capacity_score, 0.13)

    def test_rounding_works_on_the_float_value(self):
        # 57/200 is stored as 0.28499999..., so it rounds down
        supervisor = FakeSupervisor("p", domains=[], max_quota=200, current_load=143)
        result = score_supervisor([], supervisor)
        self.assertEqual(result.capacity_score, 0.28)

    def test_composite_stays_in_unit_interval(self):
        cases = [
            (["A"], FakeSupervisor("p", domains=["A"], max_quota=5, current_load=0)),
            (["A"], FakeSupervisor("p", domains=["B"], max_quota=5, current_load=5)),
            ([], FakeSupervisor("p", domains=[], max_quota=0, current_load=3)),
            (["A", "B"], FakeSupervisor("p", domains=["b", "a"], max_quota=1, current_load=9)),
        ]
        for student_domains, supervisor in cases:
            result = score_supervisor(student_domains, supervisor)
            self.assertGreaterEqual(result.score, 0.0)
            self.assertLessEqual(result.score, 1.0)

    def test_common_domains_keep_supervisor_spelling(self):
        supervisor = FakeSupervisor("p", domains=["Médias", "Cinéma"])
        result = score_supervisor(["médias", "cinéma", "Radio"], supervisor)
        self.assertEqual(result.common_domains, ["Médias", "Cinéma"])


class TestRankSupervisors(unittest.TestCase):

    def test_excludes_unavailable_and_full(self):
        supervisors = [
            FakeSupervisor("open", domains=["Médias"], max_quota=5, current_load=1),
            FakeSupervisor("closed", domains=["Médias"], available=False),
            FakeSupervisor("full", domains=["Médias"], max_quota=3, current_load=3),
        ]

        ranked = rank_supervisors(["Médias"], supervisors)

        self.assertEqual([r.supervisor.name for r in ranked], ["open"])

    def test_sorted_descending(self):
        supervisors = [
            FakeSupervisor("none", domains=["Sport"], max_quota=10, current_load=9),
            FakeSupervisor("best", domains=["Médias"], max_quota=10, current_load=0),
            FakeSupervisor("mid", domains=["Médias", "Cinéma"], max_quota=10, current_load=5),
        ]

        ranked = rank_supervisors(["Médias"], supervisors)

        self.assertEqual([r.supervisor.name for r in ranked], ["best", "mid", "none"])
        scores = [r.score for r in ranked]
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_ties_keep_input_order(self):
        supervisors = [FakeSupervisor(name, domains=["Médias"], max_quota=4, current_load=1)
                       for name in ("first", "second", "third")]

        ranked = rank_supervisors(["Médias"], supervisors)

        self.assertEqual([r.supervisor.name for r in ranked], ["first", "second", "third"])

    def test_top_k(self):
        supervisors = [FakeSupervisor(f"p{i}", domains=["Médias"], max_quota=10, current_load=i)
                       for i in range(5)]

        ranked = rank_supervisors(["Médias"], supervisors, top_k=2)

        self.assertEqual([r.supervisor.name for r in ranked], ["p0", "p1"])

    def test_empty_inputs(self):
        self.assertEqual(rank_supervisors(["Médias"], []), [])
        self.assertEqual(rank_supervisors(["Médias"], None), [])

    def test_student_without_domains_ranks_by_capacity(self):
        supervisors = [
            FakeSupervisor("busy", domains=["Médias"], max_quota=10, current_load=8),
            FakeSupervisor("free", domains=["Médias"], max_quota=10, current_load=0),
        ]

        ranked = rank_supervisors([], supervisors)

        self.assertEqual([r.supervisor.name for r in ranked], ["free", "busy"])
        self.assertEqual(ranked[0].match.topical_score, 0.0)


class TestIsEligible(unittest.TestCase):

    def test_eligibility(self):
        self.assertTrue(is_eligible(FakeSupervisor("p", max_quota=2, current_load=1)))
        self.assertFalse(is_eligible(FakeSupervisor("p", max_quota=2, current_load=2)))
        self.assertFalse(is_eligible(FakeSupervisor("p", max_quota=2, current_load=0, available=False)))


if __name__ == "__main__":
    unittest.main()
