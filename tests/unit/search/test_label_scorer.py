from __future__ import annotations

import unittest

from niftymenu.search.fuzzy import (
    RankedCandidate,
    fuzzy_match_label_index,
    fuzzy_score,
    rank_candidates,
)


class LabelScorerBehaviorTests(unittest.TestCase):
    def test_fuzzy_score_prefers_contiguous_matches_and_rejects_missing(self) -> None:
        contiguous = fuzzy_score("abc", "abc menu")
        gapped = fuzzy_score("abc", "a_x_b_x_c menu")

        self.assertIsNotNone(contiguous)
        self.assertIsNotNone(gapped)
        self.assertGreater(contiguous, gapped)
        self.assertIsNone(fuzzy_score("zzz", "abc"))

    def test_fuzzy_score_rewards_hierarchy_boundaries(self) -> None:
        boundary = fuzzy_score("ts", "Table/Section")
        inner = fuzzy_score("ts", "Tabless/ection")

        self.assertGreater(boundary, inner)

    def test_match_returns_source_indices(self) -> None:
        labels = ["File/New", "Insert/Footnote", "Help/Search"]

        matches = fuzzy_match_label_index("foot", labels, limit=10)

        self.assertEqual(len(matches), 1)
        idx, label, _score = matches[0]
        self.assertEqual(idx, 1)
        self.assertEqual(label, "Insert/Footnote")

    def test_substring_match_turns_off_fuzzy(self) -> None:
        labels = ["B_e_t_a_Helper", "BetaThing", "Other"]

        matches = fuzzy_match_label_index("beta", labels, limit=10)

        self.assertEqual([idx for idx, _label, _score in matches], [1])

    def test_fuzzy_is_used_when_no_substring_matches(self) -> None:
        labels = ["alpha", "other"]

        matches = fuzzy_match_label_index("alh", labels, limit=10)

        self.assertEqual([label for _idx, label, _score in matches], ["alpha"])

    def test_equal_ranks_keep_candidate_order(self) -> None:
        labels = ["Dup", "Other", "Dup"]

        substring = fuzzy_match_label_index("dup", labels, limit=10)
        fuzzy = fuzzy_match_label_index("dp", labels, limit=10)

        self.assertEqual([idx for idx, _label, _score in substring], [0, 2])
        self.assertEqual([idx for idx, _label, _score in fuzzy], [0, 2])

    def test_labels_folded_length_mismatch_raises(self) -> None:
        with self.assertRaises(ValueError):
            fuzzy_match_label_index("a", ["a", "b"], labels_folded=["a"])

    def test_large_candidate_lists_rank_best_first(self) -> None:
        labels = ["xx abc long label here"] + ["y"] * 4998 + ["abc"]

        ranked = rank_candidates("abc", labels)

        self.assertEqual([candidate.index for candidate in ranked], [4999, 0])
        self.assertGreater(ranked[0].rank, ranked[1].rank)

    def test_large_candidate_lists_fall_back_to_subsequence(self) -> None:
        labels = [f"Filler {idx:05d}" for idx in range(6_000)] + ["Insert/Table of Contents/Section"]

        ranked = rank_candidates("toc/section", labels)

        self.assertEqual(ranked[0].index, 6_000)

    def test_limit_caps_results(self) -> None:
        labels = [f"Menu/{idx:05d} alpha" for idx in range(500)]

        matches = fuzzy_match_label_index("alpha", labels, limit=300)

        self.assertEqual(len(matches), 300)
        self.assertEqual(matches[0][1], "Menu/00000 alpha")

    def test_rank_candidates_wraps_matches(self) -> None:
        ranked = rank_candidates("new", ["File", "File/New"])

        self.assertEqual(len(ranked), 1)
        self.assertIsInstance(ranked[0], RankedCandidate)
        self.assertEqual(ranked[0].index, 1)
        self.assertEqual(rank_candidates("", ["File"]), [])
        self.assertEqual(rank_candidates("file", []), [])


if __name__ == "__main__":
    unittest.main()
