from __future__ import annotations

import heapq
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass

BOUNDARY_CHARS = "/_- .>"


@dataclass(frozen=True)
class RankedCandidate:
    """One scorer hit: position in the candidate list plus its rank score."""

    index: int
    rank: int


Scorer = Callable[[str, Sequence[str]], list[RankedCandidate]]


def fuzzy_score(query: str, candidate: str) -> int | None:
    if not query:
        return 0
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate_folded[idx - 1] in BOUNDARY_CHARS:
            score += 35
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return score


def fuzzy_match_label_index(
    query: str,
    labels: Sequence[str],
    labels_folded: Sequence[str] | None = None,
    limit: int = 200,
) -> list[tuple[int, str, int]]:
    """Rank ``labels`` against ``query`` as ``(index, label, score)`` tuples.

    Substring hits win over subsequence hits; when any label contains the
    query verbatim only substring hits are returned. Equal ranks keep
    candidate order, so earlier labels win ties.
    """
    if labels_folded is not None and len(labels_folded) != len(labels):
        raise ValueError("labels_folded must have the same length as labels")

    max_results = max(1, limit)
    query_folded = query.casefold()
    if labels_folded is None:
        labels_folded = [label.casefold() for label in labels]

    def iter_substring_matches() -> Iterator[tuple[int, int, int]]:
        for idx, label_folded in enumerate(labels_folded):
            match_idx = label_folded.find(query_folded)
            if match_idx < 0:
                continue
            yield (match_idx, len(labels[idx]), idx)

    substring_scored = heapq.nsmallest(max_results, iter_substring_matches())
    if substring_scored:
        return [
            (idx, labels[idx], 10_000 - (match_idx * 50) - label_len)
            for match_idx, label_len, idx in substring_scored
        ]

    scored: list[tuple[int, int]] = []
    for idx, label in enumerate(labels):
        score = fuzzy_score(query, label)
        if score is None:
            continue
        scored.append((score, idx))
    scored.sort(key=lambda item: (-item[0], item[1]))
    return [(idx, labels[idx], score) for score, idx in scored[:max_results]]


def rank_candidates(query: str, candidates: Sequence[str], limit: int = 200) -> list[RankedCandidate]:
    """Default scorer: best-first ``RankedCandidate`` list, empty when nothing matches."""
    if not query or not candidates:
        return []
    return [
        RankedCandidate(index=idx, rank=score)
        for idx, _label, score in fuzzy_match_label_index(query, candidates, limit=limit)
    ]
