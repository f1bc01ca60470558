# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

from typing import Iterable

from rapidfuzz import process
from rapidfuzz.distance import DamerauLevenshtein


SUGGESTION_THRESHOLD = 2
SUGGESTION_LIMIT = 2


def _fold(text: str) -> str:
    return text.upper()


def suggest(
    name: str,
    vocabulary: Iterable[str],
    *,
    limit: int = SUGGESTION_LIMIT,
    threshold: int = SUGGESTION_THRESHOLD,
) -> list[str]:
    """Closest vocabulary entries to ``name`` by Damerau-Levenshtein distance.

    Comparison is case-insensitive; only candidates within ``threshold`` edits
    are returned, closest first and at most ``limit`` of them.
    """
    if not name or limit <= 0:
        return []
    choices = list(vocabulary)
    if not choices:
        return []
    matches = process.extract(
        name,
        choices,
        scorer=DamerauLevenshtein.distance,
        processor=_fold,
        score_cutoff=threshold,
        limit=limit,
    )
    return [choice for choice, _distance, _index in matches]
