# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Word combination selection.

Picks which words of a unit's vocabulary go into one puzzle. Words are
grown greedily around a random seed so that every pick shares letters
with the selection, which is what makes a crossing layout possible.
"""

import logging
import random
from collections import Counter
from functools import lru_cache
from itertools import combinations
from typing import Collection, FrozenSet, List, Optional, Sequence, Set


@lru_cache(maxsize=65536)
def shared_letter_count(a: str, b: str) -> int:
    """Size of the multiset intersection of the letters of a and b."""
    return sum((Counter(a) & Counter(b)).values())


def overlap_score(words: Sequence[str]) -> int:
    """Sum of shared-letter counts over all word pairs."""
    return sum(shared_letter_count(a, b) for a, b in combinations(words, 2))


class CombinationSelector:
    """
    Chooses word subsets for puzzles.

    Usage:
        selector = CombinationSelector(rng=random.Random(7))
        words = selector.select(pool, size=3, prefer_high_overlap=True)
    """

    def __init__(
        self,
        max_attempts: int = 30,
        top_candidates: int = 3,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            max_attempts: Seeded growth attempts per select call
            top_candidates: How many of the best ranked candidates a pick
                is drawn from
            rng: Random source
            logger: Logger instance (module logger if not provided)
        """
        self.max_attempts = max_attempts
        self.top_candidates = max(1, top_candidates)
        self.rng = rng or random.Random()
        self.logger = logger if logger else logging.getLogger(__name__)

    def select(
        self,
        pool: Sequence[str],
        size: int,
        prefer_high_overlap: bool = True,
        exclude: Optional[Collection[FrozenSet[str]]] = None,
    ) -> Optional[List[str]]:
        """
        Select a distinct subset of ``size`` words.

        Args:
            pool: Eligible normalized words
            size: Number of words wanted
            prefer_high_overlap: Keep the most (True) or least (False)
                overlapping subset found
            exclude: Word sets that must not be returned again

        Returns:
            Words sorted longest first, or None if no subset could be built
        """
        words = list(dict.fromkeys(pool))
        if size < 1 or len(words) < size:
            return None

        best: Optional[List[str]] = None
        best_score = 0

        for _ in range(self.max_attempts):
            candidate = self._grow(words, size)
            if candidate is None:
                continue
            if exclude and frozenset(candidate) in exclude:
                continue

            score = overlap_score(candidate)
            if best is None:
                better = True
            elif prefer_high_overlap:
                better = score > best_score
            else:
                better = score < best_score

            if better:
                best = candidate
                best_score = score

        if best is None:
            self.logger.debug(
                f"No {size}-word combination with shared letters "
                f"in a pool of {len(words)}"
            )
            return None

        return sorted(best, key=lambda w: (-len(w), w))

    def _grow(self, words: List[str], size: int) -> Optional[List[str]]:
        """Grow one subset from a random seed; None if it gets stuck."""
        selection = [self.rng.choice(words)]
        letters: Set[str] = set(selection[0])

        while len(selection) < size:
            options = [
                w for w in words
                if w not in selection and letters.intersection(w)
            ]
            if not options:
                return None

            ranked = sorted(
                options,
                key=lambda w: (
                    -sum(shared_letter_count(w, s) for s in selection),
                    len(w),
                    self.rng.random(),
                ),
            )
            pick = self.rng.choice(ranked[:self.top_candidates])
            selection.append(pick)
            letters.update(pick)

        return selection
