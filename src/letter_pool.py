# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Letter pool construction.

The player spells one word at a time from the pool, so each letter is
needed only as many times as the most demanding word uses it.
"""

import logging
import random
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

ALPHABET = "ABCDEFGHIJKLMNÑOPQRSTUVWXYZ"

logger = logging.getLogger(__name__)


def letter_counts(word: str) -> Counter:
    """Count letters in a single word."""
    return Counter(word)


def required_letter_counts(words: Iterable[str]) -> Dict[str, int]:
    """
    Per-letter maximum count across words (not the sum).

    Args:
        words: Solution words for one level

    Returns:
        Mapping letter -> copies required in the pool
    """
    max_counts: Dict[str, int] = {}
    for word in words:
        for letter, count in letter_counts(word).items():
            if count > max_counts.get(letter, 0):
                max_counts[letter] = count
    return max_counts


def can_spell(word: str, pool: Sequence[str]) -> bool:
    """Check that the pool holds enough copies of every letter in word."""
    available = Counter(pool)
    return all(available[letter] >= count
               for letter, count in letter_counts(word).items())


def build_letter_pool(
    words: Sequence[str],
    distractor_count: int = 1,
    rng: Optional[random.Random] = None,
    alphabet: str = ALPHABET,
    allow_duplicate_distractors: bool = False,
) -> List[str]:
    """
    Build the shuffled letter pool for a level.

    Args:
        words: Solution words
        distractor_count: Extra letters not needed by any word
        rng: Random source (a fresh unseeded one if None)
        alphabet: Letters distractors are drawn from
        allow_duplicate_distractors: Let distractors repeat letters already
            in the pool

    Returns:
        List of single-character letters in random order
    """
    rng = rng or random.Random()

    pool: List[str] = []
    for letter, count in required_letter_counts(words).items():
        pool.extend([letter] * count)

    if allow_duplicate_distractors:
        for _ in range(max(0, distractor_count)):
            pool.append(rng.choice(alphabet))
    else:
        unused = [letter for letter in alphabet if letter not in pool]
        wanted = max(0, distractor_count)
        if wanted > len(unused):
            logger.warning(
                f"Only {len(unused)} unused letters available for "
                f"{wanted} distractors ({''.join(words)})"
            )
            wanted = len(unused)

        added = 0
        while added < wanted:
            letter = rng.choice(alphabet)
            if letter not in pool:
                pool.append(letter)
                added += 1

    rng.shuffle(pool)
    return pool
