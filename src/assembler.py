# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Level assembly.

Runs selector -> placement engine -> letter pool in a bounded retry loop
to produce a ranked batch of levels for one unit.
"""

import logging
import random
from typing import List, Optional, Sequence, Set, FrozenSet

from letter_pool import build_letter_pool
from models import Level, UnitResult
from placement import CrosswordLayoutEngine
from selector import CombinationSelector, overlap_score
from validator import LevelValidator

EASY_PHASE = 0.5


class LevelAssembler:
    """
    Builds the levels of one unit.

    Word counts grow with progress through the batch, and the selector is
    asked for dense (easy) word sets in the first half and sparse (hard)
    ones after. Placement failures and duplicate word sets are discarded
    and retried until the attempt budget runs out.
    """

    def __init__(
        self,
        engine: CrosswordLayoutEngine,
        selector: CombinationSelector,
        min_words: int = 2,
        max_words: int = 4,
        attempts_per_level: int = 30,
        distractor_letters: int = 1,
        allow_duplicate_distractors: bool = False,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.engine = engine
        self.selector = selector
        self.min_words = min_words
        self.max_words = max_words
        self.attempts_per_level = attempts_per_level
        self.distractor_letters = distractor_letters
        self.allow_duplicate_distractors = allow_duplicate_distractors
        self.rng = rng or random.Random()
        self.logger = logger if logger else logging.getLogger(__name__)
        self.validator = LevelValidator()

        self.stats = {
            "attempts": 0,
            "selection_failures": 0,
            "placement_failures": 0,
            "duplicates": 0,
            "invalid_levels": 0,
        }

    def word_count_for(self, produced: int, requested: int, pool_size: int) -> int:
        """Words per puzzle for the next level, growing with progress."""
        progress = produced / requested if requested else 0.0
        span = self.max_words - self.min_words + 1
        count = self.min_words + int(progress * span)
        count = max(self.min_words, min(count, self.max_words))
        return min(count, pool_size)

    def assemble(
        self,
        unit: str,
        pool: Sequence[str],
        level_count: int,
    ) -> UnitResult:
        """
        Generate up to ``level_count`` levels for a unit.

        Args:
            unit: Unit identifier (used in level ids)
            pool: Eligible normalized words of the unit
            level_count: Number of levels wanted

        Returns:
            UnitResult; fewer levels than requested is reported, not raised
        """
        result = UnitResult(unit=unit, requested=level_count)
        words = [w for w in dict.fromkeys(pool) if len(w) >= 3]

        if len(words) < self.min_words:
            self.logger.warning(
                f"Unit {unit}: skipped, only {len(words)} eligible words"
            )
            result.skipped = True
            return result

        levels: List[Level] = []
        seen: Set[FrozenSet[str]] = set()
        unplaceable: Set[FrozenSet[str]] = set()
        max_attempts = level_count * self.attempts_per_level

        while len(levels) < level_count and result.attempts < max_attempts:
            result.attempts += 1
            self.stats["attempts"] += 1

            size = self.word_count_for(len(levels), level_count, len(words))
            prefer_high = len(levels) / level_count < EASY_PHASE

            selection = self.selector.select(
                words, size, prefer_high_overlap=prefer_high,
                exclude=seen | unplaceable,
            )
            if selection is None:
                self.stats["selection_failures"] += 1
                continue

            key = frozenset(selection)
            if key in seen:
                self.stats["duplicates"] += 1
                continue

            level = self.build_level(selection)
            if level is None:
                unplaceable.add(key)
                continue

            seen.add(key)
            levels.append(level)
            self.logger.debug(
                f"  Level {len(levels)}/{level_count} - "
                f"Words: {', '.join(selection)}"
            )

        levels.sort(key=Level.rank_key)
        result.levels = [
            level.with_id(f"u{unit}_l{i}")
            for i, level in enumerate(levels[:level_count], start=1)
        ]

        if result.shortfall:
            self.logger.warning(
                f"Unit {unit}: only generated {len(result.levels)} of "
                f"{level_count} levels (attempted {result.attempts} times)"
            )
        return result

    def build_level(self, words: Sequence[str], level_id: str = "") -> Optional[Level]:
        """
        Lay out one word set and build its pool.

        Returns:
            Level, or None if the words cannot be placed
        """
        placements = self.engine.layout(words)
        if placements is None:
            self.stats["placement_failures"] += 1
            return None

        pool = build_letter_pool(
            words,
            distractor_count=self.distractor_letters,
            rng=self.rng,
            allow_duplicate_distractors=self.allow_duplicate_distractors,
        )
        level = Level(
            level_id=level_id,
            solution_words=tuple(words),
            grid_layout=tuple(placements),
            letter_pool=tuple(pool),
            overlap_score=overlap_score(words),
        )

        validation = self.validator.validate(level)
        if not validation.valid:
            self.stats["invalid_levels"] += 1
            self.logger.warning(f"Discarding invalid level {list(words)}\n{validation}")
            return None

        return level
