# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Level Validator

Validates that a generated level is playable:
1. Layout integrity (crossings agree, words connect, origin at 0,0)
2. Letter pool sufficiency (every word can be spelled from the pool)
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set, Tuple

from letter_pool import required_letter_counts
from models import Level, Placement


@dataclass
class ValidationResult:
    """Result of level validation."""
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    stats: Dict = field(default_factory=dict)

    def __str__(self):
        status = "VALID" if self.valid else "INVALID"
        lines = [f"Level: {status}"]

        if self.errors:
            lines.append("\nErrors:")
            for e in self.errors:
                lines.append(f"  - {e}")

        if self.warnings:
            lines.append("\nWarnings:")
            for w in self.warnings:
                lines.append(f"  - {w}")

        if self.stats:
            lines.append("\nStats:")
            for k, v in self.stats.items():
                lines.append(f"  {k}: {v}")

        return "\n".join(lines)


class LevelValidator:
    """
    Validates placements and letter pools against the puzzle invariants.
    """

    def validate_layout(
        self,
        placements: Sequence[Placement],
        result: ValidationResult,
    ) -> None:
        """Check letter agreement, uniqueness, connectivity and origin."""
        words = [p.word for p in placements]
        result.stats["words"] = len(words)

        if not placements:
            result.errors.append("Layout has no placements")
            return

        duplicates = sorted(w for w, n in Counter(words).items() if n > 1)
        if duplicates:
            result.errors.append(f"Duplicate words: {', '.join(duplicates)}")

        letters: Dict[Tuple[int, int], str] = {}
        for placement in placements:
            for x, y, letter in placement.cells():
                existing = letters.get((x, y))
                if existing is not None and existing != letter:
                    result.errors.append(
                        f"Letter conflict at ({x}, {y}): '{existing}' vs "
                        f"'{letter}' from {placement.word}"
                    )
                letters[(x, y)] = letter
        result.stats["cells"] = len(letters)

        occupied: Set[Tuple[int, int]] = set(placements[0].coordinates())
        crossings = 0
        for placement in placements[1:]:
            shared = occupied.intersection(placement.coordinates())
            if not shared:
                result.errors.append(
                    f"{placement.word} does not cross any earlier word"
                )
            crossings += len(shared)
            occupied.update(placement.coordinates())
        result.stats["crossings"] = crossings

        min_x = min(p.start_x for p in placements)
        min_y = min(p.start_y for p in placements)
        if (min_x, min_y) != (0, 0):
            result.errors.append(
                f"Layout origin is ({min_x}, {min_y}), expected (0, 0)"
            )

        width = max(x for x, _ in letters) + 1 - min_x
        height = max(y for _, y in letters) + 1 - min_y
        result.stats["size"] = f"{width}x{height}"

    def validate_pool(
        self,
        words: Sequence[str],
        pool: Sequence[str],
        result: ValidationResult,
    ) -> None:
        """Check the pool holds the per-letter maximum each word needs."""
        available = Counter(pool)
        for letter, needed in required_letter_counts(words).items():
            if available[letter] < needed:
                result.errors.append(
                    f"Letter pool has {available[letter]} '{letter}', "
                    f"needs {needed}"
                )

        result.stats["pool_size"] = len(pool)
        result.stats["distractors"] = max(
            0, len(pool) - sum(required_letter_counts(words).values())
        )
        if result.stats["distractors"] == 0:
            result.warnings.append("Letter pool has no distractor letters")

    def validate(self, level: Level) -> ValidationResult:
        """
        Validate a level.

        Args:
            level: Level to check

        Returns:
            ValidationResult with details
        """
        result = ValidationResult(valid=True)

        layout_words = sorted(p.word for p in level.grid_layout)
        if layout_words != sorted(level.solution_words):
            result.errors.append("Layout words do not match solution words")

        self.validate_layout(level.grid_layout, result)
        self.validate_pool(level.solution_words, level.letter_pool, result)

        result.valid = len(result.errors) == 0
        return result


def validate_layout(placements: Sequence[Placement]) -> ValidationResult:
    """
    Convenience function to validate a bare layout.

    Args:
        placements: Placements to check

    Returns:
        ValidationResult
    """
    result = ValidationResult(valid=True)
    LevelValidator().validate_layout(placements, result)
    result.valid = len(result.errors) == 0
    return result


def validate_level(level: Level) -> ValidationResult:
    """Convenience function to validate a level."""
    return LevelValidator().validate(level)
