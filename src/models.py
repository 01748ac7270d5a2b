# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Data models for the word connect puzzle generator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Tuple


class Direction(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    def perpendicular(self) -> 'Direction':
        if self == Direction.HORIZONTAL:
            return Direction.VERTICAL
        return Direction.HORIZONTAL


@dataclass(frozen=True)
class Placement:
    """A word laid out on the puzzle grid."""
    word: str
    start_x: int
    start_y: int
    direction: Direction

    def cell_at(self, index: int) -> Tuple[int, int]:
        """Coordinate of the letter at ``index``."""
        if self.direction == Direction.HORIZONTAL:
            return (self.start_x + index, self.start_y)
        return (self.start_x, self.start_y + index)

    def cells(self) -> Iterator[Tuple[int, int, str]]:
        """Yield (x, y, letter) for every cell this placement occupies."""
        for i, letter in enumerate(self.word):
            x, y = self.cell_at(i)
            yield x, y, letter

    def coordinates(self) -> List[Tuple[int, int]]:
        return [self.cell_at(i) for i in range(len(self.word))]

    def shifted(self, dx: int, dy: int) -> 'Placement':
        return Placement(
            word=self.word,
            start_x=self.start_x + dx,
            start_y=self.start_y + dy,
            direction=self.direction,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "start_x": self.start_x,
            "start_y": self.start_y,
            "direction": self.direction.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Placement':
        return cls(
            word=data["word"],
            start_x=int(data["start_x"]),
            start_y=int(data["start_y"]),
            direction=Direction(data["direction"]),
        )


def normalize_origin(placements: List[Placement]) -> List[Placement]:
    """Shift placements so the minimum start_x and start_y are both 0."""
    if not placements:
        return []
    min_x = min(p.start_x for p in placements)
    min_y = min(p.start_y for p in placements)
    return [p.shifted(-min_x, -min_y) for p in placements]


@dataclass(frozen=True)
class Level:
    """One playable puzzle: solution words, crossword layout and letter pool."""
    level_id: str
    solution_words: Tuple[str, ...]
    grid_layout: Tuple[Placement, ...]
    letter_pool: Tuple[str, ...]
    overlap_score: int = 0

    @property
    def word_count(self) -> int:
        return len(self.solution_words)

    @property
    def max_word_length(self) -> int:
        return max((len(w) for w in self.solution_words), default=0)

    @property
    def letter_diversity(self) -> int:
        """Number of distinct letters across the solution words."""
        return len(set("".join(self.solution_words)))

    @property
    def word_set(self) -> frozenset:
        return frozenset(self.solution_words)

    def rank_key(self) -> Tuple[int, int, int, int]:
        """Sort key: easier, denser, shorter, simpler levels first."""
        return (
            self.word_count,
            -self.overlap_score,
            self.max_word_length,
            self.letter_diversity,
        )

    def with_id(self, level_id: str) -> 'Level':
        return Level(
            level_id=level_id,
            solution_words=self.solution_words,
            grid_layout=self.grid_layout,
            letter_pool=self.letter_pool,
            overlap_score=self.overlap_score,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level_id": self.level_id,
            "solution_words": list(self.solution_words),
            "grid_layout": [p.to_dict() for p in self.grid_layout],
            "letter_pool": list(self.letter_pool),
        }


@dataclass
class UnitResult:
    """Levels generated for one glossary unit."""
    unit: str
    levels: List[Level] = field(default_factory=list)
    requested: int = 0
    attempts: int = 0
    skipped: bool = False

    @property
    def shortfall(self) -> int:
        return max(0, self.requested - len(self.levels))

    @property
    def complete(self) -> bool:
        return self.shortfall == 0

    @property
    def key(self) -> str:
        return f"unit_{self.unit}"
