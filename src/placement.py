# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Crossword placement engine.

Lays a handful of words out on an unbounded integer grid so that words
only ever cross at identical letters. Uses depth-first search with
explicit undo over a reference-counted cell map, and scores the complete
arrangements it finds to prefer well spread crossings.
"""

import itertools
import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from models import Direction, Placement, normalize_origin

Coord = Tuple[int, int]

PLACEMENT_WEIGHT = 10
INTERSECTION_WEIGHT = 3


class PlacementMode(Enum):
    GENERAL = "general"
    ANCHOR = "anchor"


@dataclass
class GridCell:
    """A committed letter and the words holding it."""
    letter: str
    words: Counter = field(default_factory=Counter)
    directions: Counter = field(default_factory=Counter)

    @property
    def refcount(self) -> int:
        return sum(self.words.values())


class LayoutGrid:
    """
    Sparse letter grid with undo.

    Every cell keeps a reference count per contributing word so that
    removing the most recent placement restores the previous state exactly.
    """

    def __init__(self):
        self.cells: Dict[Coord, GridCell] = {}

    def letter_at(self, x: int, y: int) -> Optional[str]:
        cell = self.cells.get((x, y))
        return cell.letter if cell else None

    def can_place(self, placement: Placement) -> bool:
        """
        Check a placement against the committed cells.

        A cell may be shared only if it already holds the same letter and
        no word in the same direction runs through it.
        """
        for x, y, letter in placement.cells():
            cell = self.cells.get((x, y))
            if cell is None:
                continue
            if cell.letter != letter:
                return False
            if cell.directions[placement.direction] > 0:
                return False
        return True

    def crossings(self, placement: Placement) -> int:
        """Number of already occupied cells the placement would share."""
        return sum(1 for x, y, _ in placement.cells() if (x, y) in self.cells)

    def place(self, placement: Placement) -> None:
        for x, y, letter in placement.cells():
            cell = self.cells.get((x, y))
            if cell is None:
                cell = GridCell(letter=letter)
                self.cells[(x, y)] = cell
            cell.words[placement.word] += 1
            cell.directions[placement.direction] += 1

    def remove(self, placement: Placement) -> None:
        for x, y, _ in placement.cells():
            cell = self.cells[(x, y)]
            cell.words[placement.word] -= 1
            if cell.words[placement.word] <= 0:
                del cell.words[placement.word]
            cell.directions[placement.direction] -= 1
            if cell.refcount == 0:
                del self.cells[(x, y)]

    def __len__(self) -> int:
        return len(self.cells)


def intersection_cells(placements: Sequence[Placement]) -> List[Coord]:
    """Coordinates claimed by more than one placement."""
    owners = Counter(
        coord for p in placements for coord in p.coordinates()
    )
    return [coord for coord, count in owners.items() if count > 1]


def score_arrangement(placements: Sequence[Placement]) -> int:
    """
    Heuristic quality of a complete arrangement (higher is better).

    Rewards more placed words, more crossings, and crossings that sit far
    from the first word's starting cell.
    """
    if not placements:
        return 0
    first = placements[0]
    crossings = intersection_cells(placements)
    spread = sum(
        abs(x - first.start_x) + abs(y - first.start_y)
        for x, y in crossings
    )
    return (
        PLACEMENT_WEIGHT * len(placements)
        + INTERSECTION_WEIGHT * len(crossings)
        + spread
    )


class CrosswordLayoutEngine:
    """
    Places words so that every crossing agrees on its letter.

    Modes:
        GENERAL: explores word orderings and both orientations of the first
                 word, backtracking over every letter-matching crossing, and
                 keeps the best scored arrangement.
        ANCHOR:  one horizontal base word with every other word hanging
                 vertically from its own base column.

    ``layout`` returns None on failure; it never raises for "no layout".
    """

    def __init__(
        self,
        mode: PlacementMode = PlacementMode.GENERAL,
        max_combinations: int = 120,
        permutation_limit: int = 6,
        max_search_steps: int = 20000,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the engine.

        Args:
            mode: Construction strategy
            max_combinations: Cap on (ordering x first orientation) pairs
            permutation_limit: Above this many words only the
                longest-first ordering is tried
            max_search_steps: Cap on candidate checks per layout call
            rng: Random source for candidate order
            logger: Logger instance (module logger if not provided)
        """
        self.mode = PlacementMode(mode)
        self.max_combinations = max_combinations
        self.permutation_limit = permutation_limit
        self.max_search_steps = max_search_steps
        self.rng = rng or random.Random()
        self.logger = logger if logger else logging.getLogger(__name__)

        self.stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            "combinations_tried": 0,
            "arrangements_found": 0,
            "backtracks": 0,
            "search_steps": 0,
        }

    def layout(self, words: Sequence[str]) -> Optional[List[Placement]]:
        """
        Lay out words on the grid.

        Args:
            words: Distinct uppercase words

        Returns:
            Placements shifted to a (0, 0) origin, or None if no valid
            arrangement exists within the search budget
        """
        self.stats = self._empty_stats()
        words = list(words)

        if not words:
            self.logger.debug("Layout rejected: no words")
            return None
        if len(set(words)) != len(words):
            self.logger.debug(f"Layout rejected: duplicate words in {words}")
            return None
        if len(words) == 1:
            return [Placement(words[0], 0, 0, Direction.HORIZONTAL)]

        if self.mode == PlacementMode.ANCHOR:
            placements = self._layout_anchor(words)
        else:
            placements = self._layout_general(words)

        if placements is None:
            self.logger.debug(
                f"No layout for {words} "
                f"({self.stats['combinations_tried']} combinations, "
                f"{self.stats['search_steps']} steps)"
            )
            return None

        return normalize_origin(placements)

    # General backtracking mode

    def _orderings(self, words: List[str]) -> Iterator[Tuple[str, ...]]:
        ordered = sorted(words, key=len, reverse=True)
        if len(ordered) > self.permutation_limit:
            return iter([tuple(ordered)])
        return itertools.permutations(ordered)

    def _combinations(
        self, words: List[str]
    ) -> Iterator[Tuple[Tuple[str, ...], Direction]]:
        pairs = (
            (ordering, direction)
            for ordering in self._orderings(words)
            for direction in (Direction.HORIZONTAL, Direction.VERTICAL)
        )
        return itertools.islice(pairs, self.max_combinations)

    def _layout_general(self, words: List[str]) -> Optional[List[Placement]]:
        best: Optional[List[Placement]] = None
        best_score = -1

        for ordering, first_direction in self._combinations(words):
            if self.stats["search_steps"] >= self.max_search_steps:
                self.logger.debug("Search step budget exhausted")
                break
            self.stats["combinations_tried"] += 1

            grid = LayoutGrid()
            first = Placement(ordering[0], 0, 0, first_direction)
            grid.place(first)
            placed = [first]

            if self._search(grid, placed, ordering, 1):
                self.stats["arrangements_found"] += 1
                score = score_arrangement(placed)
                if score > best_score:
                    best = list(placed)
                    best_score = score

        return best

    def _search(
        self,
        grid: LayoutGrid,
        placed: List[Placement],
        ordering: Sequence[str],
        index: int,
    ) -> bool:
        """Depth-first placement of ordering[index:]; undoes on failure."""
        if index == len(ordering):
            return True

        word = ordering[index]
        for candidate in self._candidates(word, placed):
            if self.stats["search_steps"] >= self.max_search_steps:
                return False
            self.stats["search_steps"] += 1

            if not grid.can_place(candidate):
                continue

            grid.place(candidate)
            placed.append(candidate)

            if self._search(grid, placed, ordering, index + 1):
                return True

            placed.pop()
            grid.remove(candidate)
            self.stats["backtracks"] += 1

        return False

    def _candidates(
        self, word: str, placed: Sequence[Placement]
    ) -> List[Placement]:
        """Every perpendicular placement crossing a placed word at a shared letter."""
        seen = set()
        candidates: List[Placement] = []

        for anchor in placed:
            direction = anchor.direction.perpendicular()
            for j, anchor_letter in enumerate(anchor.word):
                x, y = anchor.cell_at(j)
                for i, letter in enumerate(word):
                    if letter != anchor_letter:
                        continue
                    if direction == Direction.HORIZONTAL:
                        candidate = Placement(word, x - i, y, direction)
                    else:
                        candidate = Placement(word, x, y - i, direction)
                    if candidate not in seen:
                        seen.add(candidate)
                        candidates.append(candidate)

        self.rng.shuffle(candidates)
        return candidates

    # Anchor mode

    def _layout_anchor(self, words: List[str]) -> Optional[List[Placement]]:
        base = sorted(words, key=len, reverse=True)[0]
        others = [w for w in words if w != base]

        layout = [Placement(base, 0, 0, Direction.HORIZONTAL)]
        used_columns = set()
        self.stats["combinations_tried"] = 1

        for word in others:
            placement = self._anchor_vertical(base, word, used_columns)
            if placement is None:
                return None
            layout.append(placement)
            used_columns.add(placement.start_x)

        self.stats["arrangements_found"] = 1
        return layout

    def _anchor_vertical(
        self, base: str, word: str, used_columns: set
    ) -> Optional[Placement]:
        """Hang word from the base, preferring a crossing at its first letter."""
        for base_idx, letter in enumerate(base):
            self.stats["search_steps"] += 1
            if letter == word[0] and base_idx not in used_columns:
                return Placement(word, base_idx, 0, Direction.VERTICAL)

        for word_idx, letter in enumerate(word):
            for base_idx, base_letter in enumerate(base):
                self.stats["search_steps"] += 1
                if letter == base_letter and base_idx not in used_columns:
                    return Placement(word, base_idx, -word_idx, Direction.VERTICAL)

        return None
