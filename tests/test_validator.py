# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for validator module."""

import os
import sys
import unittest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from models import Direction, Level, Placement
from validator import validate_layout, validate_level


H = Direction.HORIZONTAL
V = Direction.VERTICAL


def make_level(placements, pool, words=None):
    return Level(
        level_id="u1_l1",
        solution_words=tuple(words or [p.word for p in placements]),
        grid_layout=tuple(placements),
        letter_pool=tuple(pool),
    )


class TestValidateLayout(unittest.TestCase):
    """Tests for layout validation."""

    def test_valid_layout(self):
        """Test a correct crossing passes."""
        result = validate_layout([
            Placement("CASA", 0, 0, H),
            Placement("SAL", 2, 0, V),
        ])
        self.assertTrue(result.valid, str(result))
        self.assertEqual(result.stats["crossings"], 1)
        self.assertEqual(result.stats["cells"], 6)
        self.assertEqual(result.stats["size"], "4x3")

    def test_letter_conflict(self):
        """Test mismatched letters at a shared cell are errors."""
        result = validate_layout([
            Placement("CASA", 0, 0, H),
            Placement("SOL", 1, 0, V),
        ])
        self.assertFalse(result.valid)
        self.assertTrue(any("conflict" in e.lower() for e in result.errors))

    def test_disconnected_word(self):
        """Test a word that crosses nothing is an error."""
        result = validate_layout([
            Placement("CASA", 0, 0, H),
            Placement("SAL", 0, 2, H),
        ])
        self.assertFalse(result.valid)
        self.assertTrue(any("SAL" in e for e in result.errors))

    def test_origin_not_normalized(self):
        """Test layouts must start at (0, 0)."""
        result = validate_layout([
            Placement("CASA", 1, 1, H),
            Placement("SAL", 3, 1, V),
        ])
        self.assertFalse(result.valid)
        self.assertTrue(any("origin" in e.lower() for e in result.errors))

    def test_duplicate_words(self):
        """Test the same word twice is an error."""
        result = validate_layout([
            Placement("CASA", 0, 0, H),
            Placement("CASA", 0, 0, V),
        ])
        self.assertFalse(result.valid)
        self.assertTrue(any("duplicate" in e.lower() for e in result.errors))

    def test_empty(self):
        """Test an empty layout is invalid."""
        self.assertFalse(validate_layout([]).valid)


class TestValidateLevel(unittest.TestCase):
    """Tests for full level validation."""

    def setUp(self):
        self.placements = [
            Placement("CASA", 0, 0, H),
            Placement("SAL", 2, 0, V),
        ]

    def test_valid_level(self):
        """Test a complete level passes."""
        level = make_level(self.placements, "CASALT")
        result = validate_level(level)

        self.assertTrue(result.valid, str(result))
        self.assertEqual(result.stats["pool_size"], 6)
        self.assertEqual(result.stats["distractors"], 1)

    def test_pool_missing_letter(self):
        """Test a pool short of a repeated letter is an error."""
        level = make_level(self.placements, "CASLT")
        result = validate_level(level)

        self.assertFalse(result.valid)
        self.assertTrue(any("'A'" in e for e in result.errors))

    def test_no_distractor_warning(self):
        """Test a pool without distractors only warns."""
        level = make_level(self.placements, "CASAL")
        result = validate_level(level)

        self.assertTrue(result.valid)
        self.assertTrue(result.warnings)

    def test_words_must_match_layout(self):
        """Test solution words must be the placed words."""
        level = make_level(self.placements, "CASALT", words=["CASA", "SOL"])
        result = validate_level(level)
        self.assertFalse(result.valid)

    def test_str(self):
        """Test the printable report."""
        result = validate_level(make_level(self.placements, "CASAL"))
        text = str(result)
        self.assertIn("VALID", text)
        self.assertIn("Warnings:", text)


if __name__ == '__main__':
    unittest.main()
