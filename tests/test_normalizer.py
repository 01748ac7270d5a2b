# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for normalizer module."""

import os
import sys
import unittest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from normalizer import (
    normalize_word, extract_unit_number, extract_unit_title, MIN_WORD_LENGTH
)


class TestNormalizeWord(unittest.TestCase):
    """Tests for normalize_word."""

    def test_article_and_accent(self):
        """Test leading article is stripped and accents folded."""
        self.assertEqual(normalize_word("el ángel"), "ANGEL")
        self.assertEqual(normalize_word("Los Árboles"), "ARBOLES")
        self.assertEqual(normalize_word("la canción"), "CANCION")

    def test_slash_keeps_first_variant(self):
        """Test only the first slash-separated variant is used."""
        self.assertEqual(normalize_word("niño/niña"), "NIÑO")
        self.assertEqual(normalize_word("alto / alta"), "ALTO")

    def test_fold_enye(self):
        """Test optional Ñ folding."""
        self.assertEqual(normalize_word("niño/niña", fold_enye=True), "NINO")
        self.assertEqual(normalize_word("España", fold_enye=True), "ESPANA")

    def test_dieresis(self):
        """Test ü is folded like the acute accents."""
        self.assertEqual(normalize_word("pingüino"), "PINGUINO")

    def test_collocation_rejected(self):
        """Test entries with inner whitespace are rejected."""
        self.assertIsNone(normalize_word("la casa blanca"))
        self.assertIsNone(normalize_word("por favor"))

    def test_punctuation_stripped(self):
        """Test Spanish punctuation is removed."""
        self.assertEqual(normalize_word("¿qué?"), "QUE")
        self.assertEqual(normalize_word("¡hola!"), "HOLA")
        self.assertEqual(normalize_word('"casa"'), "CASA")
        self.assertEqual(normalize_word("e-mail"), "EMAIL")

    def test_short_words_rejected(self):
        """Test words below the minimum length are rejected."""
        self.assertEqual(MIN_WORD_LENGTH, 3)
        self.assertIsNone(normalize_word("sí"))
        self.assertIsNone(normalize_word("el"))
        self.assertEqual(normalize_word("sol"), "SOL")

    def test_non_letters_rejected(self):
        """Test digits and non-Spanish characters are rejected."""
        self.assertIsNone(normalize_word("mp3"))
        self.assertIsNone(normalize_word("garçon"))

    def test_invalid_input(self):
        """Test empty and non-string input."""
        self.assertIsNone(normalize_word(""))
        self.assertIsNone(normalize_word("   "))
        self.assertIsNone(normalize_word(None))
        self.assertIsNone(normalize_word(42))

    def test_idempotent(self):
        """Test normalizing a normalized word returns it unchanged."""
        for raw in ["el ángel", "niño/niña", "¿qué?", "Canción", "pingüino"]:
            word = normalize_word(raw)
            self.assertEqual(normalize_word(word), word)
            folded = normalize_word(raw, fold_enye=True)
            self.assertEqual(normalize_word(folded, fold_enye=True), folded)


class TestUnitLabels(unittest.TestCase):
    """Tests for unit label parsing."""

    def test_aula_one(self):
        """Test Aula 1 units keep their own number."""
        self.assertEqual(extract_unit_number("Aula 1 U3. Dónde está Santiago"), 3)
        self.assertEqual(extract_unit_number("U7"), 7)

    def test_aula_two_mapping(self):
        """Test Aula 2 units continue the global numbering."""
        self.assertEqual(extract_unit_number("Aula 2 U1. Mi barrio"), 10)
        self.assertEqual(extract_unit_number("Aula 2 U2"), 11)
        self.assertEqual(extract_unit_number("Aula 2 U4"), 12)

    def test_plain_digits(self):
        """Test labels that are just numbers."""
        self.assertEqual(extract_unit_number("12"), 12)
        self.assertEqual(extract_unit_number(5), 5)

    def test_no_number(self):
        """Test labels without digits."""
        self.assertIsNone(extract_unit_number("Introducción"))
        self.assertIsNone(extract_unit_number(""))
        self.assertIsNone(extract_unit_number(None))

    def test_title(self):
        """Test unit title extraction."""
        self.assertEqual(
            extract_unit_title("Aula 1 U3. Dónde está Santiago"),
            "Dónde está Santiago"
        )
        self.assertEqual(extract_unit_title("Unidad #La familia"), "La familia")
        self.assertEqual(extract_unit_title("  Repaso  "), "Repaso")
        self.assertEqual(extract_unit_title(None), "")


if __name__ == '__main__':
    unittest.main()
