# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Word normalization for glossary lemmas.

Turns raw Spanish dictionary entries ("el ángel", "niño/niña",
"¿qué?") into canonical uppercase puzzle words, or rejects them.
Also parses the textbook unit labels attached to each entry.
"""

import re
from typing import Optional

MIN_WORD_LENGTH = 3

ARTICLE_RE = re.compile(r"^(el|la|los|las)\s+", re.IGNORECASE)
WHITESPACE_RE = re.compile(r"\s")
PUNCTUATION_RE = re.compile(r"[\"'().,;:!?¡¿\-]")
WORD_RE = re.compile(r"^[A-ZÑ]+$")

DIACRITIC_FOLDS = str.maketrans({
    "á": "a", "ä": "a", "â": "a", "à": "a",
    "é": "e", "ë": "e", "ê": "e", "è": "e",
    "í": "i", "ï": "i", "î": "i", "ì": "i",
    "ó": "o", "ö": "o", "ô": "o", "ò": "o",
    "ú": "u", "ü": "u", "û": "u", "ù": "u",
})

# Aula 2 units continue the global numbering after Aula 1 (U0-U9)
AULA_UNIT_TO_UNIT_NUMBER = {
    "2-1": 10,
    "2-2": 11,
    "2-4": 12,
}

AULA_RE = re.compile(r"Aula\s*(\d+)", re.IGNORECASE)
UNIDAD_RE = re.compile(r"U\s*(\d+)", re.IGNORECASE)
DIGITS_RE = re.compile(r"\d+")


def normalize_word(raw: object, fold_enye: bool = False) -> Optional[str]:
    """
    Normalize a raw lemma into a canonical puzzle word.

    Args:
        raw: Raw lexical entry (anything that is not a string is rejected)
        fold_enye: Also fold Ñ to N (off by default, Ñ is its own letter)

    Returns:
        Uppercase word over A-Z plus Ñ, or None if the entry is rejected
    """
    if not isinstance(raw, str):
        return None

    word = raw.strip()
    if not word:
        return None

    word = ARTICLE_RE.sub("", word, count=1)
    word = word.split("/")[0].strip()
    if not word or WHITESPACE_RE.search(word):
        return None

    word = PUNCTUATION_RE.sub("", word)
    if not word:
        return None

    word = word.lower().translate(DIACRITIC_FOLDS)
    if fold_enye:
        word = word.replace("ñ", "n")
    word = word.upper()

    if not WORD_RE.match(word):
        return None
    if len(word) < MIN_WORD_LENGTH:
        return None

    return word


def extract_unit_number(raw_unit: object) -> Optional[int]:
    """
    Parse a textbook location label into a global unit number.

    Handles labels like "Aula 1 U3. Dónde está Santiago", "U7" and "12".

    Returns:
        Unit number, or None if the label carries no digits
    """
    if raw_unit is None:
        return None

    text = str(raw_unit).strip()
    if not text:
        return None

    aula_match = AULA_RE.search(text)
    unidad_match = UNIDAD_RE.search(text)

    if unidad_match:
        unidad = int(unidad_match.group(1))
        aula = int(aula_match.group(1)) if aula_match else 1
        combined = f"{aula}-{unidad}"
        if combined in AULA_UNIT_TO_UNIT_NUMBER:
            return AULA_UNIT_TO_UNIT_NUMBER[combined]
        if aula == 1:
            return unidad

    digits = DIGITS_RE.search(text)
    if digits:
        return int(digits.group(0))

    return None


def extract_unit_title(raw_unit: object) -> str:
    """Return the human title of a unit label ("U3. Título" -> "Título")."""
    if not isinstance(raw_unit, str):
        return ""

    dot_index = raw_unit.find(". ")
    if dot_index != -1:
        return raw_unit[dot_index + 2:].strip()

    hash_index = raw_unit.find("#")
    if hash_index != -1:
        return raw_unit[hash_index + 1:].strip()

    return raw_unit.strip()
