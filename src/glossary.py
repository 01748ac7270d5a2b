# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Glossary loading.

Reads the vocabulary glossary (a JSON list of entries) from a local file
or an http(s) URL, normalizes every lemma and groups the accepted words
by textbook unit.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

import requests

from normalizer import extract_unit_number, extract_unit_title, normalize_word

URL_RE = re.compile(r"^https?://", re.IGNORECASE)
DEFAULT_UNIT = "1"


class GlossaryError(Exception):
    """Raised when the glossary cannot be fetched or parsed."""
    pass


@dataclass
class Glossary:
    """Normalized vocabulary grouped by unit."""
    source: str
    words_by_unit: Dict[str, List[str]] = field(default_factory=dict)
    unit_titles: Dict[str, str] = field(default_factory=dict)
    total_entries: int = 0
    accepted_entries: int = 0

    @property
    def rejected_entries(self) -> int:
        return self.total_entries - self.accepted_entries

    def all_words(self, units: Optional[Iterable[str]] = None) -> List[str]:
        """Every accepted word once, in first-seen order, optionally for some units."""
        wanted = None if units is None else set(units)
        seen: Dict[str, None] = {}
        for unit, words in self.words_by_unit.items():
            if wanted is not None and unit not in wanted:
                continue
            for word in words:
                seen.setdefault(word, None)
        return list(seen)


def fetch_source(source: str, timeout: float = 15.0) -> str:
    """
    Read raw glossary text from a path or URL.

    Raises:
        GlossaryError: If the file is missing or the request fails
    """
    if URL_RE.match(source):
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise GlossaryError(f"Could not fetch glossary from {source}: {e}")
        response.encoding = response.encoding or 'utf-8'
        return response.text

    path = Path(source)
    if not path.exists():
        raise GlossaryError(f"Glossary file not found: {path}")
    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise GlossaryError(f"Could not read glossary {path}: {e}")


def parse_entries(raw_text: str, source: str = "<string>") -> List[Any]:
    """
    Parse glossary JSON into a list of entries.

    Accepts a top-level array or an object wrapping it in "items" or "data".
    """
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise GlossaryError(f"Invalid JSON in glossary {source}: {e}")

    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in ("items", "data"):
            if isinstance(data.get(key), list):
                return data[key]
        return []

    raise GlossaryError(
        f"Glossary {source} must be a JSON array or object, "
        f"got {type(data).__name__}"
    )


class GlossaryLoader:
    """
    Builds a Glossary from raw entries.

    Usage:
        loader = GlossaryLoader(unit_key="_", lemma_key="Unidad Léxica (Español)")
        glossary = loader.load("span10011002.json")
    """

    def __init__(
        self,
        unit_key: str = "_",
        lemma_key: str = "Unidad Léxica (Español)",
        lemma_fallbacks: Sequence[str] = ("palabra", "entrada", "term"),
        numeric_units: bool = False,
        fold_enye: bool = False,
        timeout: float = 15.0,
        logger: Optional[logging.Logger] = None,
    ):
        self.unit_key = unit_key
        self.lemma_key = lemma_key
        self.lemma_fallbacks = list(lemma_fallbacks)
        self.numeric_units = numeric_units
        self.fold_enye = fold_enye
        self.timeout = timeout
        self.logger = logger if logger else logging.getLogger(__name__)

    def load(self, source: str) -> Glossary:
        """
        Load and normalize a glossary from a path or URL.

        Raises:
            GlossaryError: On fetch or parse failure
        """
        self.logger.info(f"Loading glossary from: {source}")
        entries = parse_entries(fetch_source(source, self.timeout), source)
        self.logger.info(f"Loaded {len(entries)} entries from glossary")

        glossary = self.build(entries, source)
        self.logger.info(
            f"Filtered to {glossary.accepted_entries} simple lexical units "
            f"across {len(glossary.words_by_unit)} units"
        )
        return glossary

    def build(self, entries: Sequence[Any], source: str = "<memory>") -> Glossary:
        """
        Normalize entries and group them by unit.

        Raises:
            GlossaryError: If entries exist but none has a usable unit and lemma
        """
        glossary = Glossary(source=source, total_entries=len(entries))
        seen_by_unit: Dict[str, Dict[str, None]] = {}

        for entry in entries:
            if not isinstance(entry, dict):
                continue

            unit = self._unit_of(entry)
            if unit is None:
                continue

            word = normalize_word(self._lemma_of(entry), fold_enye=self.fold_enye)
            if not word:
                continue

            glossary.accepted_entries += 1
            seen_by_unit.setdefault(unit, {}).setdefault(word, None)

            raw_unit = entry.get(self.unit_key)
            if unit not in glossary.unit_titles and isinstance(raw_unit, str):
                glossary.unit_titles[unit] = extract_unit_title(raw_unit)

        if glossary.total_entries and not glossary.accepted_entries:
            raise GlossaryError(
                f"No usable entries in glossary {source}: check the unit field "
                f"'{self.unit_key}' and the lemma field '{self.lemma_key}'"
            )

        glossary.words_by_unit = {
            unit: list(words) for unit, words in seen_by_unit.items()
        }
        return glossary

    def _lemma_of(self, entry: Dict[str, Any]) -> Any:
        value = entry.get(self.lemma_key)
        if value:
            return value
        for key in self.lemma_fallbacks:
            if entry.get(key):
                return entry[key]
        return None

    def _unit_of(self, entry: Dict[str, Any]) -> Optional[str]:
        raw_unit = entry.get(self.unit_key)
        if self.numeric_units:
            number = extract_unit_number(raw_unit)
            return str(number) if number is not None else None
        text = str(raw_unit).strip() if raw_unit not in (None, "") else ""
        return text or DEFAULT_UNIT
