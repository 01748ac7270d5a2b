# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Artifact exporter for generated levels.

Writes the two files the game client consumes:
- levels: mapping "unit_<key>" -> list of level records
- dictionary: sorted lowercase word list for bonus-word validation

Every artifact is rendered in memory and staged in a temporary file before
any of them is moved into place. If a move fails, the staged files and the
artifacts already moved are removed, so a failed run never leaves a partial
set of artifacts behind.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Tuple

import yaml

from models import UnitResult


class ExportError(Exception):
    """Raised when artifact export fails."""
    pass


class LevelExporter:
    """
    Exports generated levels and the bonus dictionary.

    Usage:
        exporter = LevelExporter()
        paths = exporter.save(results, words, "./out", formats=["json"])
    """

    def levels_payload(self, results: Sequence[UnitResult]) -> Dict[str, List[Dict[str, Any]]]:
        """Build the per-unit levels mapping."""
        return {
            result.key: [level.to_dict() for level in result.levels]
            for result in results
            if not result.skipped
        }

    def dictionary_payload(self, words: Iterable[str]) -> List[str]:
        """Deduplicated, lowercase, sorted dictionary."""
        return sorted({w.lower() for w in words})

    def export_json(self, payload: Any) -> str:
        return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"

    def export_yaml(self, payload: Any) -> str:
        header = "# Word connect levels\n"
        header += "# Generated puzzle data, one list of levels per unit\n\n"

        yaml_content = yaml.dump(
            payload,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            indent=2,
            width=80,
        )
        return header + yaml_content

    def render(
        self,
        results: Sequence[UnitResult],
        dictionary_words: Iterable[str],
        levels_file: str = "levels_generated.json",
        dictionary_file: str = "dictionary.json",
        formats: Sequence[str] = ("json",),
    ) -> Dict[str, str]:
        """
        Render every artifact to text.

        Returns:
            Mapping file name -> file content
        """
        levels = self.levels_payload(results)
        artifacts: Dict[str, str] = {}

        if "json" in formats:
            artifacts[levels_file] = self.export_json(levels)
        if "yaml" in formats:
            yaml_name = str(Path(levels_file).with_suffix(".yaml"))
            artifacts[yaml_name] = self.export_yaml(levels)

        artifacts[dictionary_file] = self.export_json(
            self.dictionary_payload(dictionary_words)
        )
        return artifacts

    def save(
        self,
        results: Sequence[UnitResult],
        dictionary_words: Iterable[str],
        directory: str,
        levels_file: str = "levels_generated.json",
        dictionary_file: str = "dictionary.json",
        formats: Sequence[str] = ("json",),
    ) -> Dict[str, str]:
        """
        Render and write all artifacts.

        Returns:
            Mapping file name -> written path

        Raises:
            ExportError: If rendering or writing fails
        """
        try:
            artifacts = self.render(
                results, dictionary_words, levels_file, dictionary_file, formats
            )
        except (TypeError, ValueError, yaml.YAMLError) as e:
            raise ExportError(f"Could not render artifacts: {e}")

        out_dir = Path(directory)
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExportError(f"Could not create output directory {out_dir}: {e}")

        # Stage every artifact before committing any of them
        staged: List[Tuple[str, Path, str]] = []
        committed: List[Path] = []
        try:
            for name, content in artifacts.items():
                path = out_dir / name
                staged.append((name, path, _write_temp(path, content)))
            for _, path, tmp_path in staged:
                os.replace(tmp_path, path)
                committed.append(path)
        except OSError as e:
            for _, _, tmp_path in staged:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
            for path in committed:
                path.unlink(missing_ok=True)
            raise ExportError(f"Could not write artifacts to {out_dir}: {e}")

        return {name: str(path) for name, path, _ in staged}


def _write_temp(path: Path, content: str) -> str:
    """Write content to a temporary file beside path and return its name."""
    fd, tmp_path = tempfile.mkstemp(
        dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(content)
    except OSError:
        os.unlink(tmp_path)
        raise
    return tmp_path
