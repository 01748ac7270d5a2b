# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Functional tests for the word connect puzzle generator."""

import json
import os
import shutil
import sys
import tempfile
import unittest
from collections import Counter
from contextlib import redirect_stderr, redirect_stdout
from io import StringIO

import yaml

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from config import GeneratorConfig
from models import Level, Placement
from puzzle_generator import PuzzleGenerator, main, unit_sort_key
from validator import validate_level


LEMMA = "Unidad Léxica (Español)"

UNIT_1 = [
    "la casa", "la sal", "la mesa", "la silla", "la cama", "el perro",
    "la pera", "la ropa", "el gato", "la mano", "el pelo", "la boca",
    "la cara", "la taza", "la sopa", "la casa blanca", "¿qué?",
]
UNIT_2 = [
    "el niño/la niña", "el año", "el señor", "la mañana", "la montaña",
    "España", "la araña", "la piña", "el sueño", "el baño",
]


def write_glossary(directory):
    entries = [{"_": "1", LEMMA: lemma} for lemma in UNIT_1]
    entries += [{"_": "2", LEMMA: lemma} for lemma in UNIT_2]
    entries.append({"_": "10", LEMMA: "adiós"})
    path = os.path.join(directory, "glossary.json")
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(entries, f, ensure_ascii=False)
    return path


def make_config(temp_dir, glossary_path, **generation):
    generation.setdefault('levels_per_unit', 6)
    generation.setdefault('seed', 1)
    return GeneratorConfig(
        glossary={'source': glossary_path},
        generation=generation,
        output={
            'directory': os.path.join(temp_dir, "out"),
            'log_directory': os.path.join(temp_dir, "logs"),
            'enable_console_logging': False,
            'enable_file_logging': False,
        },
    )


class TestEndToEnd(unittest.TestCase):
    """End-to-end functional tests."""

    def setUp(self):
        """Create temporary glossary and output directory."""
        self.temp_dir = tempfile.mkdtemp()
        self.glossary_path = write_glossary(self.temp_dir)

    def tearDown(self):
        """Clean up temporary directory."""
        shutil.rmtree(self.temp_dir)

    def _generate(self, **generation):
        config = make_config(self.temp_dir, self.glossary_path, **generation)
        generator = PuzzleGenerator(config)
        return generator, generator.generate()

    def test_generate_writes_artifacts(self):
        """Test generation writes the levels file and dictionary."""
        _, paths = self._generate()

        for path in paths.values():
            self.assertTrue(os.path.exists(path), f"Output file not found: {path}")

        with open(paths["levels_generated.json"], encoding='utf-8') as f:
            levels = json.load(f)
        self.assertEqual(sorted(levels), ["unit_1", "unit_2"])
        self.assertEqual(len(levels["unit_1"]), 6)
        self.assertEqual(len(levels["unit_2"]), 6)

    def test_levels_are_playable(self):
        """Test every written level keeps the puzzle invariants."""
        _, paths = self._generate()

        with open(paths["levels_generated.json"], encoding='utf-8') as f:
            levels = json.load(f)

        for unit_key, records in levels.items():
            ids = [r["level_id"] for r in records]
            self.assertEqual(len(ids), len(set(ids)))

            for record in records:
                level = Level(
                    level_id=record["level_id"],
                    solution_words=tuple(record["solution_words"]),
                    grid_layout=tuple(
                        Placement.from_dict(p) for p in record["grid_layout"]
                    ),
                    letter_pool=tuple(record["letter_pool"]),
                )
                result = validate_level(level)
                self.assertTrue(result.valid, f"{record}\n{result}")

                pool = Counter(record["letter_pool"])
                for word in record["solution_words"]:
                    self.assertTrue(all(
                        pool[letter] >= count
                        for letter, count in Counter(word).items()
                    ))

    def test_dictionary(self):
        """Test the dictionary holds the words of generated units in lowercase."""
        _, paths = self._generate()

        with open(paths["dictionary.json"], encoding='utf-8') as f:
            dictionary = json.load(f)

        self.assertEqual(dictionary, sorted(set(dictionary)))
        self.assertIn("casa", dictionary)
        self.assertIn("niño", dictionary)
        self.assertNotIn("adios", dictionary)
        self.assertIn("que", dictionary)
        self.assertNotIn("casablanca", dictionary)
        self.assertTrue(all(w == w.lower() for w in dictionary))

    def test_small_unit_skipped(self):
        """Test a unit with a single word is left out of the levels."""
        generator, _ = self._generate()

        skipped = [r.unit for r in generator.results if r.skipped]
        self.assertEqual(skipped, ["10"])

    def test_seed_is_reproducible(self):
        """Test the same seed produces identical output."""
        _, first_paths = self._generate(seed=42)
        with open(first_paths["levels_generated.json"], encoding='utf-8') as f:
            first = f.read()

        _, second_paths = self._generate(seed=42)
        with open(second_paths["levels_generated.json"], encoding='utf-8') as f:
            second = f.read()

        self.assertEqual(first, second)

    def test_yaml_format(self):
        """Test the optional YAML rendition is written."""
        config = make_config(self.temp_dir, self.glossary_path)
        config.output.formats = ["json", "yaml"]
        paths = PuzzleGenerator(config).generate()

        with open(paths["levels_generated.yaml"], encoding='utf-8') as f:
            data = yaml.safe_load(f)
        with open(paths["levels_generated.json"], encoding='utf-8') as f:
            self.assertEqual(data, json.load(f))

    def test_anchor_mode(self):
        """Test generation in anchor mode."""
        config = make_config(self.temp_dir, self.glossary_path, levels_per_unit=3)
        config.layout.mode = "anchor"
        generator = PuzzleGenerator(config)
        generator.generate()

        for result in generator.results:
            for level in result.levels:
                self.assertTrue(validate_level(level).valid)


class TestUnitOrdering(unittest.TestCase):
    """Tests for unit ordering."""

    def test_numeric_units_in_order(self):
        units = ["10", "2", "b", "1", "a"]
        self.assertEqual(sorted(units, key=unit_sort_key), ["1", "2", "10", "a", "b"])


class TestCommandLine(unittest.TestCase):
    """Tests for the main entry point."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.glossary_path = write_glossary(self.temp_dir)
        self.config_path = os.path.join(self.temp_dir, "generator.yaml")
        with open(self.config_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump({
                'output': {
                    'directory': os.path.join(self.temp_dir, "out"),
                    'log_directory': os.path.join(self.temp_dir, "logs"),
                    'enable_console_logging': False,
                },
            }, f)

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_main_success(self):
        """Test a normal run writes output and a log file."""
        main([
            "--config", self.config_path, "--glossary", self.glossary_path,
            "--levels", "3", "--seed", "5",
        ])

        out_dir = os.path.join(self.temp_dir, "out")
        self.assertTrue(os.path.exists(os.path.join(out_dir, "levels_generated.json")))
        self.assertTrue(os.path.exists(os.path.join(out_dir, "dictionary.json")))
        self.assertTrue(os.listdir(os.path.join(self.temp_dir, "logs")))

    def test_missing_glossary_exits_nonzero(self):
        """Test a missing glossary exits with status 1 and writes nothing."""
        stderr = StringIO()
        with redirect_stderr(stderr):
            with self.assertRaises(SystemExit) as ctx:
                main([
                    "--config", self.config_path,
                    "--glossary", os.path.join(self.temp_dir, "missing.json"),
                ])

        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("missing.json", stderr.getvalue())
        self.assertFalse(os.path.exists(os.path.join(self.temp_dir, "out")))

    def test_mistyped_config_value_exits_nonzero(self):
        """Test a wrongly typed YAML value exits with status 1."""
        with open(self.config_path, 'a', encoding='utf-8') as f:
            f.write("generation:\n  levels_per_unit: ten\n")

        stderr = StringIO()
        with redirect_stderr(stderr):
            with self.assertRaises(SystemExit) as ctx:
                main(["--config", self.config_path, "--glossary", self.glossary_path])

        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("levels_per_unit", stderr.getvalue())
        self.assertFalse(os.path.exists(os.path.join(self.temp_dir, "out")))

    def test_wrong_lemma_field_exits_nonzero(self):
        """Test a glossary without the lemma field writes no artifacts."""
        glossary_path = os.path.join(self.temp_dir, "unlabelled.json")
        with open(glossary_path, 'w', encoding='utf-8') as f:
            json.dump([{"_": "1", "wrong": "casa"}, {"_": "1", "wrong": "sal"}], f)

        stderr = StringIO()
        with redirect_stderr(stderr):
            with self.assertRaises(SystemExit) as ctx:
                main(["--config", self.config_path, "--glossary", glossary_path])

        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("No usable entries", stderr.getvalue())
        self.assertFalse(os.path.exists(os.path.join(self.temp_dir, "out")))

    def test_invalid_levels_exits_nonzero(self):
        """Test a non-positive level count is rejected."""
        with redirect_stderr(StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(["--glossary", self.glossary_path, "--levels", "0"])

        self.assertNotEqual(ctx.exception.code, 0)

    def test_invalid_config_exits_nonzero(self):
        """Test an invalid configuration exits with status 1."""
        with redirect_stderr(StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(["--min-words", "5", "--max-words", "2"])

        self.assertEqual(ctx.exception.code, 1)

    def test_dry_run(self):
        """Test dry run validates without generating."""
        stdout = StringIO()
        with redirect_stdout(stdout):
            main(["--config", self.config_path, "--glossary", "vocab.json", "--dry-run"])

        self.assertIn("Configuration valid", stdout.getvalue())
        self.assertIn("vocab.json", stdout.getvalue())
        self.assertFalse(os.path.exists(os.path.join(self.temp_dir, "out")))


if __name__ == '__main__':
    unittest.main()
