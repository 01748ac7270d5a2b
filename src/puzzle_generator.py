#!/usr/bin/env python3
# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Word Connect Puzzle Generator

Generates word connect levels for a Spanish vocabulary trainer:
1. Load and normalize the glossary (local file or URL)
2. Per unit, select word sets that share letters
3. Lay each set out as a small crossword (letters cross only where equal)
4. Build the letter pool (max count per letter plus distractors)
5. Export levels and the bonus-word dictionary

Usage:
    python puzzle_generator.py --glossary span10011002.json --levels 40

    # With YAML configuration:
    python puzzle_generator.py --config generator.yaml

    # Reproducible output:
    python puzzle_generator.py --glossary span10011002.json --seed 7
"""

import logging
import os
import random
import sys
import time
from typing import Dict, List, Optional, Tuple

# Add src to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from assembler import LevelAssembler
from config import (
    GeneratorConfig, create_argument_parser, load_config, ConfigValidationError
)
from exporter import ExportError, LevelExporter
from glossary import Glossary, GlossaryError, GlossaryLoader
from logging_config import setup_logging
from models import UnitResult
from placement import CrosswordLayoutEngine, PlacementMode
from selector import CombinationSelector


def unit_sort_key(unit: str) -> Tuple[int, int, str]:
    """Numeric units first, in numeric order, then the rest alphabetically."""
    if unit.isdigit():
        return (0, int(unit), unit)
    return (1, 0, unit)


class PuzzleGenerator:
    """
    Complete level generator.

    Workflow:
    1. Load glossary and normalize words per unit
    2. Assemble levels per unit (selector -> engine -> pool)
    3. Export levels and dictionary
    """

    def __init__(self, config: GeneratorConfig):
        """
        Initialize the generator.

        Args:
            config: GeneratorConfig instance with all settings
        """
        self.config = config
        self.start_time = time.time()

        self.log_file_path = setup_logging(
            log_dir=config.output.log_directory,
            log_level=config.output.log_level,
            log_file_prefix=config.output.log_file_prefix,
            enable_console=config.output.enable_console_logging,
            enable_file=config.output.enable_file_logging,
        )
        self.logger = logging.getLogger(__name__)

        seed = config.generation.seed
        self.rng = random.Random(seed) if seed is not None else random.Random()

        self.engine = CrosswordLayoutEngine(
            mode=PlacementMode(config.layout.mode),
            max_combinations=config.layout.max_combinations,
            permutation_limit=config.layout.permutation_limit,
            max_search_steps=config.layout.max_search_steps,
            rng=self.rng,
        )
        self.selector = CombinationSelector(
            max_attempts=config.generation.selector_attempts,
            top_candidates=config.generation.top_candidates,
            rng=self.rng,
        )
        self.assembler = LevelAssembler(
            engine=self.engine,
            selector=self.selector,
            min_words=config.generation.min_words,
            max_words=config.generation.max_words,
            attempts_per_level=config.generation.attempts_per_level,
            distractor_letters=config.pool.distractor_letters,
            allow_duplicate_distractors=config.pool.allow_duplicate_distractors,
            rng=self.rng,
        )
        self.loader = GlossaryLoader(
            unit_key=config.glossary.unit_key,
            lemma_key=config.glossary.lemma_key,
            lemma_fallbacks=config.glossary.lemma_fallbacks,
            numeric_units=config.glossary.numeric_units,
            fold_enye=config.glossary.fold_enye,
            timeout=config.glossary.timeout_seconds,
        )

        self.glossary: Optional[Glossary] = None
        self.results: List[UnitResult] = []

    def generate(self) -> Dict[str, str]:
        """
        Run the full pipeline.

        Returns:
            Mapping artifact name -> written path

        Raises:
            GlossaryError: If the glossary cannot be loaded
            ExportError: If artifacts cannot be written
        """
        cfg = self.config
        self.logger.info("=" * 60)
        self.logger.info("WORD CONNECT PUZZLE GENERATOR")
        self.logger.info("=" * 60)
        self.logger.info(f"   Glossary source: {cfg.glossary.source}")
        self.logger.info(f"   Levels per unit: {cfg.generation.levels_per_unit}")
        self.logger.info(
            f"   Words per puzzle: {cfg.generation.min_words}-{cfg.generation.max_words}"
        )
        self.logger.info(f"   Layout mode: {cfg.layout.mode}")
        self.logger.info(f"   Distractor letters: {cfg.pool.distractor_letters}")
        if cfg.generation.seed is not None:
            self.logger.info(f"   Seed: {cfg.generation.seed}")

        # Step 1: Load glossary
        self.logger.info("Step 1: Loading glossary...")
        self.glossary = self.loader.load(cfg.glossary.source)
        self.logger.info(
            f"   - {self.glossary.rejected_entries} entries rejected by normalization"
        )

        # Step 2: Assemble levels per unit
        self.logger.info("Step 2: Generating levels...")
        self.results = []
        for unit in sorted(self.glossary.words_by_unit, key=unit_sort_key):
            words = self.glossary.words_by_unit[unit]
            self.logger.info(
                f"   Unit {unit}: {cfg.generation.levels_per_unit} levels "
                f"from {len(words)} words"
            )
            result = self.assembler.assemble(
                unit, words, cfg.generation.levels_per_unit
            )
            self.results.append(result)
            if not result.skipped:
                self.logger.info(
                    f"   - {len(result.levels)} levels in {result.attempts} attempts"
                )

        # Step 3: Export
        self.logger.info("Step 3: Exporting artifacts...")
        exporter = LevelExporter()
        output_files = exporter.save(
            self.results,
            self.glossary.all_words(r.unit for r in self.results if not r.skipped),
            directory=cfg.output.directory,
            levels_file=cfg.output.levels_file,
            dictionary_file=cfg.output.dictionary_file,
            formats=cfg.output.formats,
        )

        # Summary
        elapsed = time.time() - self.start_time
        total_levels = sum(len(r.levels) for r in self.results)
        short_units = [r.unit for r in self.results if r.shortfall and not r.skipped]

        self.logger.info("=" * 60)
        self.logger.info("GENERATION COMPLETE!")
        self.logger.info("=" * 60)
        self.logger.info(f"Total units: {sum(1 for r in self.results if not r.skipped)}")
        self.logger.info(f"Total levels: {total_levels}")
        if short_units:
            self.logger.warning(f"Units below target: {', '.join(short_units)}")
        self.logger.info("Output files:")
        for name, path in output_files.items():
            self.logger.info(f"   {name}: {path}")

        self.logger.info("Assembly Stats:")
        for key, value in self.assembler.stats.items():
            self.logger.info(f"   {key}: {value}")
        self.logger.info(f"Generation time: {elapsed:.2f} seconds")

        return output_files


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        # Load configuration
        config = load_config(args)

        # Handle dry-run
        if getattr(args, 'dry_run', False):
            print("Configuration valid:")
            print(f"  Glossary: {config.glossary.source}")
            print(f"  Unit key: {config.glossary.unit_key}")
            print(f"  Lemma key: {config.glossary.lemma_key}")
            print(f"  Levels per unit: {config.generation.levels_per_unit}")
            print(f"  Words per puzzle: {config.generation.min_words}-{config.generation.max_words}")
            print(f"  Layout mode: {config.layout.mode}")
            print(f"  Output Directory: {config.output.directory}")
            return

        generator = PuzzleGenerator(config)
        generator.generate()

    except ConfigValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)
    except GlossaryError as e:
        print(f"Error generating puzzles: {e}", file=sys.stderr)
        print("Make sure the glossary file exists and is valid JSON.", file=sys.stderr)
        sys.exit(1)
    except ExportError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nGeneration cancelled.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
