# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Configuration module for the word connect puzzle generator.

Handles loading configuration from YAML files and command-line arguments,
with proper merging and validation.
"""

import argparse
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Optional, List, Dict, Any, Union, get_args, get_origin

import yaml


DEFAULT_LEMMA_KEY = "Unidad Léxica (Español)"
DEFAULT_UNIT_KEY = "_"

# Valid configuration values
VALID_MODES = ["general", "anchor"]
VALID_OUTPUT_FORMATS = ["json", "yaml"]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
MIN_WORDS_PER_PUZZLE = 2


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


@dataclass
class GlossaryConfig:
    """Where vocabulary comes from and how entries are read."""
    source: str = "span10011002.json"
    unit_key: str = DEFAULT_UNIT_KEY
    lemma_key: str = DEFAULT_LEMMA_KEY
    lemma_fallbacks: List[str] = field(default_factory=lambda: [
        "palabra", "entrada", "term"
    ])
    numeric_units: bool = False
    fold_enye: bool = False
    timeout_seconds: float = 15.0


@dataclass
class GenerationConfig:
    """Configuration for level generation."""
    levels_per_unit: int = 40
    min_words: int = 2
    max_words: int = 4
    attempts_per_level: int = 30
    selector_attempts: int = 30
    top_candidates: int = 3
    seed: Optional[int] = None


@dataclass
class LayoutConfig:
    """Configuration for the crossword placement engine."""
    mode: str = "general"
    max_combinations: int = 120
    permutation_limit: int = 6
    max_search_steps: int = 20000


@dataclass
class PoolConfig:
    """Configuration for letter pools."""
    distractor_letters: int = 1
    allow_duplicate_distractors: bool = False


@dataclass
class OutputConfig:
    """Configuration for output artifacts and logging."""
    directory: str = "."
    levels_file: str = "levels_generated.json"
    dictionary_file: str = "dictionary.json"
    formats: List[str] = field(default_factory=lambda: ["json"])
    log_directory: str = "./logs"
    log_level: str = "INFO"
    log_file_prefix: str = "word_connect"
    enable_console_logging: bool = True
    enable_file_logging: bool = True


SECTIONS = {
    'glossary': GlossaryConfig,
    'generation': GenerationConfig,
    'layout': LayoutConfig,
    'pool': PoolConfig,
    'output': OutputConfig,
}


def _type_name(expected) -> str:
    if isinstance(expected, type):
        return expected.__name__
    return str(expected).replace("typing.", "")


def _matches_type(value: Any, expected) -> bool:
    """Check a loaded value against a dataclass field annotation."""
    origin = get_origin(expected)
    if origin is Union:
        return any(_matches_type(value, arg) for arg in get_args(expected))
    if origin is list:
        if not isinstance(value, list):
            return False
        item_types = get_args(expected)
        return not item_types or all(_matches_type(v, item_types[0]) for v in value)
    if expected is type(None):
        return value is None
    # bool is an int subclass but never a valid count
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if expected is float:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(value, expected)


def _section_from_dict(section_cls, data: Dict[str, Any], name: str):
    """Build a section dataclass, rejecting unknown keys and wrong types."""
    if not isinstance(data, dict):
        raise ConfigValidationError(
            f"Section '{name}' must be a mapping, got {type(data).__name__}"
        )
    section_fields = {f.name: f for f in fields(section_cls)}
    unknown = sorted(set(data) - set(section_fields))
    if unknown:
        raise ConfigValidationError(
            f"Unknown keys in section '{name}': {', '.join(unknown)}"
        )

    errors = [
        f"{name}.{key} must be {_type_name(section_fields[key].type)}, "
        f"got {type(value).__name__} ({value!r})"
        for key, value in data.items()
        if not _matches_type(value, section_fields[key].type)
    ]
    if errors:
        raise ConfigValidationError(
            "Invalid configuration values:\n" +
            "\n".join(f"  - {e}" for e in errors)
        )
    return section_cls(**data)


@dataclass
class GeneratorConfig:
    """Complete configuration for puzzle generation."""
    glossary: GlossaryConfig = field(default_factory=GlossaryConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    pool: PoolConfig = field(default_factory=PoolConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self):
        """Convert dicts to dataclass instances if needed."""
        for name, section_cls in SECTIONS.items():
            value = getattr(self, name)
            if isinstance(value, dict):
                setattr(self, name, _section_from_dict(section_cls, value, name))

    @classmethod
    def from_yaml(cls, path: str) -> 'GeneratorConfig':
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            GeneratorConfig instance

        Raises:
            ConfigValidationError: If file doesn't exist or is invalid
        """
        path = Path(path)
        if not path.exists():
            raise ConfigValidationError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in {path}: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"Configuration file must contain a YAML mapping, got {type(data)}"
            )

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> 'GeneratorConfig':
        """Create GeneratorConfig from dictionary."""
        unknown = sorted(set(data) - set(SECTIONS))
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration sections: {', '.join(unknown)}"
            )

        config = cls()
        for name, section_cls in SECTIONS.items():
            if name in data and data[name] is not None:
                setattr(
                    config, name,
                    _section_from_dict(section_cls, data[name], name)
                )
        return config

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'GeneratorConfig':
        """
        Create configuration from command-line arguments.

        Args:
            args: Parsed command-line arguments

        Returns:
            GeneratorConfig instance
        """
        config = cls()

        # Map CLI arguments to config
        if getattr(args, 'glossary', None):
            config.glossary.source = args.glossary
        if getattr(args, 'unit_key', None):
            config.glossary.unit_key = args.unit_key
        if getattr(args, 'lemma_key', None):
            config.glossary.lemma_key = args.lemma_key
        if getattr(args, 'numeric_units', False):
            config.glossary.numeric_units = True
        if getattr(args, 'levels', None) is not None:
            config.generation.levels_per_unit = args.levels
        if getattr(args, 'min_words', None) is not None:
            config.generation.min_words = args.min_words
        if getattr(args, 'max_words', None) is not None:
            config.generation.max_words = args.max_words
        if getattr(args, 'seed', None) is not None:
            config.generation.seed = args.seed
        if getattr(args, 'mode', None):
            config.layout.mode = args.mode
        if getattr(args, 'distractors', None) is not None:
            config.pool.distractor_letters = args.distractors
        if getattr(args, 'output', None):
            config.output.directory = args.output
        if getattr(args, 'format', None):
            config.output.formats = [
                f.strip() for f in args.format.split(',') if f.strip()
            ]
        if getattr(args, 'verbose', False):
            config.output.log_level = "DEBUG"

        return config

    @classmethod
    def merge(
        cls,
        yaml_config: 'GeneratorConfig',
        cli_config: 'GeneratorConfig'
    ) -> 'GeneratorConfig':
        """
        Merge configurations with CLI taking precedence over YAML.

        A CLI value overrides the YAML value only when it differs from the
        built-in default.

        Args:
            yaml_config: Configuration loaded from YAML file
            cli_config: Configuration from command-line arguments

        Returns:
            Merged GeneratorConfig instance
        """
        default = cls()
        merged = cls._from_dict(yaml_config.to_dict())

        for name in SECTIONS:
            cli_section = getattr(cli_config, name)
            default_section = getattr(default, name)
            merged_section = getattr(merged, name)
            for f in fields(cli_section):
                cli_value = getattr(cli_section, f.name)
                if cli_value != getattr(default_section, f.name):
                    setattr(merged_section, f.name, cli_value)

        return merged

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        # Glossary
        if not self.glossary.source or not str(self.glossary.source).strip():
            errors.append("Glossary source cannot be empty")
        if not self.glossary.unit_key:
            errors.append("Unit key cannot be empty")
        if not self.glossary.lemma_key:
            errors.append("Lemma key cannot be empty")
        if self.glossary.timeout_seconds <= 0:
            errors.append("timeout_seconds must be positive")

        # Generation
        gen = self.generation
        if gen.levels_per_unit <= 0:
            errors.append(
                f"levels_per_unit must be positive, got {gen.levels_per_unit}"
            )
        if gen.min_words < MIN_WORDS_PER_PUZZLE:
            errors.append(
                f"min_words must be at least {MIN_WORDS_PER_PUZZLE}, "
                f"got {gen.min_words}"
            )
        if gen.max_words < gen.min_words:
            errors.append(
                f"max_words ({gen.max_words}) must be >= "
                f"min_words ({gen.min_words})"
            )
        if gen.attempts_per_level < 1:
            errors.append("attempts_per_level must be at least 1")
        if gen.selector_attempts < 1:
            errors.append("selector_attempts must be at least 1")
        if gen.top_candidates < 1:
            errors.append("top_candidates must be at least 1")

        # Layout
        if self.layout.mode not in VALID_MODES:
            errors.append(
                f"Invalid layout mode '{self.layout.mode}'. "
                f"Must be one of: {VALID_MODES}"
            )
        if self.layout.max_combinations < 1:
            errors.append("max_combinations must be at least 1")
        if self.layout.permutation_limit < 1:
            errors.append("permutation_limit must be at least 1")
        if self.layout.max_search_steps < 1:
            errors.append("max_search_steps must be at least 1")

        # Pool
        if self.pool.distractor_letters < 0:
            errors.append("distractor_letters must be non-negative")

        # Output
        if not self.output.formats:
            errors.append("At least one output format is required")
        for fmt in self.output.formats:
            if fmt not in VALID_OUTPUT_FORMATS:
                errors.append(
                    f"Invalid output format '{fmt}'. "
                    f"Must be one of: {VALID_OUTPUT_FORMATS}"
                )
        if self.output.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid log level '{self.output.log_level}'. "
                f"Must be one of: {VALID_LOG_LEVELS}"
            )

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {name: asdict(getattr(self, name)) for name in SECTIONS}


def _positive_int(value: str) -> int:
    """argparse type for strictly positive integers."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Generate word connect puzzle levels from a Spanish glossary",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Local glossary, 40 levels per unit
  python puzzle_generator.py --glossary span10011002.json --levels 40

  # Remote glossary with custom field names
  python puzzle_generator.py --glossary https://example.org/glossary.json \\
      --unit-key "Lugar en el libro" --numeric-units

  # YAML configuration, CLI arguments override it
  python puzzle_generator.py --config generator.yaml --seed 7
"""
    )

    # Configuration file
    parser.add_argument(
        "--config", "-c",
        metavar="PATH",
        help="YAML configuration file"
    )

    # Glossary settings
    parser.add_argument(
        "--glossary", "-g",
        metavar="PATH|URL",
        help="Glossary JSON file or http(s) URL"
    )
    parser.add_argument(
        "--unit-key", "--unitKey",
        dest="unit_key",
        metavar="FIELD",
        help=f"Entry field holding the unit (default: {DEFAULT_UNIT_KEY!r})"
    )
    parser.add_argument(
        "--lemma-key", "--lemmaKey",
        dest="lemma_key",
        metavar="FIELD",
        help=f"Entry field holding the lemma (default: {DEFAULT_LEMMA_KEY!r})"
    )
    parser.add_argument(
        "--numeric-units",
        action="store_true",
        help="Parse unit labels like 'Aula 1 U3. Title' into unit numbers"
    )

    # Generation settings
    parser.add_argument(
        "--levels", "-l",
        type=_positive_int,
        metavar="INT",
        help="Levels per unit (default: 40)"
    )
    parser.add_argument(
        "--min-words",
        type=int,
        metavar="INT",
        help="Fewest words per puzzle (default: 2)"
    )
    parser.add_argument(
        "--max-words",
        type=int,
        metavar="INT",
        help="Most words per puzzle (default: 4)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        metavar="INT",
        help="Random seed for reproducible output"
    )
    parser.add_argument(
        "--mode",
        choices=VALID_MODES,
        help="Placement strategy (default: general)"
    )
    parser.add_argument(
        "--distractors",
        type=int,
        metavar="INT",
        help="Distractor letters per pool (default: 1)"
    )

    # Output settings
    parser.add_argument(
        "--output", "-o",
        metavar="PATH",
        help="Output directory"
    )
    parser.add_argument(
        "--format",
        metavar="FORMATS",
        help="Comma-separated output formats (json, yaml)"
    )

    # Other options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate config without generating"
    )

    return parser


def load_config(args: Optional[argparse.Namespace] = None) -> GeneratorConfig:
    """
    Load configuration from command-line and/or YAML file.

    Args:
        args: Parsed command-line arguments (if None, parses sys.argv)

    Returns:
        Fully resolved GeneratorConfig

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if args is None:
        parser = create_argument_parser()
        args = parser.parse_args()

    # Load from YAML if specified
    yaml_config = None
    if getattr(args, 'config', None):
        yaml_config = GeneratorConfig.from_yaml(args.config)

    # Load from CLI
    cli_config = GeneratorConfig.from_args(args)

    # Merge configurations
    if yaml_config:
        config = GeneratorConfig.merge(yaml_config, cli_config)
    else:
        config = cli_config

    # Validate
    errors = config.validate()
    if errors:
        raise ConfigValidationError(
            "Configuration validation failed:\n" +
            "\n".join(f"  - {e}" for e in errors)
        )

    return config
