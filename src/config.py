"""
Configuration management for the VARK learning-style library.

This module centralizes all configuration settings:
- Environment-driven defaults (12-factor style)
- Dataclass sections with validation in __post_init__
- Single source of truth for paths and matching behaviour
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


MATCH_MODES = ("AND", "OR")


@dataclass
class MatchingConfig:
    """Section-level learning-style matching behaviour."""

    default_match_mode: str = field(
        default_factory=lambda: os.getenv("SECTION_MATCH_MODE", "AND").upper()
    )

    # get_relevant_sections defaults
    filter_strict: bool = False
    sort_by_relevance: bool = True

    # Score given to sections that carry no learning style tags
    universal_section_score: float = 0.5

    def __post_init__(self):
        """Validate the configured match mode."""
        if self.default_match_mode not in MATCH_MODES:
            raise ValueError(
                f"default_match_mode must be one of {MATCH_MODES}, "
                f"got {self.default_match_mode!r}"
            )


@dataclass
class VARKConfig:
    """VARK questionnaire scoring configuration."""

    rating_min: int = 1
    rating_max: int = 5
    statements_per_style: int = 5

    # A style scoring at or above this (out of 25) counts as preferred
    preference_threshold: int = field(
        default_factory=lambda: int(os.getenv("VARK_PREFERENCE_THRESHOLD", "20"))
    )

    @property
    def max_style_score(self) -> int:
        return self.rating_max * self.statements_per_style


@dataclass
class PathConfig:
    """File system paths - single source of truth for all directories."""

    # Base paths
    project_root: Path = field(default_factory=lambda: Path(__file__).parent.parent)
    data_dir: Path = field(default_factory=lambda: Path(__file__).parent.parent / "data")

    # Data subdirectories (computed from data_dir)
    profiles_dir: Path = field(init=False)
    modules_dir: Path = field(init=False)

    # Schemas
    schemas_dir: Path = field(init=False)
    module_schema: Path = field(init=False)
    learner_profile_schema: Path = field(init=False)

    def __post_init__(self):
        """Initialize computed paths."""
        self.profiles_dir = self.data_dir / "profiles"
        self.modules_dir = self.data_dir / "modules"
        self.schemas_dir = self.project_root / "schemas"
        self.module_schema = self.schemas_dir / "vark_module.schema.json"
        self.learner_profile_schema = self.schemas_dir / "learner_profile.schema.json"

    def prepare_filesystem(self):
        """
        Create data directories if they don't exist.

        Separated from __post_init__ to avoid side-effects on import.
        Call this explicitly from your app entrypoint.
        """
        for directory in [self.data_dir, self.profiles_dir, self.modules_dir]:
            directory.mkdir(parents=True, exist_ok=True)


@dataclass
class LoggingConfig:
    """Logging configuration."""

    log_level: str = field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper()
    )
    log_format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Config:
    """
    Main configuration class. Singleton pattern.

    Usage:
        from src.config import config

        mode = config.matching.default_match_mode
        threshold = config.vark.preference_threshold

        # Prepare filesystem (call once at startup)
        config.prepare_fs()
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.paths = PathConfig()
            cls._instance.matching = MatchingConfig()
            cls._instance.vark = VARKConfig()
            cls._instance.logging = LoggingConfig()

        return cls._instance

    def prepare_fs(self):
        """Prepare filesystem (create directories). Call once at startup."""
        self.paths.prepare_filesystem()

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        # Matching validation
        if self.matching.default_match_mode not in MATCH_MODES:
            errors.append(
                f"default_match_mode must be one of {MATCH_MODES}, "
                f"got {self.matching.default_match_mode!r}"
            )

        if not (0 <= self.matching.universal_section_score <= 1):
            errors.append(
                "universal_section_score must be in [0, 1], "
                f"got {self.matching.universal_section_score}"
            )

        # VARK validation
        if self.vark.rating_min >= self.vark.rating_max:
            errors.append(
                f"rating_min ({self.vark.rating_min}) must be < rating_max ({self.vark.rating_max})"
            )

        if not (0 < self.vark.preference_threshold <= self.vark.max_style_score):
            errors.append(
                f"preference_threshold must be in (0, {self.vark.max_style_score}], "
                f"got {self.vark.preference_threshold}"
            )

        # Logging validation
        if self.logging.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown log_level: {self.logging.log_level}")

        # Path validation
        for schema in (self.paths.module_schema, self.paths.learner_profile_schema):
            if not schema.exists():
                errors.append(f"Schema not found: {schema}")

        return errors


# Global config instance
config = Config()
