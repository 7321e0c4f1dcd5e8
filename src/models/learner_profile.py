"""
Learner Model: student profile with VARK learning preferences.

This module provides:
- Profile creation and management
- Preferred-module bookkeeping and VARK onboarding results
- Content gating through the module matching engine
- Thread-safe profile persistence
"""

from __future__ import annotations

import json
import logging
import threading
import uuid
from copy import deepcopy
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, Literal, Optional

from jsonschema import ValidationError

from ..config import config
from .module_matching import (
    DEFAULT_STYLES_KEY,
    MODULE_TO_STYLE_MAP,
    can_access_content,
    filter_by_preference,
    get_style_tags,
    map_modules_to_styles,
)

if TYPE_CHECKING:
    from ..utils.validation import LearnerProfileValidator
    from .vark_assessment import VARKResult

logger = logging.getLogger(__name__)

Role = Literal["student", "teacher"]
LearningType = Literal["Unimodal", "Bimodal", "Trimodal", "Multimodal"]


class LearnerModel:
    """
    Learner profile holding identity and VARK learning preferences.

    Thread-safe for concurrent access. All mutations acquire a lock.
    """

    _lock = threading.RLock()
    _validator: Optional[LearnerProfileValidator] = None

    def __init__(
        self,
        learner_id: Optional[str] = None,
        name: str = "Anonymous Learner",
        email: Optional[str] = None,
        role: Role = "student",
        preferred_modules: Optional[list[str]] = None,
        validate: bool = True,
    ):
        """
        Initialize a new learner profile.

        Args:
            learner_id: Unique identifier (auto-generated if None)
            name: Learner's name
            email: Contact email (optional)
            role: "student" or "teacher"
            preferred_modules: Initial preferred modules (empty = see everything)
            validate: Whether to validate on creation (default: True, set False for testing)
        """
        self._data = self._create_default_profile(
            learner_id or self._generate_id(), name, email, role
        )
        if preferred_modules:
            self._data["learning_profile"]["preferred_modules"] = self._clean_modules(
                preferred_modules
            )
        if validate:
            self._validate()

    @staticmethod
    def _generate_id() -> str:
        """Generate unique learner ID in required format."""
        return f"learner-{uuid.uuid4()}"

    @staticmethod
    def _utc_now() -> str:
        """Get current UTC timestamp in ISO 8601 format."""
        return datetime.now(timezone.utc).isoformat()

    @classmethod
    def _get_validator(cls) -> LearnerProfileValidator:
        """Get cached validator instance."""
        if cls._validator is None:
            from ..utils.validation import LearnerProfileValidator

            cls._validator = LearnerProfileValidator()
        return cls._validator

    @staticmethod
    def _clean_modules(modules: Iterable[str]) -> list[str]:
        """Keep known preferred modules, first occurrence only."""
        return list(dict.fromkeys(m for m in modules if m in MODULE_TO_STYLE_MAP))

    def _create_default_profile(
        self,
        learner_id: str,
        name: str,
        email: Optional[str],
        role: Role,
    ) -> dict:
        """Create a default profile structure."""
        now = self._utc_now()

        return {
            "meta": {
                "schema_version": 1,
                "created_at": now,
                "last_updated": now,
            },
            "learner_id": learner_id,
            "role": role,
            "personal_info": {
                "name": name,
                "email": email,
            },
            "learning_profile": {
                "learning_style": None,
                "preferred_modules": [],
                "learning_type": None,
                "onboarding_completed": False,
            },
        }

    def _validate(self) -> None:
        """
        Validate profile against schema using LearnerProfileValidator.

        Raises:
            ValidationError: If profile is invalid
        """
        result = self._get_validator().validate(self._data, auto_repair=False)

        if not result.valid:
            raise ValidationError("\n".join(result.errors))

    def _update_timestamp(self) -> None:
        """Update last_updated timestamp."""
        self._data["meta"]["last_updated"] = self._utc_now()

    # ==================== Profile Access ====================

    @property
    def learner_id(self) -> str:
        return self._data["learner_id"]

    @property
    def name(self) -> str:
        return self._data["personal_info"]["name"]

    @property
    def email(self) -> Optional[str]:
        return self._data["personal_info"].get("email")

    @property
    def role(self) -> Role:
        return self._data["role"]

    @property
    def learning_style(self) -> Optional[str]:
        """Get dominant learning style tag from onboarding (None before onboarding)."""
        return self._data["learning_profile"].get("learning_style")

    @property
    def preferred_modules(self) -> list[str]:
        """Get preferred modules ("Visual", "Aural", ...)."""
        return list(self._data["learning_profile"]["preferred_modules"])

    @property
    def preferred_styles(self) -> list[str]:
        """Get preferred modules as learning style tags."""
        return map_modules_to_styles(self._data["learning_profile"]["preferred_modules"])

    @property
    def learning_type(self) -> Optional[LearningType]:
        return self._data["learning_profile"].get("learning_type")

    @property
    def onboarding_completed(self) -> bool:
        return self._data["learning_profile"]["onboarding_completed"]

    # ==================== Preference Management ====================

    def set_preferred_modules(self, modules: Iterable[str]) -> None:
        """
        Replace preferred modules.

        Unknown module names are dropped and duplicates collapsed. The
        learning type follows the new number of preferences.
        """
        from .vark_assessment import learning_type

        with self._lock:
            cleaned = self._clean_modules(modules)
            learning = self._data["learning_profile"]
            learning["preferred_modules"] = cleaned
            learning["learning_type"] = learning_type(len(cleaned)) if cleaned else None

            style = learning.get("learning_style")
            if style and not any(MODULE_TO_STYLE_MAP[m] == style for m in cleaned):
                learning["learning_style"] = None

            self._update_timestamp()

    def apply_vark_result(self, result: VARKResult) -> None:
        """
        Store the outcome of the VARK onboarding questionnaire.

        Args:
            result: Scored questionnaire
        """
        with self._lock:
            learning = self._data["learning_profile"]
            learning["learning_style"] = result.dominant_style
            learning["preferred_modules"] = self._clean_modules(result.preferred_modules)
            learning["learning_type"] = result.learning_type
            learning["onboarding_completed"] = True
            self._update_timestamp()

        logger.info(
            "Learner %s completed onboarding: %s (%s)",
            self.learner_id,
            result.preferred_modules,
            result.learning_type,
        )

    def reset_preferences(self) -> None:
        """Clear preferences so the learner sees all content again."""
        with self._lock:
            self._data["learning_profile"] = {
                "learning_style": None,
                "preferred_modules": [],
                "learning_type": None,
                "onboarding_completed": False,
            }
            self._update_timestamp()

    # ==================== Content Gating ====================

    def can_access(self, item: Any, styles_key: str = DEFAULT_STYLES_KEY) -> bool:
        """Check whether this learner may access a content item."""
        return can_access_content(self.preferred_modules, get_style_tags(item, styles_key))

    def accessible_modules(
        self, modules: Iterable[Any], styles_key: str = DEFAULT_STYLES_KEY
    ) -> list[Any]:
        """Filter a module catalog down to what this learner may access."""
        return filter_by_preference(modules, self.preferred_modules, styles_key)

    def relevant_sections(self, sections: Iterable[Any], **options: Any) -> list[Any]:
        """
        Select module sections for this learner.

        Args:
            sections: Module content sections
            **options: filter_strict, sort_by_relevance, match_mode

        Returns:
            Sections filtered and/or sorted by relevance
        """
        from ..utils.section_matcher import get_relevant_sections

        return get_relevant_sections(sections, self.preferred_modules, **options)

    # ==================== Persistence ====================

    def to_dict(self) -> dict:
        """Export profile as dictionary (deep copy to prevent mutations)."""
        with self._lock:
            return deepcopy(self._data)

    def save(self, filepath: Optional[Path] = None) -> Path:
        """
        Save profile to JSON file.

        Args:
            filepath: Custom save path (defaults to <profiles_dir>/{learner_id}.json)

        Returns:
            Path where profile was saved

        Raises:
            ValidationError: If profile is invalid
        """
        with self._lock:
            if filepath is None:
                config.paths.profiles_dir.mkdir(parents=True, exist_ok=True)
                filepath = config.paths.profiles_dir / f"{self.learner_id}.json"

            self._validate()

            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, ensure_ascii=False)

        logger.info("Saved learner profile %s to %s", self.learner_id, filepath)
        return Path(filepath)

    @classmethod
    def from_dict(cls, data: dict, validate: bool = True) -> LearnerModel:
        """
        Build a profile from a dictionary (e.g. a row from the API).

        Raises:
            ValidationError: If validate is True and the profile is invalid
        """
        instance = cls.__new__(cls)
        instance._data = deepcopy(data)
        if validate:
            instance._validate()
        return instance

    @classmethod
    def load(cls, filepath: Path) -> LearnerModel:
        """
        Load profile from JSON file.

        Args:
            filepath: Path to profile JSON

        Returns:
            LearnerModel instance

        Raises:
            FileNotFoundError: If file doesn't exist
            ValidationError: If profile is invalid
        """
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)

        logger.debug("Loaded learner profile from %s", filepath)
        return cls.from_dict(data)

    @classmethod
    def load_by_id(cls, learner_id: str) -> LearnerModel:
        """
        Load profile by learner ID from default location.

        Args:
            learner_id: Learner identifier

        Returns:
            LearnerModel instance
        """
        return cls.load(config.paths.profiles_dir / f"{learner_id}.json")

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"LearnerModel(id={self.learner_id}, "
            f"name='{self.name}', "
            f"preferred_modules={self.preferred_modules})"
        )
