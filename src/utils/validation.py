"""
Schema validation utilities for VARK modules and learner profiles.

Provides robust JSON Schema validation with clear error messages and
automatic repair of common problems in imported data.

Features:
- Format validation (datetime)
- Deep copy to prevent mutations
- Removal of unknown keys
- Learning style tag normalization ("Visual" -> "visual")
- Section ID generation and uniqueness checks
- Transparent repair tracking
"""

import json
from copy import deepcopy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft7Validator, FormatChecker, ValidationError

from ..config import config


@dataclass
class ValidationResult:
    """
    Outcome of validating a module or learner profile.

    Attributes:
        valid: Whether the document satisfies its schema and domain checks
        errors: Human-readable problems found
        data: The checked document (the repaired copy when repairs ran)
        repairs: Fixes applied during auto-repair, in order
    """
    valid: bool
    errors: list[str]
    data: Any = None
    repairs: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid

    def __str__(self) -> str:
        if self.valid:
            suffix = f", {len(self.repairs)} repair(s) applied" if self.repairs else ""
            return f"✓ Document passed{suffix}"
        lines = [f"✗ Document failed with {len(self.errors)} error(s):"]
        lines.extend(f"  - {error}" for error in self.errors)
        return "\n".join(lines)


def describe_error(error: ValidationError) -> str:
    """
    Render a jsonschema error with its location in the document.

    Example:
        "content_structure.sections[0].id: 'id' is a required property
        (validator=required, schema_path=/properties/content_structure/...)"
    """
    location = "document"
    for part in error.absolute_path:
        location += f"[{part}]" if isinstance(part, int) else f".{part}"
    schema_path = "/".join(str(p) for p in error.absolute_schema_path)
    return f"{location}: {error.message} (validator={error.validator}, schema_path=/{schema_path})"


def _prune_unknown_fields(node: Any, schema: Any, repairs: list[str], location: str = "document") -> None:
    """Drop fields that a closed schema object (additionalProperties: false) does not declare."""
    if not isinstance(schema, dict):
        return

    if isinstance(node, list):
        item_schema = schema.get("items")
        for index, item in enumerate(node):
            _prune_unknown_fields(item, item_schema, repairs, f"{location}[{index}]")
        return

    if not isinstance(node, dict):
        return

    declared = schema.get("properties", {})
    if schema.get("additionalProperties") is False:
        for key in [k for k in node if k not in declared]:
            del node[key]
            repairs.append(f"Dropped unknown field {location}.{key}")

    for key, sub_schema in declared.items():
        if key in node:
            _prune_unknown_fields(node[key], sub_schema, repairs, f"{location}.{key}")


class SchemaValidator:
    """
    Validates JSON documents against one Draft-07 schema file.

    Subclasses add domain checks on top of the schema and extend
    ``_attempt_repair`` with their own fixes. Repairs always run on a deep
    copy, so the caller's document is never touched.
    """

    def __init__(self, schema_path: Path | str):
        self.schema_path = Path(schema_path)
        with open(self.schema_path, "r", encoding="utf-8") as f:
            self.schema = json.load(f)
        self.validator = Draft7Validator(self.schema, format_checker=FormatChecker())

    def validate(self, data: Any, auto_repair: bool = False) -> ValidationResult:
        """
        Check data against the schema.

        Args:
            data: Parsed JSON document
            auto_repair: Repair a copy of an invalid object and re-check it

        Returns:
            ValidationResult
        """
        errors = [describe_error(error) for error in self.validator.iter_errors(data)]
        if not errors:
            return ValidationResult(valid=True, errors=[], data=data)

        # Only objects can be repaired; anything else is reported as-is
        if not (auto_repair and isinstance(data, dict)):
            return ValidationResult(valid=False, errors=errors, data=data)

        repaired, repairs = self._attempt_repair(data, errors)
        result = self.validate(repaired)
        result.repairs = repairs
        return result

    def _attempt_repair(self, data: dict, errors: list[str]) -> tuple[dict, list[str]]:
        repaired = deepcopy(data)
        repairs: list[str] = []
        _prune_unknown_fields(repaired, self.schema, repairs)
        return repaired, repairs


class VARKModuleValidator(SchemaValidator):
    """
    Validator for VARK module documents (teacher-authored or imported JSON).

    Adds domain-specific validation beyond JSON Schema:
    - Unique section IDs
    - Repair of section IDs, positions and learning style tags
    """

    SECTION_TAGS = ("visual", "auditory", "reading_writing", "kinesthetic", "everyone")

    def __init__(self, schema_path: Optional[Path] = None):
        """
        Initialize module validator.

        Args:
            schema_path: Path to schema (uses config.paths.module_schema if None)
        """
        super().__init__(schema_path or config.paths.module_schema)

    def validate(self, data: Any, auto_repair: bool = False) -> ValidationResult:
        """
        Validate a module with domain-specific checks.

        Args:
            data: Module data to validate
            auto_repair: Whether to attempt automatic repairs

        Returns:
            ValidationResult
        """
        result = super().validate(data, auto_repair=auto_repair)

        if not result.valid:
            return result

        sections = result.data["content_structure"]["sections"]
        duplicate_ids = self._find_duplicate_ids(sections)
        if duplicate_ids:
            dups_str = ", ".join(sorted(duplicate_ids))
            return ValidationResult(
                valid=False,
                errors=[f"Duplicate section IDs found: {dups_str} (IDs must be unique)"],
                data=result.data,
                repairs=result.repairs,
            )

        return result

    def _attempt_repair(self, data: dict, errors: list[str]) -> tuple[dict, list[str]]:
        from ..models.module_matching import LEARNING_STYLE_TAGS

        repaired, repairs = super()._attempt_repair(data, errors)

        structure = repaired.get("content_structure")
        if not isinstance(structure, dict):
            structure = repaired["content_structure"] = {}
            repairs.append("Created missing 'content_structure' object")
        if not isinstance(structure.get("sections"), list):
            structure["sections"] = []
            repairs.append("Created missing 'content_structure.sections' array")

        if "target_learning_styles" in repaired:
            tags = self._normalize_tags(repaired["target_learning_styles"], LEARNING_STYLE_TAGS)
            if tags != repaired["target_learning_styles"]:
                repaired["target_learning_styles"] = tags
                repairs.append(f"Normalized target_learning_styles = {tags}")

        for i, section in enumerate(structure["sections"], start=1):
            if not isinstance(section, dict):
                continue

            if not section.get("id"):
                section["id"] = f"section-{i}"
                repairs.append(f"Generated section ID: section-{i}")

            if "position" not in section:
                section["position"] = i
                repairs.append(f"Set section '{section['id']}' position = {i}")

            if "learning_style_tags" in section:
                tags = self._normalize_tags(section["learning_style_tags"], self.SECTION_TAGS)
                if tags != section["learning_style_tags"]:
                    section["learning_style_tags"] = tags
                    repairs.append(f"Normalized section '{section['id']}' learning_style_tags = {tags}")

        return repaired, repairs

    @staticmethod
    def _normalize_tags(tags: Any, allowed: tuple[str, ...]) -> list[str]:
        """
        Convert module names to tags, lowercase, drop unknown tags and duplicates.

        Example:
            ["Visual", "AUDITORY", "smell", "visual"] -> ["visual", "auditory"]
        """
        from ..models.module_matching import MODULE_TO_STYLE_MAP

        if not isinstance(tags, list):
            return []

        normalized: list[str] = []
        for tag in tags:
            if not isinstance(tag, str):
                continue
            tag = MODULE_TO_STYLE_MAP.get(tag, tag).strip().lower()
            if tag in allowed and tag not in normalized:
                normalized.append(tag)
        return normalized

    def _find_duplicate_ids(self, sections: list[dict]) -> set[str]:
        from collections import Counter

        counts = Counter(s["id"] for s in sections)
        return {i for i, c in counts.items() if c > 1}


class LearnerProfileValidator(SchemaValidator):
    """
    Validator for learner profile data with profile-specific checks.

    Features:
    - JSON Schema validation
    - Learning type consistent with number of preferred modules
    - Dominant learning style present among preferred modules
    """

    def __init__(self, schema_path: Optional[Path] = None):
        """Initialize validator with learner profile schema."""
        super().__init__(schema_path or config.paths.learner_profile_schema)

    def validate(self, data: Any, auto_repair: bool = False) -> ValidationResult:
        """
        Validate learner profile with profile-specific checks.

        Args:
            data: Learner profile data
            auto_repair: Whether to attempt automatic repairs

        Returns:
            ValidationResult
        """
        from ..models.module_matching import STYLE_TO_MODULE_MAP
        from ..models.vark_assessment import LEARNING_TYPES

        result = super().validate(data, auto_repair=auto_repair)

        if not result.valid:
            return result

        learning = result.data["learning_profile"]
        preferred = learning["preferred_modules"]
        profile_errors = []

        # Check 1: learning type matches number of preferences
        learning_type = learning.get("learning_type")
        expected_type = LEARNING_TYPES.get(len(preferred))
        if learning_type and expected_type and learning_type != expected_type:
            profile_errors.append(
                f"Learning type mismatch: {len(preferred)} preferred module(s) "
                f"implies '{expected_type}', got '{learning_type}'"
            )

        # Check 2: dominant style should be one of the preferences
        style = learning.get("learning_style")
        if style and preferred and STYLE_TO_MODULE_MAP[style] not in preferred:
            profile_errors.append(
                f"Dominant learning style '{style}' not among preferred modules {preferred}"
            )

        return ValidationResult(
            valid=not profile_errors,
            errors=profile_errors,
            data=result.data,
            repairs=result.repairs,
        )

    def _attempt_repair(self, data: dict, errors: list[str]) -> tuple[dict, list[str]]:
        repaired, repairs = super()._attempt_repair(data, errors)

        if not isinstance(repaired.get("meta"), dict):
            repaired["meta"] = {}
            repairs.append("Created missing 'meta' object")
        if "schema_version" not in repaired["meta"]:
            repaired["meta"]["schema_version"] = 1
            repairs.append("Added meta.schema_version = 1")
        if "created_at" not in repaired["meta"]:
            timestamp = datetime.now(timezone.utc).isoformat()
            repaired["meta"]["created_at"] = timestamp
            repairs.append(f"Added meta.created_at = {timestamp}")

        learning = repaired.get("learning_profile")
        if isinstance(learning, dict) and isinstance(learning.get("preferred_modules"), list):
            deduped = list(dict.fromkeys(
                m for m in learning["preferred_modules"] if isinstance(m, str)
            ))
            if deduped != learning["preferred_modules"]:
                learning["preferred_modules"] = deduped
                repairs.append(f"Deduplicated preferred_modules = {deduped}")

        return repaired, repairs


# Convenience functions for quick validation
def validate_module_data(data: Any, auto_repair: bool = False) -> ValidationResult:
    """
    Quick validation of VARK module data.

    Example:
        result = validate_module_data(module_dict)
        if result:
            print("Valid module!")
        else:
            print("Errors:", result.errors)
    """
    return VARKModuleValidator().validate(data, auto_repair=auto_repair)


def validate_learner_profile(data: Any, auto_repair: bool = False) -> ValidationResult:
    """
    Quick validation of learner profile data.

    Example:
        result = validate_learner_profile(profile_dict)
        if result:
            print("Valid profile!")
        else:
            print("Errors:", result.errors)
    """
    return LearnerProfileValidator().validate(data, auto_repair=auto_repair)
