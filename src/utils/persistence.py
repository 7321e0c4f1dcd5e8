"""
VARK module JSON export/import with validation.

Teachers can export a module they are building to a JSON file, edit it
offline, and import it back. Imported data is checked against
vark_module.schema.json before it is handed back to the caller.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import config
from .validation import VARKModuleValidator

logger = logging.getLogger(__name__)

TEMPLATE_FILENAME = "vark-module-template.json"


class ModuleImportError(ValueError):
    """Raised when a module JSON file cannot be parsed or fails validation."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


def _drop_none(value: Any) -> Any:
    """Recursively remove None values from dicts (lists keep their length)."""
    if isinstance(value, dict):
        return {k: _drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_drop_none(v) for v in value]
    return value


def export_module_to_json(
    module_data: Dict[str, Any],
    filepath: Optional[Path | str] = None,
) -> Path:
    """
    Export module data to a JSON file.

    Args:
        module_data: Module dictionary (partial modules are allowed)
        filepath: Target file (default: <modules_dir>/vark-module-<epoch ms>.json)

    Returns:
        Path of the written file
    """
    if filepath is None:
        config.paths.modules_dir.mkdir(parents=True, exist_ok=True)
        filepath = config.paths.modules_dir / f"vark-module-{int(time.time() * 1000)}.json"

    filepath = Path(filepath)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(_drop_none(module_data), f, indent=2, ensure_ascii=False)

    logger.info("Exported module '%s' to %s", module_data.get("title"), filepath)
    return filepath


def import_module_from_json(
    filepath: Path | str,
    validate: bool = True,
    auto_repair: bool = False,
) -> Dict[str, Any]:
    """
    Import module data from a JSON file.

    Args:
        filepath: JSON file to read
        validate: Whether to validate against the module schema
        auto_repair: Whether to repair common problems (section IDs, tags)

    Returns:
        Module dictionary (repaired if auto_repair applied fixes)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ModuleImportError: If the file is not valid JSON or the module is invalid
    """
    with open(filepath, "r", encoding="utf-8") as f:
        try:
            module_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ModuleImportError("Invalid JSON file format", [str(e)]) from e

    if validate:
        result = VARKModuleValidator().validate(module_data, auto_repair=auto_repair)
        if not result.valid:
            raise ModuleImportError(
                f"Invalid module data: {', '.join(result.errors)}", result.errors
            )
        for repair in result.repairs:
            logger.info("Repaired imported module: %s", repair)
        module_data = result.data

    if not isinstance(module_data, dict):
        raise ModuleImportError("Module JSON must contain an object")

    logger.info("Imported module '%s' from %s", module_data.get("title"), filepath)
    return module_data


def create_sample_module() -> Dict[str, Any]:
    """Create a sample module template that passes validation."""
    return {
        "title": "Sample Module",
        "description": "This is a sample module template",
        "learning_objectives": ["Objective 1", "Objective 2"],
        "content_structure": {
            "sections": [
                {
                    "id": "section-sample-1",
                    "title": "Introduction",
                    "content_type": "text",
                    "content_data": {
                        "editorjs_data": {
                            "time": int(time.time() * 1000),
                            "blocks": [
                                {"type": "header", "data": {"text": "Sample Header", "level": 2}},
                                {
                                    "type": "paragraph",
                                    "data": {
                                        "text": "This is a sample paragraph. Replace this with your content."
                                    },
                                },
                            ],
                            "version": "2.28.0",
                        }
                    },
                    "position": 1,
                    "is_required": True,
                    "time_estimate_minutes": 10,
                    "learning_style_tags": ["visual", "reading_writing"],
                    "interactive_elements": [],
                    "metadata": {},
                }
            ],
            "learning_path": [],
            "prerequisites_checklist": [],
            "completion_criteria": [],
        },
        "difficulty_level": "beginner",
        "estimated_duration_minutes": 30,
        "prerequisites": [],
        "target_learning_styles": ["visual", "reading_writing"],
        "is_published": False,
    }


def export_sample_template(filepath: Optional[Path | str] = None) -> Path:
    """Write the sample module template (default: <modules_dir>/vark-module-template.json)."""
    if filepath is None:
        config.paths.modules_dir.mkdir(parents=True, exist_ok=True)
        filepath = config.paths.modules_dir / TEMPLATE_FILENAME
    return export_module_to_json(create_sample_module(), filepath)
