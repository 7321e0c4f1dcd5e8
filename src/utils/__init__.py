"""
Utility modules for VARK-personalised learning.

This module contains utility functions:
- validation: JSON Schema validation with auto-repair
- section_matcher: Per-section learning style filtering and ranking
- persistence: Module JSON export/import
- logging_config: Logging setup
"""

from .validation import (
    ValidationResult,
    VARKModuleValidator,
    LearnerProfileValidator,
    validate_module_data,
    validate_learner_profile,
)
from .section_matcher import (
    normalize_preferred_modules,
    section_matches_preferences,
    filter_sections_by_preferences,
    get_section_match_score,
    sort_sections_by_relevance,
    get_relevant_sections,
    get_section_match_stats,
)
from .persistence import (
    ModuleImportError,
    export_module_to_json,
    import_module_from_json,
    create_sample_module,
    export_sample_template,
)
from .logging_config import configure_logging

__all__ = [
    # Validation
    "ValidationResult",
    "VARKModuleValidator",
    "LearnerProfileValidator",
    "validate_module_data",
    "validate_learner_profile",
    # Section matching
    "normalize_preferred_modules",
    "section_matches_preferences",
    "filter_sections_by_preferences",
    "get_section_match_score",
    "sort_sections_by_relevance",
    "get_relevant_sections",
    "get_section_match_stats",
    # Module JSON
    "ModuleImportError",
    "export_module_to_json",
    "import_module_from_json",
    "create_sample_module",
    "export_sample_template",
    # Logging
    "configure_logging",
]
