"""
Data models for VARK-personalised learning.

This module contains core data models:
- module_matching: Preferred module <-> learning style mapping and content gating
- LearnerModel: Student profiles with learning preferences
- VARKResult: Scored VARK onboarding questionnaire
"""

from .module_matching import (
    MODULE_TO_STYLE_MAP,
    STYLE_TO_MODULE_MAP,
    can_access_content,
    filter_by_preference,
    is_module_locked,
    label_for,
    map_modules_to_styles,
    map_styles_to_modules,
)
from .learner_profile import LearnerModel
from .vark_assessment import VARKResult, evaluate_vark

__all__ = [
    "MODULE_TO_STYLE_MAP",
    "STYLE_TO_MODULE_MAP",
    "can_access_content",
    "filter_by_preference",
    "is_module_locked",
    "label_for",
    "map_modules_to_styles",
    "map_styles_to_modules",
    "LearnerModel",
    "VARKResult",
    "evaluate_vark",
]
