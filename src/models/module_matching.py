"""
Module matching: learning-style compatibility between students and content.

Students declare preferred modules ("Visual", "Aural", ...); content items
(VARK modules, lessons) are tagged with learning style tags ("visual",
"auditory", ...). This module maps between the two vocabularies and decides
which content a student may see.

Every function here is pure. Empty, missing or unrecognised values resolve to
a permissive default instead of raising.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Literal, Mapping, Optional, Sequence

# Type aliases for clarity
PreferredModule = Literal["Visual", "Aural", "Read/Write", "Kinesthetic", "General Module"]
LearningStyleTag = Literal["visual", "auditory", "reading_writing", "kinesthetic", "general"]

# Student preferred module -> content learning style tag
MODULE_TO_STYLE_MAP: Mapping[str, str] = MappingProxyType(
    {
        "Visual": "visual",
        "Aural": "auditory",
        "Read/Write": "reading_writing",
        "Kinesthetic": "kinesthetic",
        "General Module": "general",
    }
)

# Reverse mapping, derived so the two tables can never drift apart
STYLE_TO_MODULE_MAP: Mapping[str, str] = MappingProxyType(
    {style: module for module, style in MODULE_TO_STYLE_MAP.items()}
)

PREFERRED_MODULES: tuple[str, ...] = tuple(MODULE_TO_STYLE_MAP)
LEARNING_STYLE_TAGS: tuple[str, ...] = tuple(STYLE_TO_MODULE_MAP)

DEFAULT_STYLES_KEY = "target_learning_styles"

# Badge styling tokens (Tailwind classes) per preferred module
NEUTRAL_BADGE = "bg-gray-100 text-gray-800 border-gray-200"
MODULE_BADGE_CLASSES: Mapping[str, str] = MappingProxyType(
    {
        "Visual": "bg-blue-100 text-blue-800 border-blue-200",
        "Aural": "bg-green-100 text-green-800 border-green-200",
        "Read/Write": "bg-purple-100 text-purple-800 border-purple-200",
        "Kinesthetic": "bg-orange-100 text-orange-800 border-orange-200",
        "General Module": NEUTRAL_BADGE,
    }
)


def _lookup(table: Mapping[str, str], key: Any) -> Optional[str]:
    """Table lookup that treats non-string keys as unknown."""
    if not isinstance(key, str):
        return None
    return table.get(key)


def get_style_tags(item: Any, styles_key: str = DEFAULT_STYLES_KEY) -> Optional[Sequence[str]]:
    """
    Read the learning style tags of a content item.

    Works for plain dicts (rows from the API) as well as objects exposing the
    tags as an attribute.

    Args:
        item: Content item (mapping or object)
        styles_key: Field holding the tags

    Returns:
        The tag sequence, or None if the item carries none
    """
    if isinstance(item, Mapping):
        return item.get(styles_key)
    return getattr(item, styles_key, None)


def can_access_content(
    preferred_modules: Optional[Sequence[str]],
    content_styles: Optional[Sequence[str]],
) -> bool:
    """
    Check whether a student may access content based on preferred modules.

    Args:
        preferred_modules: Student's preferred modules (e.g. ["Visual", "Aural"])
        content_styles: Content's learning style tags (e.g. ["visual", "kinesthetic"])

    Returns:
        True if the student has no preferences, the content has no tags, or
        at least one preferred module maps to one of the content's tags

    Example:
        >>> can_access_content(["Visual", "Aural"], ["kinesthetic", "auditory"])
        True
        >>> can_access_content(["Visual"], ["auditory"])
        False
    """
    # No preferences set: show everything
    if not preferred_modules:
        return True

    # Untagged content is visible to every student
    if not content_styles:
        return True

    return any(
        style is not None and style in content_styles
        for style in (_lookup(MODULE_TO_STYLE_MAP, module) for module in preferred_modules)
    )


def map_modules_to_styles(preferred_modules: Optional[Iterable[str]]) -> list[str]:
    """
    Convert preferred modules to learning style tags.

    Unknown modules are dropped; order and duplicates are kept.

    Example:
        >>> map_modules_to_styles(["Visual", "Unknown", "Aural"])
        ['visual', 'auditory']
    """
    if not preferred_modules:
        return []
    styles = (_lookup(MODULE_TO_STYLE_MAP, module) for module in preferred_modules)
    return [style for style in styles if style is not None]


def map_styles_to_modules(learning_styles: Optional[Iterable[str]]) -> list[str]:
    """
    Convert learning style tags back to preferred module names.

    Unknown tags are dropped; order and duplicates are kept.

    Example:
        >>> map_styles_to_modules(["reading_writing", "everyone"])
        ['Read/Write']
    """
    if not learning_styles:
        return []
    modules = (_lookup(STYLE_TO_MODULE_MAP, style) for style in learning_styles)
    return [module for module in modules if module is not None]


def filter_by_preference(
    content_items: Iterable[Any],
    preferred_modules: Optional[Iterable[str]],
    styles_key: str = DEFAULT_STYLES_KEY,
) -> list[Any]:
    """
    Filter content items down to those a student may access.

    Items are returned as-is (never copied or mutated) in their original order.

    Args:
        content_items: VARK modules, lessons, ... (dicts or objects)
        preferred_modules: Student's preferred modules (any iterable,
            including one-shot generators)
        styles_key: Field holding each item's learning style tags

    Returns:
        All items when the student has no preferences, otherwise the
        accessible ones
    """
    # Materialise once; every item is checked against the same preferences
    preferences = tuple(preferred_modules) if preferred_modules else ()
    if not preferences:
        return list(content_items)

    return [
        item
        for item in content_items
        if can_access_content(preferences, get_style_tags(item, styles_key))
    ]


def _record_field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def is_module_locked(module: Any, progress: Optional[Iterable[Any]]) -> bool:
    """
    Check whether a module is locked behind its prerequisite.

    A module naming a ``prerequisite_module_id`` stays locked until the
    student's progress record for that prerequisite is completed, either by
    status or by reaching 100%.

    Args:
        module: VARK module (mapping or object)
        progress: Student's progress records, each with ``module_id``,
            ``status`` and ``progress_percentage``

    Returns:
        False if the module has no prerequisite, True if the prerequisite
        has no progress record or is not yet completed

    Example:
        >>> is_module_locked({"id": "m2", "prerequisite_module_id": "m1"}, [])
        True
        >>> is_module_locked({"id": "m1"}, [])
        False
    """
    prerequisite_id = _record_field(module, "prerequisite_module_id")
    if not prerequisite_id:
        return False

    record = next(
        (r for r in (progress or ()) if _record_field(r, "module_id") == prerequisite_id),
        None,
    )
    if record is None:
        return True

    completed = (
        _record_field(record, "status") == "completed"
        or _record_field(record, "progress_percentage") == 100
    )
    return not completed


def label_for(module_or_style: Any) -> str:
    """
    Get the badge styling token for a preferred module or style tag.

    Args:
        module_or_style: "Visual", "visual", "Read/Write", ...

    Returns:
        Badge CSS classes; unknown input gets the neutral badge
    """
    module = _lookup(STYLE_TO_MODULE_MAP, module_or_style) or module_or_style
    return _lookup(MODULE_BADGE_CLASSES, module) or NEUTRAL_BADGE
