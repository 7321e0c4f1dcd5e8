"""
Unit tests for module matching: preferred module <-> learning style mapping.

Tests:
- Access decisions (empty preferences, untagged content, any-match)
- Mapping in both directions with unknown values dropped
- Catalog filtering
- Prerequisite locking
- Badge labels
"""

from dataclasses import dataclass, field

import pytest

from src.models.module_matching import (
    MODULE_TO_STYLE_MAP,
    NEUTRAL_BADGE,
    PREFERRED_MODULES,
    STYLE_TO_MODULE_MAP,
    can_access_content,
    filter_by_preference,
    get_style_tags,
    is_module_locked,
    label_for,
    map_modules_to_styles,
    map_styles_to_modules,
)


@dataclass
class Lesson:
    title: str
    target_learning_styles: list = field(default_factory=list)


class TestMappingTables:
    """Test the fixed lookup tables."""

    def test_tables_are_exact_inverses(self):
        """Test forward and reverse maps invert each other."""
        assert len(MODULE_TO_STYLE_MAP) == len(STYLE_TO_MODULE_MAP) == 5
        for module, style in MODULE_TO_STYLE_MAP.items():
            assert STYLE_TO_MODULE_MAP[style] == module

    def test_tables_are_read_only(self):
        """Test tables cannot be mutated."""
        with pytest.raises(TypeError):
            MODULE_TO_STYLE_MAP["Olfactory"] = "smell"
        with pytest.raises(TypeError):
            STYLE_TO_MODULE_MAP["visual"] = "Aural"

    @pytest.mark.parametrize("module", PREFERRED_MODULES)
    def test_round_trip(self, module):
        """Test each module survives a trip through its style tag."""
        assert map_styles_to_modules(map_modules_to_styles([module])) == [module]


class TestCanAccessContent:
    """Test access decisions."""

    @pytest.mark.parametrize("preferences", [None, []])
    @pytest.mark.parametrize("styles", [None, [], ["visual"], ["kinesthetic", "general"]])
    def test_no_preferences_grants_access(self, preferences, styles):
        """Test students without preferences see everything."""
        assert can_access_content(preferences, styles) is True

    @pytest.mark.parametrize("styles", [None, []])
    def test_untagged_content_is_visible(self, styles):
        """Test untagged content is visible to every student."""
        assert can_access_content(["Kinesthetic"], styles) is True

    def test_matching_style(self):
        assert can_access_content(["Visual"], ["visual"]) is True

    def test_non_matching_style(self):
        assert can_access_content(["Visual"], ["auditory"]) is False

    def test_any_preference_matches(self):
        """Test one matching preference out of several is enough."""
        assert can_access_content(["Visual", "Aural"], ["kinesthetic", "auditory"]) is True

    def test_general_module_matches_general_tag_only(self):
        assert can_access_content(["General Module"], ["general"]) is True
        assert can_access_content(["General Module"], ["visual"]) is False

    def test_unknown_preferences_never_match(self):
        """Test malformed preferences fail to match instead of raising."""
        assert can_access_content(["Olfactory", "visual", 42, None], ["visual"]) is False

    def test_tags_are_case_sensitive(self):
        assert can_access_content(["Visual"], ["Visual"]) is False


class TestMapping:
    """Test conversions between preferred modules and style tags."""

    def test_modules_to_styles(self):
        result = map_modules_to_styles(["Visual", "Read/Write", "Kinesthetic"])
        assert result == ["visual", "reading_writing", "kinesthetic"]

    def test_styles_to_modules(self):
        result = map_styles_to_modules(["auditory", "general"])
        assert result == ["Aural", "General Module"]

    def test_unknown_values_dropped(self):
        assert map_modules_to_styles(["Unknown"]) == []
        assert map_styles_to_modules(["everyone", "Visual"]) == []

    def test_order_and_duplicates_preserved(self):
        result = map_modules_to_styles(["Aural", "Visual", "Aural"])
        assert result == ["auditory", "visual", "auditory"]

    @pytest.mark.parametrize("empty", [None, []])
    def test_empty_input(self, empty):
        assert map_modules_to_styles(empty) == []
        assert map_styles_to_modules(empty) == []


class TestFilterByPreference:
    """Test catalog filtering."""

    def test_no_preferences_returns_everything(self, catalog):
        """Test catalog is returned unchanged without preferences."""
        assert filter_by_preference(catalog, []) == catalog
        assert filter_by_preference(catalog, None) == catalog

    def test_filters_and_keeps_order(self):
        a = {"id": "A", "target_learning_styles": ["visual"]}
        b = {"id": "B", "target_learning_styles": ["kinesthetic"]}
        c = {"id": "C", "target_learning_styles": []}

        assert filter_by_preference([a, b, c], ["Visual"]) == [a, c]

    def test_items_returned_by_identity(self, catalog):
        """Test filtering neither copies nor mutates items."""
        before = [dict(item) for item in catalog]
        result = filter_by_preference(catalog, ["Aural"])

        assert [item["id"] for item in result] == ["mod-untagged", "mod-podcast", "mod-legacy"]
        assert all(any(r is item for item in catalog) for r in result)
        assert catalog == before

    def test_objects_with_attributes(self):
        """Test items exposing tags as attributes."""
        lessons = [Lesson("Lab", ["kinesthetic"]), Lesson("Slides", ["visual"])]
        result = filter_by_preference(lessons, ["Kinesthetic"])
        assert [lesson.title for lesson in result] == ["Lab"]

    def test_custom_styles_key(self):
        sections = [
            {"id": "s1", "learning_style_tags": ["auditory"]},
            {"id": "s2", "learning_style_tags": ["visual"]},
        ]
        result = filter_by_preference(sections, ["Aural"], styles_key="learning_style_tags")
        assert [s["id"] for s in result] == ["s1"]

    def test_accepts_generators(self, catalog):
        result = filter_by_preference((item for item in catalog), ["Kinesthetic"])
        assert [item["id"] for item in result] == ["mod-hands-on", "mod-untagged", "mod-legacy"]

    def test_one_shot_preferences_apply_to_every_item(self):
        """Test a generator of preferences is not used up by the first item."""
        items = [
            {"id": "A", "target_learning_styles": ["visual"]},
            {"id": "B", "target_learning_styles": ["visual"]},
        ]
        result = filter_by_preference(items, (m for m in ["Visual"]))
        assert [item["id"] for item in result] == ["A", "B"]

    def test_get_style_tags_missing(self):
        assert get_style_tags({}) is None
        assert get_style_tags(object()) is None


@dataclass
class Progress:
    module_id: str
    status: str = "not_started"
    progress_percentage: int = 0


class TestIsModuleLocked:
    """Test prerequisite locking."""

    @pytest.mark.parametrize("prerequisite", [None, ""])
    def test_no_prerequisite_never_locked(self, prerequisite):
        module = {"id": "m2", "prerequisite_module_id": prerequisite}
        assert not is_module_locked(module, [])
        assert not is_module_locked({"id": "m1"}, None)

    def test_prerequisite_without_progress_is_locked(self):
        module = {"id": "m2", "prerequisite_module_id": "m1"}
        other = {"module_id": "m9", "status": "completed", "progress_percentage": 100}
        assert is_module_locked(module, [])
        assert is_module_locked(module, [other])

    @pytest.mark.parametrize(
        "status,percentage,locked",
        [
            ("not_started", 0, True),
            ("in_progress", 99, True),
            ("in_progress", 100, False),
            ("completed", 40, False),
            ("completed", 100, False),
        ],
    )
    def test_prerequisite_completion(self, status, percentage, locked):
        """Test completion by status or by reaching 100%."""
        module = {"id": "m2", "prerequisite_module_id": "m1"}
        progress = [{"module_id": "m1", "status": status, "progress_percentage": percentage}]
        assert is_module_locked(module, progress) is locked

    def test_object_records(self):
        """Test modules and progress records exposing attributes."""

        @dataclass
        class Module:
            id: str
            prerequisite_module_id: str

        module = Module("m2", "m1")
        assert is_module_locked(module, [Progress("m1", "in_progress", 50)])
        assert not is_module_locked(module, [Progress("m1", "completed", 100)])


class TestLabelFor:
    """Test badge labels."""

    def test_visual_badge(self):
        assert "blue" in label_for("Visual")

    def test_each_module_has_distinct_badge_except_general(self):
        badges = {label_for(m) for m in ["Visual", "Aural", "Read/Write", "Kinesthetic"]}
        assert len(badges) == 4
        assert label_for("General Module") == NEUTRAL_BADGE

    def test_style_tag_resolves_to_module_badge(self):
        assert label_for("auditory") == label_for("Aural")

    @pytest.mark.parametrize("value", ["NotAModality", "", None, 7])
    def test_unknown_gets_neutral_badge(self, value):
        assert label_for(value) == NEUTRAL_BADGE
