"""
Unit tests for learner model: profile management, preferences and content gating.
"""

import json
import threading
import uuid

import pytest
from jsonschema import ValidationError

from src.models.learner_profile import LearnerModel
from src.models.vark_assessment import VARKResult


@pytest.fixture
def vark_result():
    return VARKResult(
        scores={"visual": 24, "auditory": 21, "reading_writing": 10, "kinesthetic": 8},
        dominant_style="visual",
        preferred_modules=["Visual", "Aural"],
        learning_type="Bimodal",
    )


class TestLearnerModelCreation:
    """Test learner profile creation and initialization."""

    def test_create_default_profile(self):
        """Test creating a profile with default parameters."""
        learner = LearnerModel(name="Alice")

        assert learner.name == "Alice"
        assert learner.role == "student"
        assert learner.learner_id.startswith("learner-")
        assert learner.preferred_modules == []
        assert learner.learning_style is None
        assert learner.learning_type is None
        assert learner.onboarding_completed is False

    def test_learner_id_format(self):
        """Test learner ID follows UUID format."""
        learner = LearnerModel(name="Charlie")
        uuid.UUID(learner.learner_id.replace("learner-", ""))

    def test_initial_preferences_cleaned(self):
        """Test unknown and duplicate preferences are dropped."""
        learner = LearnerModel(
            name="Bob", preferred_modules=["Aural", "Olfactory", "Aural", "Kinesthetic"]
        )
        assert learner.preferred_modules == ["Aural", "Kinesthetic"]
        assert learner.preferred_styles == ["auditory", "kinesthetic"]

    def test_invalid_profile_rejected(self):
        """Test validation on creation rejects a bad learner ID."""
        with pytest.raises(ValidationError):
            LearnerModel(learner_id="not-a-learner-id", name="Eve")

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            LearnerModel(name="")


class TestPreferences:
    """Test preference management."""

    def test_apply_vark_result(self, vark_result):
        learner = LearnerModel(name="Dana")
        learner.apply_vark_result(vark_result)

        assert learner.onboarding_completed is True
        assert learner.learning_style == "visual"
        assert learner.preferred_modules == ["Visual", "Aural"]
        assert learner.learning_type == "Bimodal"
        learner._validate()

    def test_set_preferred_modules_updates_learning_type(self):
        learner = LearnerModel(name="Finn")
        learner.set_preferred_modules(["Visual", "Read/Write", "Kinesthetic"])

        assert learner.preferred_modules == ["Visual", "Read/Write", "Kinesthetic"]
        assert learner.learning_type == "Trimodal"

    def test_set_preferred_modules_clears_stale_dominant_style(self, vark_result):
        learner = LearnerModel(name="Gus")
        learner.apply_vark_result(vark_result)
        learner.set_preferred_modules(["Kinesthetic"])

        assert learner.learning_style is None
        learner._validate()

    def test_reset_preferences(self, vark_result):
        learner = LearnerModel(name="Hana")
        learner.apply_vark_result(vark_result)
        learner.reset_preferences()

        assert learner.preferred_modules == []
        assert learner.onboarding_completed is False

    def test_preferred_modules_returns_copy(self):
        learner = LearnerModel(name="Ivy", preferred_modules=["Visual"])
        learner.preferred_modules.append("Aural")
        assert learner.preferred_modules == ["Visual"]

    def test_concurrent_updates(self):
        """Test concurrent preference updates leave a consistent profile."""
        learner = LearnerModel(name="Jay")
        choices = [["Visual"], ["Aural", "Kinesthetic"], ["Read/Write", "Visual", "Aural"]]

        threads = [
            threading.Thread(target=learner.set_preferred_modules, args=(choices[i % 3],))
            for i in range(30)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert learner.preferred_modules in choices
        learner._validate()


class TestContentGating:
    """Test content access through the learner profile."""

    def test_new_learner_sees_everything(self, catalog):
        learner = LearnerModel(name="Kai")
        assert learner.accessible_modules(catalog) == catalog

    def test_accessible_modules(self, catalog):
        learner = LearnerModel(name="Lea", preferred_modules=["Visual"])
        result = learner.accessible_modules(catalog)
        assert [m["id"] for m in result] == ["mod-visual", "mod-untagged", "mod-legacy"]

    def test_can_access(self, catalog):
        learner = LearnerModel(name="Max", preferred_modules=["Read/Write"])
        assert learner.can_access(catalog[3])
        assert not learner.can_access(catalog[0])

    def test_relevant_sections(self, sections):
        learner = LearnerModel(name="Nia", preferred_modules=["Aural"])
        result = learner.relevant_sections(sections, filter_strict=True, sort_by_relevance=False)
        assert [s["id"] for s in result] == ["s1", "s3", "s4", "s5"]


class TestPersistence:
    """Test saving and loading profiles."""

    def test_to_dict_is_deep_copy(self):
        learner = LearnerModel(name="Oli", preferred_modules=["Visual"])
        data = learner.to_dict()
        data["learning_profile"]["preferred_modules"].append("Aural")
        assert learner.preferred_modules == ["Visual"]

    def test_save_and_load(self, tmp_path, vark_result):
        learner = LearnerModel(name="Pia", email="pia@example.com")
        learner.apply_vark_result(vark_result)

        path = learner.save(tmp_path / "pia.json")
        loaded = LearnerModel.load(path)

        assert loaded.learner_id == learner.learner_id
        assert loaded.email == "pia@example.com"
        assert loaded.preferred_modules == ["Visual", "Aural"]

    def test_save_default_location(self, tmp_data_dir):
        learner = LearnerModel(name="Quinn", preferred_modules=["Kinesthetic"])
        path = learner.save()

        assert path == tmp_data_dir / "profiles" / f"{learner.learner_id}.json"
        assert LearnerModel.load_by_id(learner.learner_id).preferred_modules == ["Kinesthetic"]

    def test_load_invalid_profile(self, tmp_path):
        learner = LearnerModel(name="Rae")
        data = learner.to_dict()
        data["learning_profile"]["preferred_modules"] = ["Smell"]

        path = tmp_path / "bad.json"
        path.write_text(json.dumps(data))

        with pytest.raises(ValidationError):
            LearnerModel.load(path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            LearnerModel.load(tmp_path / "missing.json")

    def test_repr(self):
        learner = LearnerModel(name="Sam", preferred_modules=["Aural"])
        assert "Sam" in repr(learner)
        assert "Aural" in repr(learner)
