"""
Shared pytest fixtures and configuration for the VARK matching tests.

This file is automatically discovered by pytest and provides
fixtures available to all tests.
"""

import pytest
import sys
from pathlib import Path

# Make the project root importable so tests can use `src.` imports
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def catalog():
    """
    Fixture providing a small VARK module catalog as returned by the API.

    Returns:
        list[dict]: Modules with assorted target_learning_styles
    """
    return [
        {"id": "mod-visual", "title": "Cell Division in Pictures", "target_learning_styles": ["visual"]},
        {"id": "mod-hands-on", "title": "Mitosis Lab", "target_learning_styles": ["kinesthetic"]},
        {"id": "mod-untagged", "title": "Course Overview", "target_learning_styles": []},
        {"id": "mod-podcast", "title": "Meiosis Podcast", "target_learning_styles": ["auditory", "reading_writing"]},
        {"id": "mod-legacy", "title": "Legacy Module"},
    ]


@pytest.fixture
def sections():
    """
    Fixture providing module content sections with learning style tags.

    Returns:
        list[dict]: Sections in their authored order
    """
    return [
        {"id": "s1", "title": "Welcome", "content_type": "text", "learning_style_tags": ["everyone"]},
        {"id": "s2", "title": "Diagram Walkthrough", "content_type": "diagram", "learning_style_tags": ["visual"]},
        {"id": "s3", "title": "Narrated Lesson", "content_type": "audio", "learning_style_tags": ["auditory"]},
        {"id": "s4", "title": "Video With Transcript", "content_type": "video",
         "learning_style_tags": ["visual", "auditory"]},
        {"id": "s5", "title": "Summary", "content_type": "text", "learning_style_tags": []},
    ]


@pytest.fixture
def valid_module():
    """
    Fixture providing a valid VARK module.

    Returns:
        dict: A module that passes schema validation
    """
    return {
        "title": "Cellular Reproduction",
        "description": "Mitosis and meiosis",
        "difficulty_level": "beginner",
        "target_learning_styles": ["visual", "auditory"],
        "content_structure": {
            "sections": [
                {
                    "id": "section-1",
                    "title": "Introduction",
                    "content_type": "text",
                    "content_data": {"text": "Cells divide."},
                    "position": 1,
                    "learning_style_tags": ["everyone"],
                },
                {
                    "id": "section-2",
                    "title": "Mitosis Animation",
                    "content_type": "video",
                    "content_data": {"video_url": "https://example.com/mitosis.mp4"},
                    "position": 2,
                    "learning_style_tags": ["visual"],
                },
            ],
        },
    }


@pytest.fixture
def tmp_data_dir(tmp_path, monkeypatch):
    """
    Fixture pointing the config data directories at a temporary location.

    Returns:
        Path: Temporary data directory
    """
    from src.config import config

    monkeypatch.setattr(config.paths, "data_dir", tmp_path)
    monkeypatch.setattr(config.paths, "profiles_dir", tmp_path / "profiles")
    monkeypatch.setattr(config.paths, "modules_dir", tmp_path / "modules")
    return tmp_path


# Pytest hooks for better test output


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
