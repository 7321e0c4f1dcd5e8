"""
Complete workflow example: Onboarding → Profile → Content Gating

Demonstrates end-to-end use of the library:
1. Score a VARK onboarding questionnaire
2. Store the result on a learner profile
3. Filter a module catalog by the learner's preferred modules
4. Select and rank the sections of one module
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.models.learner_profile import LearnerModel
from src.models.module_matching import is_module_locked, label_for
from src.models.vark_assessment import LEARNING_STATEMENTS, evaluate_vark
from src.utils.logging_config import configure_logging
from src.utils.persistence import create_sample_module
from src.utils.section_matcher import get_section_match_stats


CATALOG = [
    {"id": "mod-1", "title": "Cell Division in Pictures", "target_learning_styles": ["visual"]},
    {"id": "mod-2", "title": "Mitosis Lab", "target_learning_styles": ["kinesthetic"]},
    {
        "id": "mod-3",
        "title": "Meiosis Podcast",
        "target_learning_styles": ["auditory"],
        "prerequisite_module_id": "mod-1",
    },
    {"id": "mod-4", "title": "Course Overview", "target_learning_styles": []},
]

PROGRESS = [
    {"module_id": "mod-1", "status": "in_progress", "progress_percentage": 60},
]


def main():
    configure_logging()

    # ==================== Step 1: VARK Onboarding ====================
    print("=" * 60)
    print("STEP 1: Scoring VARK questionnaire")
    print("=" * 60)

    ratings = {"visual": 5, "auditory": 4, "reading_writing": 2, "kinesthetic": 3}
    answers = {s.id: ratings[s.category] for s in LEARNING_STATEMENTS}
    result = evaluate_vark(answers)

    print(f"Scores: {result.scores}")
    print(f"Preferred modules: {result.preferred_modules} ({result.learning_type})\n")

    # ==================== Step 2: Learner Profile ====================
    print("=" * 60)
    print("STEP 2: Storing the result on a learner profile")
    print("=" * 60)

    learner = LearnerModel(name="Alice Johnson")
    learner.apply_vark_result(result)
    print(f"✓ {learner!r}\n")

    # ==================== Step 3: Catalog Filtering ====================
    print("=" * 60)
    print("STEP 3: Modules available to the learner")
    print("=" * 60)

    for module in learner.accessible_modules(CATALOG):
        lock = " (locked)" if is_module_locked(module, PROGRESS) else ""
        print(f"  - {module['title']}{lock}")
    for name in learner.preferred_modules:
        print(f"  badge[{name}] = {label_for(name)}")
    print()

    # ==================== Step 4: Section Selection ====================
    print("=" * 60)
    print("STEP 4: Ranking the sections of one module")
    print("=" * 60)

    module = create_sample_module()
    sections = module["content_structure"]["sections"]
    stats = get_section_match_stats(sections, learner.preferred_modules)

    print(
        f"Sections matching in '{module['title']}': "
        f"{stats['matching_sections']}/{stats['total_sections']} ({stats['match_percentage']}%)"
    )
    for section in learner.relevant_sections(sections):
        print(f"  - {section['title']} {section['learning_style_tags']}")


if __name__ == "__main__":
    main()
