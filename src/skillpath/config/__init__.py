"""
Configuration Module for SkillPath.

Focused modules:

- profile_schemas.py: Profile defaults and the AI response models
- request_schemas.py: Wizard request payload models
- validation_constants.py: Steps, question types, platforms and other constants
- prompts.py: LLM prompts
- settings.py: Environment-driven settings

The Profile and constants are re-exported here. Import request schemas and
settings directly from their modules:
    from skillpath.config.request_schemas import BackgroundForm
    from skillpath.config import settings
"""

from skillpath.config.profile_schemas import (
    DEFAULT_PROFILE,
    CLEARED_ON_REASSESSMENT,
    DERIVED_FIELDS,
    AnalysisBundle,
    AssessmentAnswer,
    Course,
    PersonaProfile,
    Question,
    QuestionSet,
    RatedSkill,
    SalaryProjection,
    SkillGap,
    StudyPhase,
)

from skillpath.config.validation_constants import (
    STEP_NAMES,
    TOTAL_STEPS,
    VALID_QUESTION_TYPES,
    VALID_GAP_PRIORITIES,
    VALID_SKILL_LEVELS,
    VALID_UPLOAD_BUCKETS,
    MAX_MULTIPLE_SELECTIONS,
)

__all__ = [
    # Profile schemas
    "DEFAULT_PROFILE",
    "CLEARED_ON_REASSESSMENT",
    "DERIVED_FIELDS",
    "AnalysisBundle",
    "AssessmentAnswer",
    "Course",
    "PersonaProfile",
    "Question",
    "QuestionSet",
    "RatedSkill",
    "SalaryProjection",
    "SkillGap",
    "StudyPhase",
    # Validation constants
    "STEP_NAMES",
    "TOTAL_STEPS",
    "VALID_QUESTION_TYPES",
    "VALID_GAP_PRIORITIES",
    "VALID_SKILL_LEVELS",
    "VALID_UPLOAD_BUCKETS",
    "MAX_MULTIPLE_SELECTIONS",
]
