"""
Profile Schemas for the Wizard Session and AI Responses.

This module defines the Profile aggregate defaults and the Pydantic models used
to strictly validate everything that comes back from the text-generation API.
A response that fails validation is treated the same as a network failure.

Key Models:
    - Question / QuestionSet: Assessment questions (used by QuestionGeneratorAgent)
    - AssessmentAnswer: One {questionId, answer} entry
    - RatedSkill: Canonical shape of a declared skill
    - SkillGap, StudyPhase, Course, SalaryProjection, PersonaProfile
    - AnalysisBundle: Full derived-fields bundle (used by SkillAnalyzerAgent)

Key Constants:
    - DEFAULT_PROFILE: The Profile a new or reset session starts from
    - DERIVED_FIELDS: Keys returned by the analysis
    - CLEARED_ON_REASSESSMENT: Analysis results reset when the assessment is retaken
"""

import copy
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from skillpath.config.validation_constants import (
    MIN_QUESTION_OPTIONS,
    OPTION_QUESTION_TYPES,
    VALID_SKILL_LEVELS,
)

# ---------- PROFILE ----------

DEFAULT_PROFILE: Dict[str, Any] = {
    "full_name": "",
    "age": 25,
    "job_title": "",
    "position_department": "",
    "current_responsibilities": "",
    "industry_type": "",
    "company_size": "Small",
    "years_of_experience": 0,
    "current_salary": 0,
    "currency": "MYR",
    "country": "Malaysia",
    "city_state": "Kuala Lumpur",
    "career_aspirations": "",
    "skills_to_develop": "",
    "certificate_urls": [],
    "resume_url": "",
    "assessment_questions": [],
    "assessment_answers": [],
    "current_step": 1,
    # Analysis results
    "current_skills": [],
    "skill_gaps": [],
    "recommendations": "",
    "study_plan": [],
    "recommended_courses": [],
    "salary_projection": None,
    "persona_profile_data": None,
}

# Fields returned by the analysis (current_skills is rewritten as rated records)
DERIVED_FIELDS = (
    "current_skills",
    "skill_gaps",
    "recommendations",
    "study_plan",
    "recommended_courses",
    "salary_projection",
    "persona_profile_data",
)

# Analysis results reset together when the assessment is taken again.
# current_skills holds the declared skills and is kept.
CLEARED_ON_REASSESSMENT = tuple(key for key in DERIVED_FIELDS if key != "current_skills")


def default_profile() -> Dict[str, Any]:
    """Return a fresh deep copy of the default Profile."""
    return copy.deepcopy(DEFAULT_PROFILE)


def cleared_derived_fields() -> Dict[str, Any]:
    """Return a patch that resets every analysis result to its empty value."""
    return {key: copy.deepcopy(DEFAULT_PROFILE[key]) for key in CLEARED_ON_REASSESSMENT}


# ---------- ASSESSMENT ----------


class Question(BaseModel):
    """
    A single assessment question.

    Rating questions use a fixed 1-5 scale and carry no options.
    Single and multiple choice questions must carry at least two options.
    """

    id: Union[int, str]
    text: str = Field(min_length=1)
    type: Literal["rating", "single", "multiple", "text"]
    options: List[str] = []

    @model_validator(mode="after")
    def validate_options(self) -> "Question":
        if self.type in OPTION_QUESTION_TYPES:
            if len(self.options) < MIN_QUESTION_OPTIONS:
                raise ValueError(
                    f"{self.type} question {self.id} must have at least "
                    f"{MIN_QUESTION_OPTIONS} options"
                )
        else:
            self.options = []
        return self


class QuestionSet(BaseModel):
    """The `{questions: [...]}` object returned by the question generator."""

    questions: List[Question] = Field(min_length=1)

    @field_validator("questions")
    @classmethod
    def validate_unique_ids(cls, v: List[Question]) -> List[Question]:
        ids = [q.id for q in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Question ids must be unique")
        return v


class AssessmentAnswer(BaseModel):
    """One answer entry, in answer order."""

    questionId: Union[int, str]
    answer: Union[int, str, List[str]]


# ---------- ANALYSIS ----------


class RatedSkill(BaseModel):
    """Canonical shape of a declared skill."""

    name: str = Field(min_length=1)
    level: str = "Intermediate"
    relevant: bool = True

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().capitalize()
        if level not in VALID_SKILL_LEVELS:
            raise ValueError(
                f"Invalid skill level: {v}. Valid levels: {VALID_SKILL_LEVELS}"
            )
        return level


class SkillGap(BaseModel):
    name: str
    priority: Literal["Low", "Medium", "High"]
    impact: str


class StudyPhase(BaseModel):
    phase: str
    goal: str
    steps: List[str]


class Course(BaseModel):
    title: str
    platform: str
    rating: float
    duration: str
    type: str
    url: Optional[str] = None


class SalaryProjection(BaseModel):
    current: float
    projected: float
    reason: str
    reference: Optional[str] = None


class PersonaProfile(BaseModel):
    title: str
    traits: List[str]
    summary: str


class AnalysisBundle(BaseModel):
    """
    The full derived-fields bundle.

    Every field is required in the response contract. Unknown keys returned by
    the analyzer are ignored.
    """

    current_skills: List[RatedSkill]
    skill_gaps: List[SkillGap]
    recommendations: str
    study_plan: List[StudyPhase]
    recommended_courses: List[Course]
    salary_projection: SalaryProjection
    persona_profile_data: PersonaProfile

    model_config = ConfigDict(extra="ignore")

    def to_patch(self) -> Dict[str, Any]:
        """Return the bundle as a Profile patch (plain JSON-compatible dicts)."""
        return self.model_dump(mode="json")
