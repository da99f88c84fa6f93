"""
Request Schemas for Wizard API Validation.

This module defines Pydantic models for validating the payloads the frontend
sends to the wizard endpoints. Field-level errors are turned into inline
messages by the validation exception handler.

Key Models:
    - BackgroundForm: Step 1 form (personal and professional background)
    - SelectOptionRequest: Toggle an option of a single/multiple question
    - AnswerRequest: Set a rating or free-text answer
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from skillpath.config.validation_constants import VALID_AGE_RANGE, VALID_COMPANY_SIZES
from skillpath.utils.skills import split_skill_text


class BackgroundForm(BaseModel):
    """
    Validates the step 1 background form.

    `current_skills` arrives as a comma-separated string (as typed by the user)
    and is split into a list of skill names by `to_patch()`.

    Example:
        {
            "full_name": "Aisyah Rahman",
            "age": 29,
            "job_title": "Data Engineer",
            ...
            "current_skills": "Python, SQL, Airflow"
        }
    """

    full_name: str = Field(min_length=2)
    age: int = Field(ge=VALID_AGE_RANGE.start, le=VALID_AGE_RANGE.stop - 1)
    job_title: str = Field(min_length=2)
    position_department: str = Field(min_length=2)
    current_responsibilities: str = Field(min_length=10)
    industry_type: str = Field(min_length=2)
    company_size: str = "Small"
    years_of_experience: float = Field(0, ge=0)
    current_salary: float = Field(0, ge=0)
    currency: str = Field("MYR", min_length=1)
    country: str = Field("Malaysia", min_length=2)
    city_state: str = Field("Kuala Lumpur", min_length=2)
    current_skills: str = Field(min_length=2)
    career_aspirations: Optional[str] = ""
    skills_to_develop: Optional[str] = ""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "full_name": "Aisyah Rahman",
                "age": 29,
                "job_title": "Data Engineer",
                "position_department": "Engineering",
                "current_responsibilities": "Build and maintain batch pipelines",
                "industry_type": "Technology",
                "company_size": "Medium",
                "years_of_experience": 5,
                "current_salary": 9000,
                "currency": "MYR",
                "country": "Malaysia",
                "city_state": "Kuala Lumpur",
                "current_skills": "Python, SQL, Airflow",
            }
        },
    )

    @field_validator("company_size")
    @classmethod
    def validate_company_size(cls, v: str) -> str:
        if v not in VALID_COMPANY_SIZES:
            raise ValueError(
                f"Invalid company size: {v}. Valid sizes: {sorted(VALID_COMPANY_SIZES)}"
            )
        return v

    @field_validator("current_skills")
    @classmethod
    def validate_current_skills(cls, v: str) -> str:
        """Require at least one non-empty skill name."""
        if not split_skill_text(v):
            raise ValueError("Please list at least one skill")
        return v

    def to_patch(self) -> Dict[str, Any]:
        """Return the form as a Profile patch with skills split into names."""
        data = self.model_dump()
        data["current_skills"] = split_skill_text(self.current_skills)
        data["career_aspirations"] = self.career_aspirations or ""
        data["skills_to_develop"] = self.skills_to_develop or ""
        return data


class SelectOptionRequest(BaseModel):
    """Toggle an option of the current single or multiple choice question."""

    option: str = Field(min_length=1)


class AnswerRequest(BaseModel):
    """Set the answer of the current rating or text question."""

    answer: Union[int, str]

