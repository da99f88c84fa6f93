"""
Generates the skill-assessment questions from the user's profile.

CLASSES:
    QuestionGeneratorAgent

FUNCTIONS:
    generate_questions   (public)
    fallback_questions   (module level, public)
"""

import json
from typing import Any, Dict, List

from pydantic import ValidationError

from skillpath.config.profile_schemas import Question, QuestionSet
from skillpath.config.prompts import (
    QUESTION_SYSTEM_PROMPT as SYSTEM_PROMPT,
    QUESTION_USER_PROMPT as USER_PROMPT_BASE,
)
from skillpath.config.settings import ai_enabled
from skillpath.utils.exceptions import ExternalServiceError
from skillpath.utils.llms import call_llm, parse_json_object
from skillpath.utils.logger import get_logger
from skillpath.utils.skills import skill_names

logger = get_logger(__name__)

# Profile keys sent to the model
PROMPT_PROFILE_KEYS = (
    "full_name",
    "job_title",
    "position_department",
    "current_responsibilities",
    "industry_type",
    "company_size",
    "years_of_experience",
    "country",
    "city_state",
    "career_aspirations",
    "skills_to_develop",
)


def fallback_questions(job_title: str) -> List[Question]:
    """Return the built-in question set, parameterized only by job title."""
    title = job_title or "Professional"
    return [
        Question(
            id=1,
            text=f"Based on your role as {title}, how would you rate your proficiency in core technical skills?",
            type="rating",
        ),
        Question(
            id=2,
            text="Which of these advanced tools have you used in the past year?",
            type="multiple",
            options=[
                "Cloud Services",
                "Data Visualization",
                "DevOps Pipelines",
                "AI/ML Libraries",
            ],
        ),
        Question(
            id=3,
            text="Describe a complex project you led recently.",
            type="text",
        ),
    ]


class QuestionGeneratorAgent:
    """Generates assessment questions from the user's profile.

    Responsibilities:
    1. Call the LLM with the profile (when AI is enabled)
    2. Strictly validate the response against the question schema
    3. Fall back to the built-in question set on any failure

    Args:
        max_retries (int): Extra LLM attempts when the response fails validation.
    """

    def __init__(self, max_retries: int = 1):
        self.max_retries = max_retries

    # ------------------------------
    # Public interface
    # ------------------------------
    def generate_questions(self, profile: Dict[str, Any]) -> List[Question]:
        """Generate the assessment questions.

        Never raises: when AI is disabled or every attempt fails, the built-in
        question set for the profile's job title is returned.

        Args:
            profile (Dict[str, Any]): The current Profile.

        Returns:
            List[Question]: Non-empty list with unique ids.
        """

        job_title = profile.get("job_title", "")

        if not ai_enabled():
            logger.info("AI disabled, using built-in questions")
            return fallback_questions(job_title)

        user_prompt = USER_PROMPT_BASE.format(
            profile_json=json.dumps(self._prompt_profile(profile), default=str)
        )

        for attempt in range(self.max_retries + 1):
            try:
                raw_response = call_llm(SYSTEM_PROMPT, user_prompt)
                data = parse_json_object(raw_response)
                questions = QuestionSet.model_validate(data).questions
                logger.info(f"Generated {len(questions)} assessment questions")
                return questions

            except (ExternalServiceError, ValidationError) as e:
                logger.warning(
                    f"Question generation returned an unusable response "
                    f"(attempt {attempt + 1}/{self.max_retries + 1}): {str(e)[:300]}"
                )
            except Exception as e:
                # Network and API errors are not retried here, call_llm already retries them
                logger.warning(
                    "Question generation failed, using built-in questions",
                    extra={
                        "extra_fields": {
                            "error": str(e),
                            "error_type": type(e).__name__,
                        }
                    },
                )
                break

        return fallback_questions(job_title)

    # ------------------------------
    # Internal functions
    # ------------------------------
    @staticmethod
    def _prompt_profile(profile: Dict[str, Any]) -> Dict[str, Any]:
        data = {key: profile.get(key) for key in PROMPT_PROFILE_KEYS}
        data["current_skills"] = skill_names(profile.get("current_skills"))
        return data
