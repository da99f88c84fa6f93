"""
Analyzes the user's skills and produces the derived-fields bundle.

CLASSES:
    SkillAnalyzerAgent

FUNCTIONS (in order of workflow):
    1. analyze              (public use)
    2. _request_analysis    (internal use)
    3. synthetic_bundle     (module level, offline fallback)
"""

import json
from typing import Any, Dict, List, Optional

from skillpath.config.profile_schemas import (
    AnalysisBundle,
    Course,
    PersonaProfile,
    RatedSkill,
    SalaryProjection,
    SkillGap,
    StudyPhase,
)
from skillpath.config.prompts import (
    ANALYSIS_SYSTEM_PROMPT as SYSTEM_PROMPT,
    ANALYSIS_USER_PROMPT as USER_PROMPT_BASE,
)
from skillpath.config.settings import ai_enabled
from skillpath.config.validation_constants import (
    FALLBACK_BASE_SALARY,
    FALLBACK_SALARY_MULTIPLIER,
)
from skillpath.utils.course_links import has_usable_url, url_for
from skillpath.utils.llms import call_llm, parse_json_object
from skillpath.utils.logger import get_logger, log_performance
from skillpath.utils.skills import normalize_skills

logger = get_logger(__name__)

SALARY_REFERENCE = "JobStreet Malaysia Salary Report 2024"


def synthetic_bundle(profile: Dict[str, Any]) -> AnalysisBundle:
    """Build a deterministic analysis from fields already in the profile.

    Only job title, declared skills and current salary are used, with fixed
    arithmetic and template strings.

    Args:
        profile: The current Profile.

    Returns:
        AnalysisBundle: The synthetic bundle, course urls included.
    """
    title = profile.get("job_title") or "Professional"
    skills = normalize_skills(profile.get("current_skills"))
    if not skills:
        skills = [RatedSkill(name="Core Skills")]
    top_skill = skills[0].name

    current_salary = _as_number(profile.get("current_salary")) or FALLBACK_BASE_SALARY

    bundle = AnalysisBundle(
        current_skills=[
            RatedSkill(name=skill.name, level="Intermediate", relevant=True)
            for skill in skills
        ],
        skill_gaps=[
            SkillGap(name=f"Advanced {title} Patterns", priority="High", impact="+20% salary"),
            SkillGap(name="Technical Leadership", priority="Medium", impact="+15% salary"),
            SkillGap(name="Cloud Architecture", priority="Medium", impact="+12% salary"),
        ],
        recommendations=(
            f"To advance as a {title}, you should focus on deepening your expertise in "
            f"{top_skill} while expanding into architectural concepts. The Malaysian market "
            "is currently valuing end-to-end ownership highly."
        ),
        study_plan=[
            StudyPhase(
                phase="Month 1",
                goal=f"{title} Fundamentals",
                steps=[f"Master advanced patterns in {top_skill}", "Review industry best practices"],
            ),
            StudyPhase(
                phase="Month 2",
                goal="Architecture & Scale",
                steps=["Learn system design principles", "Understand cloud deployment models"],
            ),
            StudyPhase(
                phase="Month 3",
                goal="Leadership",
                steps=["Mentoring junior developers", "Technical strategy documentation"],
            ),
        ],
        recommended_courses=[
            Course(
                title=f"Advanced {title} Masterclass",
                platform="Udemy",
                rating=4.8,
                duration="20 hours",
                type="Course",
            ),
            Course(
                title="System Design for Senior Engineers",
                platform="Coursera",
                rating=4.7,
                duration="4 weeks",
                type="Specialization",
            ),
            Course(
                title="Technical Leadership",
                platform="Pluralsight",
                rating=4.9,
                duration="10 hours",
                type="Course",
            ),
        ],
        salary_projection=SalaryProjection(
            current=current_salary,
            projected=current_salary * FALLBACK_SALARY_MULTIPLIER,
            reason=(
                f"Specializing in high-demand areas within {title} typically commands "
                "a 25% premium in the current market."
            ),
            reference=SALARY_REFERENCE,
        ),
        persona_profile_data=PersonaProfile(
            title=f"The Strategic {title}",
            traits=["Growth-Minded", "Technical", "Problem-Solver"],
            summary=(
                f"You are a dedicated {title} with a clear vision for growth. Your focus on "
                "bridging technical execution with strategic understanding positions you "
                "well for senior roles."
            ),
        ),
    )
    return _with_course_urls(bundle)


class SkillAnalyzerAgent:
    """Produces the skill analysis for a completed assessment.

    Responsibilities:
    1. Send the profile and the answers to the LLM (when AI is enabled)
    2. Strictly validate the response against the analysis schema
    3. Synthesize a link for every course without a usable url
    4. Replace any failure with the deterministic synthetic bundle
    """

    # ------------------------------
    # Public interface
    # ------------------------------
    def analyze(
        self,
        profile: Dict[str, Any],
        answers: Optional[List[Dict[str, Any]]] = None,
    ) -> AnalysisBundle:
        """Analyze the profile and its assessment answers.

        Never raises: errors of the external dependency (network failure,
        malformed JSON, missing field) are logged and replaced by
        synthetic_bundle(profile).

        Args:
            profile (Dict[str, Any]): The current Profile.
            answers (Optional[List[Dict]]): The assessment answers. Defaults to
                the profile's assessment_answers.

        Returns:
            AnalysisBundle: The full derived-fields bundle.
        """

        if answers is None:
            answers = profile.get("assessment_answers") or []

        if not ai_enabled():
            logger.info("AI disabled, using synthetic analysis")
            return synthetic_bundle(profile)

        try:
            with log_performance("skill_analysis", answers=len(answers)):
                bundle = self._request_analysis(profile, answers)
        except Exception as e:
            logger.warning(
                "Skill analysis failed, falling back to synthetic analysis",
                extra={
                    "extra_fields": {
                        "error": str(e)[:500],
                        "error_type": type(e).__name__,
                    }
                },
            )
            return synthetic_bundle(profile)

        return _with_course_urls(bundle)

    # ------------------------------
    # Internal functions
    # ------------------------------
    @staticmethod
    def _request_analysis(
        profile: Dict[str, Any], answers: List[Dict[str, Any]]
    ) -> AnalysisBundle:
        payload = {
            "profile": {
                **{
                    key: value
                    for key, value in profile.items()
                    if key not in ("assessment_answers", "current_step")
                },
                "current_skills": [
                    skill.model_dump() for skill in normalize_skills(profile.get("current_skills"))
                ],
            },
            "answers": answers,
        }
        user_prompt = USER_PROMPT_BASE.format(
            payload_json=json.dumps(payload, default=str)
        )
        raw_response = call_llm(SYSTEM_PROMPT, user_prompt, max_tokens=3000)
        data = parse_json_object(raw_response)
        return AnalysisBundle.model_validate(data)


def _with_course_urls(bundle: AnalysisBundle) -> AnalysisBundle:
    for course in bundle.recommended_courses:
        if not has_usable_url(course.url):
            course.url = url_for(course.platform, course.title)
    return bundle


def _as_number(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0
