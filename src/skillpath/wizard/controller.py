"""
Wizard Controller.

CLASSES:
    WizardController

FUNCTIONS (in order of workflow):
    1. submit_background      (step 1)
    2. assessment             (step 2 entry, generates questions)
    3. select_option / set_answer / submit_answer   (step 2)
    4. ensure_analysis        (step 3 entry, runs the analyzer once)
    5. salary_view            (step 6)
    6. share                  (step 7, publishes a snapshot)

The controller orchestrates step transitions, triggers the question
generator and the skill analyzer at the right steps, and decides when cached
results must be invalidated. External results are merged only if the store's
epoch did not change while they were being computed; a late result after the
user navigated away or reset is discarded.
"""

import threading
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from skillpath.agents.question_generator import QuestionGeneratorAgent
from skillpath.agents.skill_analyzer import SkillAnalyzerAgent
from skillpath.config import settings
from skillpath.config.profile_schemas import DERIVED_FIELDS
from skillpath.config.validation_constants import (
    ASSESSMENT_STEP,
    GAP_ANALYSIS_STEP,
    STEP_NAMES,
    VALID_UPLOAD_BUCKETS,
)
from skillpath.utils import s3_manager
from skillpath.utils.course_links import fill_course_urls
from skillpath.utils.exceptions import AnswerRejected, InvalidStep
from skillpath.utils.logger import get_logger, log_performance
from skillpath.utils.skills import skill_names
from skillpath.wizard.assessment import AnswerCollector
from skillpath.wizard.persistence import PersistenceGateway
from skillpath.wizard.profile_store import ProfileStore

logger = get_logger(__name__)

# Step status values
IDLE = "idle"
LOADING = "loading"
READY = "ready"

# (filename, content, content_type)
UploadedFile = Tuple[str, bytes, Optional[str]]


def default_persona(profile: Dict[str, Any]) -> Dict[str, Any]:
    """Persona shown and published when the analysis produced none."""
    names = skill_names(profile.get("current_skills"))
    return {
        "title": "The Modern Architect",
        "traits": ["Data-driven", "Innovative", "Systemic Thinker"],
        "summary": (
            f"Based on your profile, you are a {profile.get('full_name') or 'professional'} "
            "who excels at bridging technical complexity with business value. You have a "
            f"natural aptitude for {names[0] if names else 'problem solving'} and a clear "
            f"path toward {profile.get('job_title') or 'your role'} mastery."
        ),
    }


def share_url_for(share_id: str, origin: Optional[str] = None) -> str:
    """Return the public link of a published snapshot."""
    return f"{(origin or settings.SHARE_ORIGIN).rstrip('/')}/profile/{share_id}"


class WizardController:
    """Drives one wizard session.

    Args:
        store (ProfileStore): The session's Profile store.
        gateway (PersistenceGateway): Publishes and loads snapshots.
        generator (Optional[QuestionGeneratorAgent]): Question generator.
        analyzer (Optional[SkillAnalyzerAgent]): Skill analyzer.
        uploader (Optional[Callable]): (category, filename, content, content_type) -> url.
            Defaults to s3_manager.upload_file.
    """

    def __init__(
        self,
        store: ProfileStore,
        gateway: PersistenceGateway,
        generator: Optional[QuestionGeneratorAgent] = None,
        analyzer: Optional[SkillAnalyzerAgent] = None,
        uploader: Optional[Callable[..., str]] = None,
    ):
        self.store = store
        self.gateway = gateway
        self.generator = generator or QuestionGeneratorAgent()
        self.analyzer = analyzer or SkillAnalyzerAgent()
        self._uploader = uploader
        self.collector: Optional[AnswerCollector] = None
        self.status: Dict[str, str] = {"assessment": IDLE, "analysis": IDLE}
        # Serializes external calls per session so one request does the work
        self._work_lock = threading.Lock()

    # ------------------------------
    # Views
    # ------------------------------
    def view(self) -> Dict[str, Any]:
        """Return the Profile together with the navigation state."""
        profile = self.store.get()
        step = profile["current_step"]
        return {
            "session_id": self.store.session_id,
            "profile": profile,
            "step": step,
            "step_name": STEP_NAMES[step - 1],
            "total_steps": self.store.total_steps,
            "status": dict(self.status),
        }

    # ------------------------------
    # Navigation
    # ------------------------------
    def patch(self, partial: Dict[str, Any]) -> Dict[str, Any]:
        return self.store.patch(partial)

    def submit_background(self, form_patch: Dict[str, Any]) -> Dict[str, Any]:
        """Merge the validated background form and move to the assessment."""
        self.store.patch(form_patch)
        self.next_step()
        return self.view()

    def next_step(self) -> bool:
        """Advance one step.

        Returns:
            False if the move is refused: the assessment needs the job title
            and declared skills, and leaving it forward needs a completed
            assessment.
        """
        reason = self._entry_refusal(self.store.current_step + 1)
        if reason:
            logger.info(
                "Advance refused",
                extra={"extra_fields": {"step": self.store.current_step, "reason": reason}},
            )
            return False
        self._leave_step()
        self.store.advance()
        return True

    def previous_step(self) -> bool:
        self._leave_step()
        self.store.retreat()
        return True

    def go_to(self, step: int) -> bool:
        """Jump to step. Out-of-range steps are refused, never raised.

        A jump to the current step keeps the in-progress assessment.
        """
        if step == self.store.current_step:
            return True
        reason = self._entry_refusal(step)
        if reason:
            logger.info(
                "Jump refused",
                extra={"extra_fields": {"step": step, "reason": reason}},
            )
            return False
        try:
            self.store.go_to(step)
        except InvalidStep as e:
            logger.info(
                "Jump refused, invalid step",
                extra={"extra_fields": {"step": step, "error": str(e)}},
            )
            return False
        self._leave_step()
        return True

    def reset(self) -> Dict[str, Any]:
        """Start over: default Profile, step 1, no cached assessment."""
        self.store.reset()
        self.collector = None
        self.status = {"assessment": IDLE, "analysis": IDLE}
        return self.view()

    # ------------------------------
    # Step 2: assessment
    # ------------------------------
    def assessment(self) -> Dict[str, Any]:
        """Return the assessment state, generating the questions on first entry.

        Raises:
            AnswerRejected: If the session is not on the assessment step.
        """
        self._require_step(ASSESSMENT_STEP)

        with self._work_lock:
            if self.collector is None:
                self.status["assessment"] = LOADING
                epoch = self.store.epoch
                profile = self.store.get()
                with log_performance(
                    "question_generation", session_id=self.store.session_id
                ):
                    questions = self.generator.generate_questions(profile)
                if self.store.epoch != epoch:
                    logger.info("Discarding questions generated for a stale step")
                    self.status["assessment"] = IDLE
                    return self._assessment_view()
                self.collector = AnswerCollector(questions)
                self.status["assessment"] = READY

        return self._assessment_view()

    def select_option(self, option: str) -> Dict[str, Any]:
        self._active_collector().select_option(option)
        return self._assessment_view()

    def set_answer(self, value: Any) -> Dict[str, Any]:
        self._active_collector().set_answer(value)
        return self._assessment_view()

    def submit_answer(self) -> Dict[str, Any]:
        """Submit the current answer.

        When the last question is answered, the questions, the answers, the
        cleared derived fields and the next step are merged in one patch.
        """
        collector = self._active_collector()
        state = collector.submit()
        if state == "completed":
            patch = collector.completion_patch()
            patch["current_step"] = min(ASSESSMENT_STEP + 1, self.store.total_steps)
            self.store.bump_epoch()
            self.store.patch(patch)
            self.status["analysis"] = IDLE
            logger.info(
                "Assessment completed",
                extra={
                    "extra_fields": {
                        "session_id": self.store.session_id,
                        "answers": len(collector.answers),
                    }
                },
            )
        return self._assessment_view()

    # ------------------------------
    # Step 3+: analysis
    # ------------------------------
    def ensure_analysis(self) -> Dict[str, Any]:
        """Return the derived fields, running the analyzer if skill_gaps is empty.

        Repeated calls without an intervening reset or re-assessment do not
        call the analyzer again.

        Raises:
            AnswerRejected: If the session has not reached the gap analysis step.
        """
        if self.store.current_step < GAP_ANALYSIS_STEP:
            raise AnswerRejected("Gap analysis is not available before the assessment")

        with self._work_lock:
            profile = self.store.get()
            if not profile.get("skill_gaps"):
                self.status["analysis"] = LOADING
                epoch = self.store.epoch
                bundle = self.analyzer.analyze(profile, profile.get("assessment_answers"))
                if self.store.epoch != epoch:
                    logger.info("Discarding analysis computed for a stale session state")
                    self.status["analysis"] = IDLE
                else:
                    profile = self.store.patch(bundle.to_patch())
                    self.status["analysis"] = READY
            else:
                self.status["analysis"] = READY

        analysis = {key: profile.get(key) for key in DERIVED_FIELDS}
        # Courses merged by a plain patch may still lack a link
        analysis["recommended_courses"] = fill_course_urls(
            analysis.get("recommended_courses") or []
        )
        return analysis

    def salary_view(self) -> Dict[str, Any]:
        """Return the salary projection with its increase."""
        projection = self.ensure_analysis().get("salary_projection") or {}
        current = float(projection.get("current") or 0)
        projected = float(projection.get("projected") or 0)
        increase_pct = ((projected - current) / current * 100) if current else 0.0
        return {
            **projection,
            "currency": self.store.get().get("currency"),
            "difference": projected - current,
            "increase_pct": round(increase_pct, 1),
        }

    # ------------------------------
    # Step 7: publish
    # ------------------------------
    def share(self, origin: Optional[str] = None) -> Dict[str, Any]:
        """Publish the Profile and return its share id and public link.

        An existing share_id is reused; a new one is stored on the Profile.
        """
        profile = self.store.get()
        if not profile.get("persona_profile_data"):
            profile["persona_profile_data"] = default_persona(profile)

        with log_performance("publish_profile", session_id=self.store.session_id):
            share_id = self.gateway.publish(profile)

        if profile.get("share_id") != share_id:
            self.store.patch({"share_id": share_id})

        return {"share_id": share_id, "share_url": share_url_for(share_id, origin)}

    # ------------------------------
    # Attachments
    # ------------------------------
    def upload(self, bucket: str, files: Iterable[UploadedFile]) -> List[str]:
        """Upload files and record their URLs on the Profile.

        A resume replaces resume_url; certificates are appended to
        certificate_urls.

        Raises:
            AnswerRejected: For an unknown bucket or an empty file list.
            ExternalServiceError: If the upload itself fails.
        """
        if bucket not in VALID_UPLOAD_BUCKETS:
            raise AnswerRejected(
                f"Invalid upload bucket: {bucket}. Valid buckets: {sorted(VALID_UPLOAD_BUCKETS)}"
            )
        files = list(files)
        if not files:
            raise AnswerRejected("No file uploaded")
        if bucket == "resumes":
            files = files[:1]

        uploader = self._uploader or s3_manager.upload_file
        urls = [
            uploader(bucket, filename, content, content_type)
            for filename, content, content_type in files
        ]

        if bucket == "resumes":
            self.store.patch({"resume_url": urls[0]})
        else:
            existing = list(self.store.get().get("certificate_urls") or [])
            self.store.patch({"certificate_urls": existing + urls})
        return urls

    # ------------------------------
    # Internal functions
    # ------------------------------
    def _leave_step(self) -> None:
        self.store.bump_epoch()
        self.collector = None
        self.status["assessment"] = IDLE

    def _entry_refusal(self, step: int) -> Optional[str]:
        """Return why step may not be entered, or None if it may."""
        if not isinstance(step, int) or not ASSESSMENT_STEP <= step <= self.store.total_steps:
            return None
        profile = self.store.get()
        if not profile.get("job_title") or not skill_names(profile.get("current_skills")):
            return "job title and current skills are required"
        if step == ASSESSMENT_STEP or self.store.current_step > ASSESSMENT_STEP:
            return None
        if not self._assessment_complete(profile):
            return "assessment not completed"
        return None

    @staticmethod
    def _assessment_complete(profile: Dict[str, Any]) -> bool:
        questions = profile.get("assessment_questions") or []
        answers = profile.get("assessment_answers") or []
        if not questions or len(questions) != len(answers):
            return False
        return all(
            answer.get("questionId") == question.get("id")
            for question, answer in zip(questions, answers)
        )

    def _require_step(self, step: int) -> None:
        if self.store.current_step != step:
            raise AnswerRejected(
                f"Only available on step {step} ({STEP_NAMES[step - 1]})"
            )

    def _active_collector(self) -> AnswerCollector:
        self._require_step(ASSESSMENT_STEP)
        if self.collector is None:
            raise AnswerRejected("Assessment has not started")
        return self.collector

    def _assessment_view(self) -> Dict[str, Any]:
        if self.collector is None:
            return {"status": self.status["assessment"], "state": None}
        return {
            "status": self.status["assessment"],
            "step": self.store.current_step,
            **self.collector.progress(),
        }
