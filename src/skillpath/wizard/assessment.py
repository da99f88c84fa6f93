"""
Answer Collection State Machine.

CLASSES:
    AnswerCollector

States:
    AwaitingAnswer(i) for i in [0, len(questions))
    Completed

Each question is answered in order. The current answer is built up with
select_option() (single/multiple) or set_answer() (rating/text) and submitted
with submit(), which is only allowed when the current answer is non-empty.
"""

from typing import Any, Dict, List, Optional, Union

from skillpath.config.profile_schemas import Question, cleared_derived_fields
from skillpath.config.validation_constants import MAX_MULTIPLE_SELECTIONS, RATING_SCALE
from skillpath.utils.exceptions import AnswerRejected

Answer = Union[int, str, List[str]]


class AnswerCollector:
    """Collects one answer per question, in question order.

    Args:
        questions (List[Question]): Non-empty list of questions to ask.
    """

    def __init__(self, questions: List[Question]):
        if not questions:
            raise ValueError("AnswerCollector needs at least one question")
        self.questions = list(questions)
        self.index = 0
        self.answers: List[Dict[str, Any]] = []
        self.current_answer: Optional[Answer] = None

    # ------------------------------
    # State
    # ------------------------------
    @property
    def completed(self) -> bool:
        return self.index >= len(self.questions)

    @property
    def current_question(self) -> Optional[Question]:
        if self.completed:
            return None
        return self.questions[self.index]

    @property
    def state(self) -> str:
        """Either "awaiting_answer" or "completed"."""
        return "completed" if self.completed else "awaiting_answer"

    # ------------------------------
    # Building the current answer
    # ------------------------------
    def select_option(self, option: str) -> Optional[Answer]:
        """Select an option of the current single or multiple question.

        For multiple questions the option is toggled; selecting another option
        while MAX_MULTIPLE_SELECTIONS are already selected is a no-op.

        Raises:
            AnswerRejected: If the question has no such option or is not a
                single/multiple question.
        """
        question = self._require_question()
        if question.type not in ("single", "multiple"):
            raise AnswerRejected(f"Question {question.id} does not take options")
        if option not in question.options:
            raise AnswerRejected(f"Unknown option for question {question.id}: {option}")

        if question.type == "single":
            self.current_answer = option
            return self.current_answer

        selected = list(self.current_answer) if isinstance(self.current_answer, list) else []
        if option in selected:
            selected.remove(option)
        elif len(selected) < MAX_MULTIPLE_SELECTIONS:
            selected.append(option)
        self.current_answer = selected
        return self.current_answer

    def set_answer(self, value: Any) -> Answer:
        """Set the answer of the current rating or text question.

        Raises:
            AnswerRejected: If the value does not fit the question type.
        """
        question = self._require_question()

        if question.type == "rating":
            if isinstance(value, bool):
                raise AnswerRejected("Rating must be an integer between 1 and 5")
            try:
                rating = int(value)
            except (TypeError, ValueError) as e:
                raise AnswerRejected("Rating must be an integer between 1 and 5") from e
            if rating not in RATING_SCALE or str(rating) != str(value).strip():
                raise AnswerRejected("Rating must be an integer between 1 and 5")
            self.current_answer = rating
        elif question.type == "text":
            if not isinstance(value, str):
                raise AnswerRejected("Text answer must be a string")
            self.current_answer = value
        else:
            raise AnswerRejected(
                f"Question {question.id} is a {question.type} question, select an option"
            )
        return self.current_answer

    def can_submit(self) -> bool:
        """Return True if the current answer is non-empty for its question type."""
        question = self.current_question
        if question is None:
            return False
        answer = self.current_answer
        if question.type == "multiple":
            return isinstance(answer, list) and len(answer) > 0
        if question.type == "rating":
            return isinstance(answer, int) and answer in RATING_SCALE
        if question.type == "text":
            return isinstance(answer, str) and answer.strip() != ""
        return isinstance(answer, str) and answer in question.options

    # ------------------------------
    # Transitions
    # ------------------------------
    def submit(self) -> str:
        """Record the current answer and move to the next question.

        Returns:
            The new state, "awaiting_answer" or "completed".

        Raises:
            AnswerRejected: If the current answer is empty or the assessment is
                already completed.
        """
        question = self._require_question()
        if not self.can_submit():
            raise AnswerRejected(f"Question {question.id} has no answer yet")

        answer = self.current_answer
        if isinstance(answer, list):
            answer = list(answer)
        self.answers.append({"questionId": question.id, "answer": answer})
        self.current_answer = None
        self.index += 1
        return self.state

    def completion_patch(self) -> Dict[str, Any]:
        """Return the Profile patch for a completed assessment.

        The questions, the answers, and every analysis result reset to
        its empty value, as one merge.

        Raises:
            AnswerRejected: If the assessment is not completed.
        """
        if not self.completed:
            raise AnswerRejected("Assessment is not completed")
        return {
            "assessment_questions": [q.model_dump() for q in self.questions],
            "assessment_answers": [dict(a) for a in self.answers],
            **cleared_derived_fields(),
        }

    def progress(self) -> Dict[str, Any]:
        """Return a serializable view of the current state."""
        question = self.current_question
        return {
            "state": self.state,
            "index": self.index,
            "total": len(self.questions),
            "question": question.model_dump() if question else None,
            "current_answer": self.current_answer,
            "can_submit": self.can_submit(),
            "answers": [dict(a) for a in self.answers],
        }

    # ------------------------------
    # Internal functions
    # ------------------------------
    def _require_question(self) -> Question:
        question = self.current_question
        if question is None:
            raise AnswerRejected("Assessment is already completed")
        return question
