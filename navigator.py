# navigator.py
"""
Quiz navigation state: the fetched question set, the current position, the
per-question selections and the ``submitted`` flag that gates advancing.

Progression is strictly forward. Selections are kept per question index and
are never discarded when the position moves.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

from bank import Err, FetchResult
from schemas.questions import OptionOut, Question, QuestionOut, QuizStateOut

logger = logging.getLogger("quiz-tutor.navigator")

NO_OPTION_SELECTED = "no-option-selected-yet"

LOADING = "loading"
READY = "ready"
FAILED = "failed"


class QuizNotReady(RuntimeError):
    pass


class QuizNavigator:
    def __init__(self) -> None:
        self.questions: Tuple[Question, ...] = ()
        self.index: int = 0
        self.submitted: bool = False
        self.selections: Dict[int, Optional[int]] = {}
        self.status: str = LOADING
        self.error: Optional[str] = None
        self._load_started = False

    # --- loading ------------------------------------------------------------------

    async def load_questions(self, fetch: Callable[[], Awaitable[FetchResult]]) -> bool:
        """
        Run the one fetch this navigator will ever make. Later calls are
        ignored, including after a failure: there is no retry.
        """
        if self._load_started:
            logger.debug("load_questions already attempted; ignoring")
            return self.status == READY
        self._load_started = True

        try:
            result = await fetch()
        except Exception as e:
            logger.exception("Question fetch crashed")
            result = Err(reason=f"unexpected: {type(e).__name__}: {e}")

        if isinstance(result, Err):
            self.status = FAILED
            self.error = result.reason
            logger.warning("Question set unavailable: %s", result.reason)
            return False

        self.questions = result.questions
        self.index = 0
        self.submitted = False
        self.status = READY
        logger.info("Loaded %d questions", len(self.questions))
        return True

    @property
    def ready(self) -> bool:
        return self.status == READY

    def _require_ready(self) -> None:
        if not self.ready:
            raise QuizNotReady("questions not loaded")

    # --- reads --------------------------------------------------------------------

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def is_last(self) -> bool:
        return self.ready and self.index >= self.total - 1

    @property
    def current_question(self) -> Optional[Question]:
        if not self.ready:
            return None
        return self.questions[self.index]

    def selected_option(self, question_index: int) -> Optional[int]:
        return self.selections.get(question_index)

    def tutor_context(self) -> Tuple[Dict[str, Any], str]:
        """Current question as received, plus the chosen option's label (or the sentinel)."""
        self._require_ready()
        question = self.questions[self.index]
        chosen = question.option(self.selections.get(self.index))
        return dict(question.context), chosen.label if chosen else NO_OPTION_SELECTED

    # --- transitions --------------------------------------------------------------

    def select_option(self, question_index: int, option_id: Optional[int]) -> None:
        self._require_ready()
        if not 0 <= question_index < self.total:
            raise ValueError(f"question index out of range: {question_index}")
        if option_id is not None and self.questions[question_index].option(option_id) is None:
            raise ValueError(f"unknown option id {option_id} for question {question_index}")
        # does not touch `submitted`
        self.selections[question_index] = option_id

    def submit_answer(self) -> None:
        self._require_ready()
        self.submitted = True

    def advance(self) -> bool:
        self._require_ready()
        if not self.submitted or self.is_last:
            return False
        self.index += 1
        self.submitted = False
        return True

    # --- view ---------------------------------------------------------------------

    def view(self) -> QuizStateOut:
        question = self.current_question
        if question is None:
            return QuizStateOut(status=self.status, error=self.error)

        return QuizStateOut(
            status=self.status,
            total=self.total,
            index=self.index,
            question=QuestionOut(
                id=question.id,
                number=self.index + 1,
                prompt=question.prompt,
                options=[OptionOut(id=o.id, label=o.label) for o in question.options],
            ),
            selected_option=self.selected_option(self.index),
            submitted=self.submitted,
            is_last=self.is_last,
            can_submit=not self.submitted,
            can_advance=self.submitted and not self.is_last,
        )
