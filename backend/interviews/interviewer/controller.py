from __future__ import annotations
import logging
import threading
from contextlib import contextmanager
from typing import List, Optional, Tuple

from django.utils import timezone

from interviews.interfaces import TextGenerator
from interviews.models import Interview, InterviewQuestion
from .config import InterviewConfig, DEFAULT_INTERVIEW_CONFIG
from .evaluator import AnswerScorer
from .exceptions import (
    AlreadyAnswered,
    EmptyAnswer,
    InterviewNotFound,
    QuestionLimitReached,
    QuestionNotFound,
    SessionBusy,
    SessionComplete,
)
from .prompt_generator import InterviewerPromptGenerator
from .question_bank import QuestionBank
from .question_generator import GenerativeQuestionSource
from .store import QuestionStore, SessionStats

logger = logging.getLogger(__name__)


class SessionSequencer:
    """Question/answer state machine for interview sessions.

    - One question in flight per session; a pending question is handed back
      instead of creating another
    - Concurrent requests for the same session are rejected with SessionBusy,
      different sessions proceed independently
    - Scores are computed once, when the answer is recorded
    - Moves the owning Interview to in_progress on the first question and to
      completed once the configured number of questions is answered
    """

    def __init__(
        self,
        store: QuestionStore,
        question_source: Optional[GenerativeQuestionSource] = None,
        bank: Optional[QuestionBank] = None,
        scorer: Optional[AnswerScorer] = None,
        config: Optional[InterviewConfig] = None,
    ):
        self.store = store
        self.config = config or DEFAULT_INTERVIEW_CONFIG
        self.question_source = question_source
        self.bank = bank
        self.scorer = scorer or AnswerScorer(self.config.scoring, self.config.feedback)
        if self.config.use_dynamic_generation and question_source is None:
            raise ValueError("dynamic generation needs a question source")
        if not self.config.use_dynamic_generation and bank is None:
            raise ValueError("static mode needs a question bank")

        self._in_flight: set[str] = set()
        self._in_flight_lock = threading.Lock()

    @contextmanager
    def _session_slot(self, interview_id: str):
        # threading.Lock, not asyncio.Lock: views run each request on its own event loop
        with self._in_flight_lock:
            if interview_id in self._in_flight:
                raise SessionBusy(f"Interview {interview_id} already has a question request in progress")
            self._in_flight.add(interview_id)
        try:
            yield
        finally:
            with self._in_flight_lock:
                self._in_flight.discard(interview_id)

    async def request_next_question(
        self, interview_id: str, question_limit: Optional[int] = None
    ) -> Tuple[InterviewQuestion, bool]:
        """Return (question, created). created is False when a pending question was reused.

        The session always runs to the configured total. `question_limit`
        only caps this request: once that many questions have been asked,
        no new one is created and QuestionLimitReached is raised.
        """
        total = self.config.total_questions

        with self._session_slot(interview_id):
            interview = await self.store.get_interview(interview_id)
            if interview is None:
                raise InterviewNotFound(f"Interview {interview_id} not found")

            prior = await self.store.get_questions_by_session(interview_id)
            answered = sum(1 for q in prior if q.is_answered)
            if answered >= total:
                await self._mark_completed(interview_id)
                raise SessionComplete(f"Interview {interview_id} has already answered {answered} of {total} questions")

            if prior and not prior[-1].is_answered:
                logger.info(f"Returning pending question {prior[-1].pk} for {interview_id}")
                return prior[-1], False

            if question_limit is not None and len(prior) >= question_limit:
                raise QuestionLimitReached(
                    f"Interview {interview_id} already has {len(prior)} questions (requested limit {question_limit})"
                )

            if self.config.use_dynamic_generation:
                question = await self.question_source.next_question(
                    interview_id,
                    interview.role,
                    interview.technologies or [],
                    prior,
                )
            else:
                question = await self._next_from_bank(interview, prior, total)

            if not prior:
                await self.store.set_interview_status(
                    interview_id, Interview.Status.IN_PROGRESS, only_from=Interview.Status.SCHEDULED
                )
            return question, True

    async def _next_from_bank(self, interview: Interview, prior: List[InterviewQuestion], total: int) -> InterviewQuestion:
        entries = self.bank.lookup(interview.role, interview.technologies or [], total)
        index = len(prior)
        if index >= len(entries):
            await self._mark_completed(interview.interview_id)
            raise SessionComplete(
                f"Question bank has only {len(entries)} questions for {interview.role}; interview {interview.interview_id} is complete"
            )
        entry = entries[index]
        q = await self.store.insert_question(
            interview.interview_id,
            entry.text,
            question_type=entry.type,
            difficulty=entry.difficulty,
            expected_answer=entry.expected_answer,
        )
        logger.info(f"Question #{index + 1}/{total} for {interview.interview_id} from bank")
        return q

    async def record_answer(self, question_id: int, answer_text: str) -> InterviewQuestion:
        question = await self.store.get_question_by_id(question_id)
        if question is None:
            raise QuestionNotFound(f"Question {question_id} not found")
        if not isinstance(answer_text, str) or not answer_text.strip():
            raise EmptyAnswer("Answer text must not be empty")

        overwrite = self.config.allow_answer_overwrite
        if question.is_answered and not overwrite:
            raise AlreadyAnswered(f"Question {question_id} has already been answered")

        result = self.scorer.score(question.question_text, question.expected_answer or "", answer_text)
        updated = await self.store.update_answer(
            question_id,
            answer_text,
            result.score,
            result.feedback,
            timezone.now(),
            require_unanswered=not overwrite,
        )
        if updated is None:
            # lost the race against another answer for the same question
            raise AlreadyAnswered(f"Question {question_id} has already been answered")

        logger.info(f"Recorded answer for question {question_id}: score={result.score}")
        await self._complete_if_done(updated.interview_id)
        return updated

    async def get_stats(self, interview_id: str) -> SessionStats:
        return await self.store.aggregate_stats(interview_id)

    async def list_questions(self, interview_id: str) -> List[InterviewQuestion]:
        return await self.store.get_questions_by_session(interview_id)

    async def get_question(self, question_id: int) -> InterviewQuestion:
        question = await self.store.get_question_by_id(question_id)
        if question is None:
            raise QuestionNotFound(f"Question {question_id} not found")
        return question

    async def _complete_if_done(self, interview_id: str):
        stats = await self.store.aggregate_stats(interview_id)
        if stats.answered_questions >= self.config.total_questions:
            await self._mark_completed(interview_id)

    async def _mark_completed(self, interview_id: str):
        if await self.store.set_interview_status(
            interview_id, Interview.Status.COMPLETED, only_from=Interview.Status.IN_PROGRESS
        ):
            logger.info(f"Interview {interview_id} completed")


def build_sequencer(
    config: InterviewConfig,
    generator: TextGenerator,
    bank: QuestionBank,
    store: Optional[QuestionStore] = None,
) -> SessionSequencer:
    store = store or QuestionStore()
    source = GenerativeQuestionSource(generator, store, config, InterviewerPromptGenerator())
    return SessionSequencer(store, question_source=source, bank=bank, config=config)
