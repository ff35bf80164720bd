"""
Storage collaborator for the interview engine, backed by the Django ORM.

Every method is a coroutine so the engine never blocks its event loop on the
database. Single-row writes are atomic; nothing here does read-modify-write
across rows.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db.models import Avg, Count, Max, Min
from django.utils import timezone

from interviews.models import Interview, InterviewQuestion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionStats:
    total_questions: int
    answered_questions: int
    average_score: Optional[float]
    highest_score: Optional[int]
    lowest_score: Optional[int]

    def as_dict(self) -> dict:
        return {
            "total_questions": self.total_questions,
            "answered_questions": self.answered_questions,
            "average_score": self.average_score,
            "highest_score": self.highest_score,
            "lowest_score": self.lowest_score,
        }


class QuestionStore:
    """Async facade over Interview / InterviewQuestion rows."""

    @sync_to_async
    def get_interview(self, interview_id: str) -> Optional[Interview]:
        return Interview.objects.filter(interview_id=interview_id).first()

    @sync_to_async
    def set_interview_status(self, interview_id: str, status: str, only_from: Optional[str] = None) -> bool:
        qs = Interview.objects.filter(interview_id=interview_id)
        if only_from is not None:
            qs = qs.filter(status=only_from)
        # update() skips auto_now, so stamp updated_at explicitly
        return qs.update(status=status, updated_at=timezone.now()) > 0

    @sync_to_async
    def insert_question(
        self,
        interview_id: str,
        text: str,
        question_type: str = InterviewQuestion.QuestionType.TECHNICAL,
        difficulty: str = InterviewQuestion.Difficulty.MEDIUM,
        expected_answer: str = "",
    ) -> InterviewQuestion:
        q = InterviewQuestion.objects.create(
            interview_id=interview_id,
            question_text=text,
            question_type=question_type,
            difficulty_level=difficulty,
            expected_answer=expected_answer or "",
        )
        logger.debug(f"Inserted question {q.pk} for {interview_id}")
        return q

    @sync_to_async
    def get_questions_by_session(self, interview_id: str) -> List[InterviewQuestion]:
        return list(InterviewQuestion.objects.filter(interview_id=interview_id).order_by("created_at", "id"))

    @sync_to_async
    def get_question_by_id(self, question_id: int) -> Optional[InterviewQuestion]:
        return InterviewQuestion.objects.filter(pk=question_id).first()

    @sync_to_async
    def update_answer(
        self,
        question_id: int,
        answer_text: str,
        score: int,
        feedback: str,
        answered_at: datetime,
        require_unanswered: bool = True,
    ) -> Optional[InterviewQuestion]:
        """Write the answer fields in one UPDATE.

        With `require_unanswered` the row is only touched while answered_at is
        still NULL, so of two racing answers at most one lands. Returns the
        refreshed row, or None when nothing was updated.
        """
        qs = InterviewQuestion.objects.filter(pk=question_id)
        if require_unanswered:
            qs = qs.filter(answered_at__isnull=True)
        updated = qs.update(
            answer_text=answer_text,
            score=score,
            feedback=feedback,
            answered_at=answered_at,
            updated_at=answered_at,
        )
        if not updated:
            return None
        return InterviewQuestion.objects.get(pk=question_id)

    @sync_to_async
    def aggregate_stats(self, interview_id: str) -> SessionStats:
        agg = InterviewQuestion.objects.filter(interview_id=interview_id).aggregate(
            total_questions=Count("id"),
            answered_questions=Count("answered_at"),
            average_score=Avg("score"),
            highest_score=Max("score"),
            lowest_score=Min("score"),
        )
        avg = agg["average_score"]
        return SessionStats(
            total_questions=agg["total_questions"],
            answered_questions=agg["answered_questions"],
            average_score=round(float(avg), 2) if avg is not None else None,
            highest_score=agg["highest_score"],
            lowest_score=agg["lowest_score"],
        )
