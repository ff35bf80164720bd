import asyncio
from datetime import timedelta

from django.utils import timezone

from interviews.interfaces import TextGenerator
from interviews.interviewer.store import SessionStats
from interviews.models import Interview, InterviewQuestion


class ScriptedGenerator(TextGenerator):
    """Returns queued replies in order; an Exception instance in the queue is raised instead."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.prompts = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self.replies.pop(0) if self.replies else "What else would you like to tell me?"
        if isinstance(reply, Exception):
            raise reply
        return reply


class SlowGenerator(TextGenerator):
    def __init__(self, delay: float):
        self.delay = delay

    async def generate(self, prompt: str) -> str:
        await asyncio.sleep(self.delay)
        return "Too late?"


class GatedGenerator(TextGenerator):
    """Blocks the first call until `release` is set; later calls answer immediately."""

    def __init__(self):
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.calls = 0

    async def generate(self, prompt: str) -> str:
        self.calls += 1
        if self.calls == 1:
            self.started.set()
            await self.release.wait()
        return f"Gated question {self.calls}?"


class InMemoryStore:
    """QuestionStore double keeping unsaved model instances in memory."""

    def __init__(self, *interviews):
        self.interviews = {i.interview_id: i for i in interviews}
        self.questions = []

    async def get_interview(self, interview_id):
        return self.interviews.get(interview_id)

    async def set_interview_status(self, interview_id, status, only_from=None):
        interview = self.interviews.get(interview_id)
        if interview is None or (only_from is not None and interview.status != only_from):
            return False
        interview.status = status
        return True

    async def insert_question(self, interview_id, text, question_type="technical", difficulty="medium", expected_answer=""):
        q = InterviewQuestion(
            id=len(self.questions) + 1,
            interview_id=interview_id,
            question_text=text,
            question_type=question_type,
            difficulty_level=difficulty,
            expected_answer=expected_answer or "",
            created_at=timezone.now() + timedelta(microseconds=len(self.questions)),
        )
        self.questions.append(q)
        return q

    async def get_questions_by_session(self, interview_id):
        return [q for q in self.questions if q.interview_id == interview_id]

    async def get_question_by_id(self, question_id):
        return next((q for q in self.questions if q.id == question_id), None)

    async def update_answer(self, question_id, answer_text, score, feedback, answered_at, require_unanswered=True):
        q = await self.get_question_by_id(question_id)
        if q is None or (require_unanswered and q.answered_at is not None):
            return None
        q.answer_text, q.score, q.feedback, q.answered_at = answer_text, score, feedback, answered_at
        return q

    async def aggregate_stats(self, interview_id):
        rows = await self.get_questions_by_session(interview_id)
        scores = [q.score for q in rows if q.score is not None]
        return SessionStats(
            total_questions=len(rows),
            answered_questions=sum(1 for q in rows if q.answered_at is not None),
            average_score=round(sum(scores) / len(scores), 2) if scores else None,
            highest_score=max(scores) if scores else None,
            lowest_score=min(scores) if scores else None,
        )


def make_interview(interview_id="INT-0000TEST", role="Full Stack Developer", technologies=None, **kwargs):
    kwargs.setdefault("interviewee_name", "Jane Doe")
    kwargs.setdefault("interview_time", timezone.now() + timedelta(days=1))
    return Interview(
        interview_id=interview_id,
        role=role,
        technologies=["React", "Node.js"] if technologies is None else technologies,
        **kwargs,
    )
