import uuid
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


def generate_interview_id() -> str:
    return f"INT-{uuid.uuid4().hex[:8].upper()}"


class Interview(models.Model):
    """A scheduled interview; the unit of question sequencing and stats."""
    class Status(models.TextChoices):
        SCHEDULED = "scheduled", "scheduled"
        IN_PROGRESS = "in_progress", "in progress"
        COMPLETED = "completed", "completed"
        CANCELLED = "cancelled", "cancelled"

    interview_id = models.CharField(max_length=50, unique=True, default=generate_interview_id, editable=False)
    interviewee_name = models.CharField(max_length=255)
    role = models.CharField(max_length=255)
    technologies = models.JSONField(default=list, blank=True)
    interview_time = models.DateTimeField()
    status = models.CharField(max_length=32, choices=Status.choices, default=Status.SCHEDULED)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["interview_time"]
        indexes = [
            models.Index(fields=["interview_time"], name="interview_time_idx"),
        ]

    def __str__(self):
        return f"{self.interview_id} ({self.interviewee_name}, {self.role})"


class InterviewQuestion(models.Model):
    """One turn of an interview: the question and, once submitted, its scored answer.

    Answer fields move from empty to set exactly once unless the engine is
    configured for last-write-wins.
    """
    class QuestionType(models.TextChoices):
        TECHNICAL = "technical", "technical"
        PROBLEM_SOLVING = "problem-solving", "problem-solving"
        EXPERIENCE = "experience", "experience"

    class Difficulty(models.TextChoices):
        EASY = "easy", "easy"
        MEDIUM = "medium", "medium"
        HARD = "hard", "hard"

    interview = models.ForeignKey(
        Interview,
        to_field="interview_id",
        db_column="interview_id",
        on_delete=models.CASCADE,
        related_name="questions",
    )
    question_text = models.TextField()
    question_type = models.CharField(max_length=100, choices=QuestionType.choices, default=QuestionType.TECHNICAL)
    difficulty_level = models.CharField(max_length=50, choices=Difficulty.choices, default=Difficulty.MEDIUM)
    expected_answer = models.TextField(blank=True, default="")

    answer_text = models.TextField(null=True, blank=True)
    score = models.IntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(10)],
    )
    feedback = models.TextField(blank=True, default="")
    answered_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["answered_at"], name="question_answered_at_idx"),
        ]

    @property
    def is_answered(self) -> bool:
        return self.answered_at is not None

    def __str__(self):
        return f"Question {self.pk} of {self.interview_id}"
