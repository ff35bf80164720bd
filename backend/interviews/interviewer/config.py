"""
Runtime configuration for the interview engine.
Every tunable of sequencing, scoring and feedback comes from here.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ScoringRules:
    """Weights of the answer scoring heuristic."""
    length_divisor: int = 100     # characters per length point
    length_cap: float = 3.0       # max points for answer length
    keyword_weight: float = 7.0   # max points for expected-vocabulary coverage
    max_score: int = 10


@dataclass(frozen=True)
class FeedbackTier:
    floor: int
    message: str


@dataclass(frozen=True)
class FeedbackRules:
    """Five feedback bands, highest floor first."""
    tiers: Tuple[FeedbackTier, ...] = (
        FeedbackTier(8, "Excellent answer! You demonstrated strong understanding of the concept."),
        FeedbackTier(6, "Good answer! You covered most key points. Consider elaborating on some aspects."),
        FeedbackTier(4, "Fair answer. You touched on some important points but missed several key concepts."),
        FeedbackTier(2, "Basic answer. Consider reviewing the topic and providing more detailed explanations."),
        FeedbackTier(0, "Incomplete answer. Please provide more comprehensive response covering the key concepts."),
    )


@dataclass
class InterviewConfig:
    """Complete runtime configuration for the interview engine.

    DYNAMIC GENERATION SUPPORT:
    - If use_dynamic_generation=True, each next question comes from the text generator
    - If use_dynamic_generation=False, questions come from the static question bank
    """
    total_questions: int = 5
    default_role: str = "Full Stack Developer"
    use_dynamic_generation: bool = True

    # Re-answer policy: False rejects a second answer, True is last-write-wins
    allow_answer_overwrite: bool = False

    llm_timeout_seconds: float = 30.0
    question_bank_path: Optional[str] = None

    # Defaults for generatively sourced questions
    generated_question_type: str = "technical"
    generated_difficulty: str = "medium"

    # Bounds accepted for a per-request question count
    min_questions: int = 1
    max_questions: int = 20

    scoring: ScoringRules = field(default_factory=ScoringRules)
    feedback: FeedbackRules = field(default_factory=FeedbackRules)

    def __post_init__(self):
        if not self.min_questions <= self.total_questions <= self.max_questions:
            raise ValueError(
                f"total_questions must be between {self.min_questions} and {self.max_questions}, "
                f"got {self.total_questions}"
            )
        if self.llm_timeout_seconds <= 0:
            raise ValueError("llm_timeout_seconds must be positive")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> InterviewConfig:
        """Load from the INTERVIEWER settings dict (or any JSON-serializable dict)."""
        data = data or {}
        scoring_data = data.get("scoring", {})
        tiers_data: List[Dict[str, Any]] = data.get("feedback_tiers", [])

        feedback = FeedbackRules()
        if tiers_data:
            tiers = sorted(
                (FeedbackTier(int(t["floor"]), str(t["message"])) for t in tiers_data),
                key=lambda t: t.floor,
                reverse=True,
            )
            feedback = FeedbackRules(tiers=tuple(tiers))

        return cls(
            total_questions=int(data.get("total_questions", 5)),
            default_role=data.get("default_role", "Full Stack Developer"),
            use_dynamic_generation=bool(data.get("use_dynamic_generation", True)),
            allow_answer_overwrite=bool(data.get("allow_answer_overwrite", False)),
            llm_timeout_seconds=float(data.get("llm_timeout_seconds", 30.0)),
            question_bank_path=data.get("question_bank_path") or None,
            generated_question_type=data.get("generated_question_type", "technical"),
            generated_difficulty=data.get("generated_difficulty", "medium"),
            scoring=ScoringRules(**scoring_data) if scoring_data else ScoringRules(),
            feedback=feedback,
        )


DEFAULT_INTERVIEW_CONFIG = InterviewConfig()
