from __future__ import annotations
import math
from dataclasses import dataclass
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .config import FeedbackRules, ScoringRules

# Deterministic answer scoring. Loose bidirectional substring overlap with the
# expected answer plus a length bonus; this is a proxy, not semantic grading.


@dataclass(frozen=True)
class ScoreResult:
    score: int
    feedback: str


def _tokenize(text: str) -> List[str]:
    return text.lower().split()


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def common_words(user_words: List[str], expected_words: List[str]) -> List[str]:
    """User tokens that contain, or are contained in, at least one expected token.

    Duplicates in the user's answer are counted each time they appear.
    """
    return [
        word for word in user_words
        if any(expected in word or word in expected for expected in expected_words)
    ]


def calculate_score(
    question_text: str,
    expected_answer: str,
    user_answer: str,
    scoring_rules: Optional["ScoringRules"] = None,
) -> int:
    """Compute the 0..10 score of `user_answer` against `expected_answer`.

    length points:  min(len(answer) / 100, 3), raw character count
    keyword points: share of expected words touched * 7, or 0 when the
                    expected answer has no words (generated questions)
    """
    for name, value in (("question_text", question_text), ("expected_answer", expected_answer), ("user_answer", user_answer)):
        if not isinstance(value, str):
            raise TypeError(f"{name} must be a string, got {type(value).__name__}")

    if scoring_rules is None:
        from .config import ScoringRules
        scoring_rules = ScoringRules()

    if not user_answer.strip():
        return 0

    user_words = _tokenize(user_answer)
    expected_words = _tokenize(expected_answer)

    length_score = min(len(user_answer) / scoring_rules.length_divisor, scoring_rules.length_cap)
    if expected_words:
        matched = common_words(user_words, expected_words)
        keyword_score = (len(matched) / len(expected_words)) * scoring_rules.keyword_weight
    else:
        keyword_score = 0.0

    score = min(_round_half_up(length_score + keyword_score), scoring_rules.max_score)
    return max(0, score)


def feedback_for(score: int, feedback_rules: Optional["FeedbackRules"] = None) -> str:
    """Map a score onto its feedback tier. Tier floors are inclusive."""
    if feedback_rules is None:
        from .config import FeedbackRules
        feedback_rules = FeedbackRules()

    for tier in feedback_rules.tiers:
        if score >= tier.floor:
            return tier.message
    return feedback_rules.tiers[-1].message


class AnswerScorer:
    def __init__(self, scoring_rules: Optional["ScoringRules"] = None, feedback_rules: Optional["FeedbackRules"] = None):
        self.scoring_rules = scoring_rules
        self.feedback_rules = feedback_rules

    def score(self, question_text: str, expected_answer: str, user_answer: str) -> ScoreResult:
        value = calculate_score(question_text, expected_answer, user_answer, self.scoring_rules)
        return ScoreResult(score=value, feedback=feedback_for(value, self.feedback_rules))
