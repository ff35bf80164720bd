"""
Adaptive question generation for interview sessions.

Each next question is generated at runtime from the previous turn. The
text generator is called exactly once per question; if that call fails in
any way the session still advances with a deterministic fallback question.
"""
from __future__ import annotations
import asyncio
import logging
import re
from typing import Optional, Sequence

from interviews.interfaces import TextGenerator
from interviews.models import InterviewQuestion
from .config import InterviewConfig, DEFAULT_INTERVIEW_CONFIG
from .prompt_generator import InterviewerPromptGenerator
from .store import QuestionStore

logger = logging.getLogger(__name__)

FALLBACK_TEMPLATE = (
    "Tell me about your experience with {technology} and how you approach "
    "solving problems with it (Question {number})?"
)

# "Question:", "Question 3:", "Q:", "Q2.", "1.", "2)", "-", "*", "•"
_LEADING_LABEL = re.compile(
    r"^\s*(?:question\s*\d*\s*[:.)-]|q\s*\d*\s*[:.)]|\d+\s*[.)]|[-*•])\s*",
    re.IGNORECASE,
)
_QUOTE_PAIRS = (('"', '"'), ("'", "'"), ("“", "”"), ("‘", "’"))
_APOSTROPHE = re.compile(r"(?<=\w)['’](?=\w)")


def _strip_wrapping_quotes(text: str) -> str:
    """Remove one pair of quotes only when they enclose the whole text."""
    if len(text) < 2:
        return text
    for opening, closing in _QUOTE_PAIRS:
        if text[0] == opening and text[-1] == closing:
            inner = _APOSTROPHE.sub("", text[1:-1])
            # 'let' and 'const' starts and ends with a quote but is not wrapped
            if opening in inner or closing in inner:
                return text
            return text[1:-1].strip()
    return text


def clean_generated_question(text: str) -> str:
    """Strip leading labels and wrapping quotes, then make sure the text ends with '?'.

    Returns an empty string if nothing is left.
    """
    cleaned = (text or "").strip()
    # Models sometimes stack labels ("1. Question: ...")
    previous = None
    while cleaned and cleaned != previous:
        previous = cleaned
        cleaned = _LEADING_LABEL.sub("", cleaned, count=1).strip()
        cleaned = _strip_wrapping_quotes(cleaned)
    if not cleaned:
        return ""
    if not cleaned.endswith("?"):
        cleaned = f"{cleaned}?"
    return cleaned


def fallback_question(technology: str, number: int) -> str:
    return FALLBACK_TEMPLATE.format(technology=technology, number=number)


class GenerativeQuestionSource:
    """
    Produces and persists the next question of a session using a text generator.

    The generator is injected once at construction and shared by all sessions.
    Generated questions carry no expected answer, so their keyword score is 0.
    """

    def __init__(
        self,
        generator: TextGenerator,
        store: QuestionStore,
        config: Optional[InterviewConfig] = None,
        prompt_builder: Optional[InterviewerPromptGenerator] = None,
    ):
        self.generator = generator
        self.store = store
        self.config = config or DEFAULT_INTERVIEW_CONFIG
        self.prompt_builder = prompt_builder or InterviewerPromptGenerator()

    async def next_question(
        self,
        interview_id: str,
        role: str,
        technologies: Sequence[str],
        prior_turns: Sequence[InterviewQuestion],
    ) -> InterviewQuestion:
        primary_technology = technologies[0] if technologies else role
        last_text = prior_turns[-1].question_text if prior_turns else ""
        number = len(prior_turns) + 1
        total = self.config.total_questions

        prompt = self.prompt_builder.build_question_prompt(number, total, last_text, primary_technology)
        text = await self._generate(prompt)
        if not text:
            text = fallback_question(primary_technology, number)
            logger.warning(f"Using fallback question #{number} for {interview_id} ({primary_technology})")

        q = await self.store.insert_question(
            interview_id,
            text,
            question_type=self.config.generated_question_type,
            difficulty=self.config.generated_difficulty,
            expected_answer="",
        )
        logger.info(f"Question #{number}/{total} for {interview_id}: {text[:60]}...")
        return q

    async def _generate(self, prompt: str) -> str:
        """One attempt at the generator. Any failure comes back as an empty string."""
        try:
            raw = await asyncio.wait_for(
                self.generator.generate(prompt),
                timeout=self.config.llm_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Text generator timed out after {self.config.llm_timeout_seconds}s")
            return ""
        except Exception as e:
            logger.warning(f"Text generator failed: {e}")
            return ""

        if not isinstance(raw, str):
            logger.warning(f"Text generator returned {type(raw).__name__}, expected str")
            return ""

        cleaned = clean_generated_question(raw)
        if not cleaned:
            logger.warning("Text generator returned no usable question text")
        return cleaned
