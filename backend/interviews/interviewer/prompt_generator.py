"""
Prompt builder for adaptive question generation.
Turns session progress and the previous turn into the instruction text sent
to the text generator. Pure string formatting: no I/O, same inputs give the
same prompt.
"""
from __future__ import annotations

COVERAGE_AREAS = (
    "fundamentals",
    "advanced concepts",
    "problem solving",
    "performance",
    "testing",
    "architecture",
    "best practices",
)


class InterviewerPromptGenerator:
    """Builds the next-question prompt from a few fixed sections."""

    def build_question_prompt(
        self,
        question_number: int,
        total_questions: int,
        previous_text: str,
        technology: str,
    ) -> str:
        """Generate the prompt asking for question `question_number` of `total_questions`.

        Args:
            question_number: 1-based index of the question to generate
            total_questions: Planned number of questions in the session
            previous_text: Previous answer or question, embedded verbatim
            technology: Role or technology the interview targets

        Returns:
            Prompt text for the generator
        """
        if question_number < 1:
            raise ValueError(f"question_number must be >= 1, got {question_number}")
        if total_questions < question_number:
            raise ValueError(
                f"total_questions ({total_questions}) must be >= question_number ({question_number})"
            )

        sections = [
            self._role_section(technology, question_number, total_questions),
            self._previous_turn_section(previous_text),
            self._guidance_section(technology, total_questions),
            self._output_section(),
        ]
        return "\n\n".join(sections)

    def _role_section(self, technology: str, question_number: int, total_questions: int) -> str:
        return (
            f"You are an AI interviewer for a {technology} developer position.\n"
            f"You are currently on question {question_number} out of {total_questions}."
        )

    def _previous_turn_section(self, previous_text: str) -> str:
        return f'The candidate\'s previous answer was:\n"{previous_text}"'

    def _guidance_section(self, technology: str, total_questions: int) -> str:
        areas = ", ".join(COVERAGE_AREAS[:-1]) + f", and {COVERAGE_AREAS[-1]}"
        return (
            "Based on this answer, create the next valuable interview question.\n"
            "- The question should build on or challenge what the candidate said.\n"
            "- If the previous answer is incomplete, vague, or shows gaps, ask a probing question.\n"
            "- If the answer is strong, go deeper into advanced concepts.\n"
            f"- By the end of {total_questions} questions we must have covered: {areas} "
            f"(adapted for {technology})."
        )

    def _output_section(self) -> str:
        return (
            "Only return the next question text, nothing else. "
            "No numbering, labels, quotes, or explanations."
        )
