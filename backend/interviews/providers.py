import os
import logging
from typing import Optional

from .interfaces import TextGenerator

logger = logging.getLogger(__name__)


class MockLLM(TextGenerator):
    """
    Deterministic stand-in for the text generation service.

    Returns canned questions in rotation so development and tests can run the
    full question flow without a model server. Set AI_MODE=live to call a real
    service.
    """
    def __init__(self):
        self._call_count = 0
        self.QUESTIONS = [
            "Question: How do you structure a project so it stays maintainable as it grows",
            "Can you walk me through how you would debug a performance regression in production?",
            "Q: What is your approach to writing tests for code with external dependencies",
            "How would you design error handling across the layers of an application?",
            "- Which architectural trade-offs have you made recently and why",
        ]

    async def generate(self, prompt: str) -> str:
        logger.info(f"MockLLM.generate: received prompt ({len(prompt)} chars)")
        text = self.QUESTIONS[self._call_count % len(self.QUESTIONS)]
        self._call_count += 1
        return text


def get_text_generator(timeout: Optional[float] = None) -> TextGenerator:
    mode = os.environ.get("AI_MODE", "mock").lower()

    if mode == "live":
        from .live_providers.ollama_llm import OllamaLLM
        llm = OllamaLLM(timeout=timeout or 30.0)
        logger.info(f"Loaded live text generator: {llm.endpoint} (model={llm.model})")
        return llm

    logger.info("Using MockLLM (canned questions, AI_MODE=mock)")
    return MockLLM()
