import os
import asyncio
import logging

from django.conf import settings
from django.core.management.base import BaseCommand

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Send a probe prompt to the configured text generator and print the question it produces.'

    def add_arguments(self, parser):
        parser.add_argument('--technology', default='Python', help='Technology to ask about')

    def handle(self, *args, **options):
        self.stdout.write("Text generator configuration:\n")
        self.stdout.write(f"  AI_MODE: {os.environ.get('AI_MODE', 'mock')}\n")
        self.stdout.write(f"  OLLAMA_URL: {os.environ.get('OLLAMA_URL', 'http://localhost:11434')}\n")
        self.stdout.write(f"  OLLAMA_MODEL: {os.environ.get('OLLAMA_MODEL', 'llama3')}\n")

        # Import here so Django settings are loaded first
        from interviews.interviewer.config import InterviewConfig
        from interviews.interviewer.prompt_generator import InterviewerPromptGenerator
        from interviews.interviewer.question_generator import clean_generated_question, fallback_question
        from interviews.providers import get_text_generator

        config = InterviewConfig.from_dict(getattr(settings, 'INTERVIEWER', {}))
        technology = options['technology']
        llm = get_text_generator(timeout=config.llm_timeout_seconds)
        prompt = InterviewerPromptGenerator().build_question_prompt(1, config.total_questions, "", technology)

        try:
            raw = asyncio.run(asyncio.wait_for(llm.generate(prompt), timeout=config.llm_timeout_seconds))
        except Exception as e:
            logger.exception("Text generator probe failed")
            self.stderr.write(f"Text generator failed: {e}\n")
            self.stdout.write(f"\nFallback question:\n{fallback_question(technology, 1)}\n")
            return

        cleaned = clean_generated_question(raw)
        self.stdout.write(f"\nRaw response:\n{raw}\n")
        self.stdout.write(f"\nCleaned question:\n{cleaned or fallback_question(technology, 1)}\n")
