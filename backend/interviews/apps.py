import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class InterviewsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "interviews"

    # Built once in ready(); views reach it through apps.get_app_config("interviews")
    sequencer = None

    def ready(self):
        from .interviewer.config import InterviewConfig
        from .interviewer.controller import build_sequencer
        from .interviewer.question_bank import QuestionBank
        from .providers import get_text_generator

        config = InterviewConfig.from_dict(getattr(settings, "INTERVIEWER", {}))
        bank = QuestionBank.load(config.question_bank_path, default_role=config.default_role)
        generator = get_text_generator(timeout=config.llm_timeout_seconds)
        self.sequencer = build_sequencer(config, generator, bank)
        logger.info(
            f"Interview engine ready: {config.total_questions} questions, "
            f"{'dynamic' if config.use_dynamic_generation else 'static'} mode, "
            f"generator={type(generator).__name__}"
        )
