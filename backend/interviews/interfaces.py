from abc import ABC, abstractmethod


class TextGenerator(ABC):
    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """
        Send one prompt to the text generation service and return its text.
        Raises ExternalServiceFailure on any non-success outcome.
        """
        pass
