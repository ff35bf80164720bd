import os
import logging
import asyncio
from typing import Any, Dict, Optional

import requests

from interviews.interfaces import TextGenerator
from interviews.interviewer.exceptions import ExternalServiceFailure

logger = logging.getLogger(__name__)


class OllamaLLM(TextGenerator):
    """Minimal adapter for an Ollama-style /api/generate endpoint.

    Expects env vars:
      - OLLAMA_URL (optional; default http://localhost:11434)
      - OLLAMA_MODEL (optional; default llama3)

    Posts {model, prompt, stream: false} once and returns the `response`
    string. No retries: any failure is raised as ExternalServiceFailure and
    the caller decides what to do.
    """

    def __init__(self, base_url: Optional[str] = None, model: Optional[str] = None, timeout: float = 30.0, session: Optional[requests.Session] = None):
        self.base_url = (base_url or os.environ.get("OLLAMA_URL", "http://localhost:11434")).rstrip("/")
        self.model = model or os.environ.get("OLLAMA_MODEL", "llama3")
        self.timeout = timeout

        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/api/generate"

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        return {"model": self.model, "prompt": prompt, "stream": False}

    def _post(self, prompt: str) -> str:
        try:
            r = self.session.post(self.endpoint, json=self._build_payload(prompt), timeout=self.timeout)
        except requests.RequestException as e:
            raise ExternalServiceFailure(f"Request to {self.endpoint} failed: {e}") from e

        if r.status_code != 200:
            logger.warning(f"Text generator returned {r.status_code}: {r.text[:200]}")
            raise ExternalServiceFailure(f"Text generator returned HTTP {r.status_code}")

        try:
            data = r.json()
        except ValueError as e:
            raise ExternalServiceFailure("Text generator returned a non-JSON body") from e

        return self._extract_text_from_response(data)

    def _extract_text_from_response(self, data: Any) -> str:
        if not isinstance(data, dict):
            raise ExternalServiceFailure("Text generator response is not a JSON object")
        text = data.get("response")
        if not isinstance(text, str):
            raise ExternalServiceFailure("Text generator response has no 'response' text")
        return text

    async def generate(self, prompt: str) -> str:
        # Blocking HTTP call runs in a worker thread to keep the event loop free
        text = await asyncio.to_thread(self._post, prompt)
        logger.info(f"OllamaLLM: received response ({len(text)} chars)")
        return text
