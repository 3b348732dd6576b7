"""
Gemini model client.

Any object with a ``generate(prompt) -> str`` method can stand in for
GeminiClient; the app factory injects one into the analysis routes.
"""
import logging

import google.generativeai as genai

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.0-flash-lite"


class ModelClientError(Exception):
    """The model client cannot issue a request (e.g. no API key)."""


class GeminiClient:
    """Single-request wrapper around a Gemini text model."""

    def __init__(self, api_key: str, model_name: str = DEFAULT_MODEL):
        self.api_key = api_key
        self.model_name = model_name or DEFAULT_MODEL
        self._model = None

    def _get_model(self):
        if not self.api_key:
            raise ModelClientError("GEMINI_API_KEY not configured")
        if self._model is None:
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    def generate(self, prompt: str) -> str:
        """Send the prompt once and return the first candidate's text verbatim."""
        model = self._get_model()
        logger.info("Calling %s with %d character prompt", self.model_name, len(prompt))
        response = model.generate_content(
            [{"role": "user", "parts": [{"text": prompt}]}]
        )
        return response.text
