"""
Analysis Service
================
Runs one assignment text through the evaluation prompt and the model client.

Model-provider failures never propagate: they become a *degraded* result whose
text explains the failure, so the client renders it exactly like a real
analysis. Callers can still tell the two apart through ``AnalysisResult.status``.
"""

import logging
import re
from dataclasses import dataclass

from .prompts import ANALYSIS_PROMPT_TEMPLATE, build_prompt

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_DEGRADED = "degraded"

FAILURE_PREFIX = "AI analysis failed: "
MODEL_NOT_FOUND_MESSAGE = "Model not found. Please check your API key and model name."
QUOTA_EXCEEDED_MESSAGE = "API quota exceeded. Please wait and try again."

# Status codes as whole words, so "4290ms" doesn't count
_NOT_FOUND = re.compile(r'\b404\b')
_QUOTA = re.compile(r'\b429\b')


@dataclass(frozen=True)
class AnalysisResult:
    status: str
    text: str

    @classmethod
    def ok(cls, text):
        return cls(STATUS_OK, text)

    @classmethod
    def degraded(cls, reason):
        return cls(STATUS_DEGRADED, FAILURE_PREFIX + reason)

    @property
    def is_ok(self):
        return self.status == STATUS_OK


def describe_failure(error):
    """Human-readable reason for a failed model call."""
    code = getattr(error, 'code', None)
    message = str(error)
    if code == 404 or _NOT_FOUND.search(message):
        return MODEL_NOT_FOUND_MESSAGE
    if code == 429 or _QUOTA.search(message):
        return QUOTA_EXCEEDED_MESSAGE
    return message or error.__class__.__name__


def run_analysis(client, assignment_text, template=ANALYSIS_PROMPT_TEMPLATE):
    """
    Analyze an assignment with the given model client.

    Args:
        client: Object exposing generate(prompt) -> str.
        assignment_text: Extracted assignment text (must be non-empty).
        template: Prompt template with a single {assignment_text} marker.

    Returns:
        AnalysisResult tagged ok (model text, verbatim) or degraded.

    Raises:
        ValueError: if assignment_text is empty. The model is not called.
    """
    prompt = build_prompt(assignment_text, template)

    try:
        text = client.generate(prompt)
    except Exception as e:
        logger.error("Model call failed: %s", e)
        return AnalysisResult.degraded(describe_failure(e))

    logger.info("Analysis completed (%d characters)", len(text or ''))
    return AnalysisResult.ok(text)
