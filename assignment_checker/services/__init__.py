"""
Assignment Checker Services
===========================

Business logic services for the Assignment Checker application.

Services:
- extraction_service: Uploaded document to plain text
- prompts: Evaluation prompt templates
- model_client: Gemini client
- analysis_service: Prompt + model call with degraded-result handling
- pdf_export: Markdown analysis to PDF
- canary: Canary prompt injection and detection
"""

# Services are imported directly when needed to avoid circular imports
# Example: from assignment_checker.services.analysis_service import run_analysis

__all__ = [
    'extraction_service',
    'prompts',
    'model_client',
    'analysis_service',
    'pdf_export',
    'canary',
]
