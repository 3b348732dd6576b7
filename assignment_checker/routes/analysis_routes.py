"""
Analysis API routes for the Assignment Checker.
Handles text extraction, AI vulnerability analysis, report export,
and canary prompt injection.

/api/extract and /api/analyze accept either a multipart upload (field
"file", or a "text" form field) or a JSON body {"text": ...}.
"""
import logging
from flask import Blueprint, current_app, request, jsonify, Response

from assignment_checker.services.analysis_service import run_analysis
from assignment_checker.services.canary import (
    MODES, MODE_ZERO_WIDTH, contains_canary, inject_canary,
)
from assignment_checker.services.extraction_service import extract_text
from assignment_checker.services.pdf_export import DEFAULT_TITLE, render_analysis_pdf

analysis_bp = Blueprint('analysis', __name__)
logger = logging.getLogger(__name__)

NO_FILE_TEXT = "(No file uploaded)"
EMPTY_FILE_TEXT = "(Uploaded file is empty)"
NO_INPUT_RESULT = "No file or text provided"


class InvalidRequest(Exception):
    """The request body could not be parsed."""


def _json_body():
    """Parsed JSON object, or raise InvalidRequest."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidRequest("Invalid JSON body")
    return data


def _read_submission():
    """
    Resolve the request to ('file', filename, bytes), ('text', None, str),
    or (None, None, None) when nothing was submitted.
    """
    if request.is_json:
        text = _json_body().get('text')
        if isinstance(text, str) and text.strip():
            return 'text', None, text
        return None, None, None

    upload = request.files.get('file')
    if upload is not None and upload.filename:
        return 'file', upload.filename, upload.read()

    text = request.form.get('text')
    if text and text.strip():
        return 'text', None, text
    return None, None, None


@analysis_bp.errorhandler(InvalidRequest)
def handle_invalid_request(e):
    return jsonify({"error": str(e)}), 400


@analysis_bp.route('/api/extract', methods=['POST'])
def extract():
    """Extract plain text from an uploaded assignment prompt."""
    kind, filename, payload = _read_submission()

    if kind is None:
        return jsonify({"text": NO_FILE_TEXT}), 400
    if kind == 'text':
        return jsonify({"text": payload})
    if not payload:
        logger.warning("Uploaded file is empty: %s", filename)
        return jsonify({"text": EMPTY_FILE_TEXT}), 400

    return jsonify({"text": extract_text(payload, filename)})


@analysis_bp.route('/api/analyze', methods=['POST'])
def analyze():
    """Run the AI vulnerability analysis on an assignment."""
    kind, filename, payload = _read_submission()

    if kind == 'file':
        text = extract_text(payload, filename) if payload else ''
    else:
        text = payload

    if not text or not text.strip():
        return jsonify({"result": NO_INPUT_RESULT}), 400

    client = current_app.extensions['model_client']
    analysis = run_analysis(client, text)

    response = jsonify({"result": analysis.text})
    response.headers['X-Analysis-Status'] = analysis.status
    return response


@analysis_bp.route('/api/export/pdf', methods=['POST'])
def export_pdf():
    """Render an analysis result as a downloadable PDF."""
    data = _json_body()
    result = str(data.get('result') or '')
    if not result.strip():
        return jsonify({"error": "No result to export"}), 400

    pdf_bytes = render_analysis_pdf(
        result,
        title=str(data.get('title') or DEFAULT_TITLE),
        canary=str(data.get('canary') or '') or None,
    )
    return Response(
        pdf_bytes,
        mimetype='application/pdf',
        headers={'Content-Disposition': 'attachment; filename=ai-analysis.pdf'},
    )


@analysis_bp.route('/api/export/markdown', methods=['POST'])
def export_markdown():
    """Return an analysis result as a Markdown download."""
    data = _json_body()
    result = str(data.get('result') or '')
    if not result.strip():
        return jsonify({"error": "No result to export"}), 400
    return Response(
        result,
        mimetype='text/markdown',
        headers={'Content-Disposition': 'attachment; filename=ai-analysis.md'},
    )


@analysis_bp.route('/api/canary/inject', methods=['POST'])
def canary_inject():
    """Embed a canary instruction in assignment text."""
    data = _json_body()
    text = str(data.get('text') or '')
    mode = data.get('mode') or MODE_ZERO_WIDTH
    if not text.strip():
        return jsonify({"error": "No text provided"}), 400
    if mode not in MODES:
        return jsonify({"error": f"Unknown mode. Use one of: {', '.join(MODES)}"}), 400

    new_text, marker = inject_canary(text, marker=data.get('marker') or None, mode=mode)
    return jsonify({"text": new_text, "marker": marker})


@analysis_bp.route('/api/canary/check', methods=['POST'])
def canary_check():
    """Check whether a submission echoes a canary marker."""
    data = _json_body()
    marker = str(data.get('marker') or '')
    if not marker:
        return jsonify({"error": "No marker provided"}), 400
    return jsonify({"detected": contains_canary(str(data.get('text') or ''), marker)})
