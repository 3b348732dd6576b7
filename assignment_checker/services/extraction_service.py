"""
Text Extraction Service
=======================
Turns an uploaded assignment prompt (.txt, .pdf, .docx) into plain text.

Extraction never raises: unsupported extensions and decoder failures come
back as a parenthesised placeholder string so the request handler can
always answer with a text payload.
"""

import io
import logging

import fitz  # PyMuPDF
from docx import Document

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ('txt', 'pdf', 'docx')
UNSUPPORTED_PLACEHOLDER = "(Unsupported file type)"
ERROR_PLACEHOLDER = "(Error extracting text: {message})"


def get_extension(filename):
    """Return the lower-cased extension of a client-supplied filename, or ''."""
    if not filename or '.' not in filename:
        return ''
    return filename.rsplit('.', 1)[1].strip().lower()


def _extract_txt(file_data):
    text = file_data.decode('utf-8', errors='replace')
    return text.lstrip('\ufeff')


def _extract_pdf(file_data):
    """Text layer of every page, pages separated by newlines."""
    doc = fitz.open(stream=file_data, filetype="pdf")
    try:
        return '\n'.join(page.get_text() for page in doc)
    finally:
        doc.close()


def _extract_docx(file_data):
    """Raw paragraph and table text, formatting ignored."""
    doc = Document(io.BytesIO(file_data))
    lines = [para.text for para in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            row_text = ' | '.join(cell.text.strip() for cell in row.cells if cell.text.strip())
            if row_text:
                lines.append(row_text)
    return '\n'.join(lines)


EXTRACTORS = {
    'txt': _extract_txt,
    'pdf': _extract_pdf,
    'docx': _extract_docx,
}


def extract_text(file_data, filename):
    """
    Best-effort plain text for an uploaded document.

    Args:
        file_data: Raw bytes of the upload.
        filename: Client-supplied filename; only its extension is used.

    Returns:
        The extracted text, UNSUPPORTED_PLACEHOLDER for unknown extensions,
        or an "(Error extracting text: ...)" placeholder when decoding fails.
    """
    ext = get_extension(filename)
    extractor = EXTRACTORS.get(ext)
    if extractor is None:
        logger.info("Unsupported upload extension %r", ext)
        return UNSUPPORTED_PLACEHOLDER

    try:
        text = extractor(file_data)
    except Exception as e:
        logger.warning("Failed to extract %s (%d bytes): %s", ext, len(file_data), e)
        return ERROR_PLACEHOLDER.format(message=str(e))

    logger.info("Extracted %d characters from %s upload (%d bytes)", len(text), ext, len(file_data))
    return text
