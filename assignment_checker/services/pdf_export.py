"""
PDF Export Service
==================
Renders a Markdown analysis into a downloadable PDF report.

Handles the subset of Markdown the model produces: headings, bullet and
numbered lists, blockquotes, pipe tables, and inline bold/italic/code.
Fenced code markers are dropped; everything else becomes a body paragraph.

An optional canary marker is written on every page as invisible text
(PDF text render mode 3) so it survives text extraction but not the eye.
"""

import re
from datetime import datetime
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from .canary import build_canary_instruction

MARGIN = 40
DEFAULT_TITLE = "AI Vulnerability Analysis"

ACCENT = colors.HexColor('#6366f1')
QUOTE = colors.HexColor('#818cf8')
GREY = colors.HexColor('#7F8C8D')
HEADER_BG = colors.HexColor('#EEF2FF')
LINE = colors.HexColor('#C7D2FE')

_HEADING = re.compile(r'^(#{1,6})\s+(.*)$')
_BULLET = re.compile(r'^\s*[-*+]\s+(.*)$')
_NUMBERED = re.compile(r'^\s*(\d+)[.)]\s+(.*)$')
_QUOTE = re.compile(r'^>\s?(.*)$')
_FENCE = re.compile(r'^\s*```')
_TABLE_SEPARATOR = re.compile(r'^\|?\s*:?-{3,}:?\s*(\|\s*:?-{3,}:?\s*)*\|?$')


def _build_styles():
    styles = getSampleStyleSheet()
    return {
        'title': ParagraphStyle(
            'ReportTitle', parent=styles['Heading1'], fontSize=20,
            spaceAfter=6, textColor=ACCENT,
        ),
        'subtitle': ParagraphStyle(
            'ReportSubtitle', parent=styles['Normal'], fontSize=9,
            spaceAfter=18, textColor=GREY,
        ),
        1: ParagraphStyle('H1', parent=styles['Heading1'], fontSize=18, spaceBefore=12, spaceAfter=8),
        2: ParagraphStyle('H2', parent=styles['Heading2'], fontSize=15, spaceBefore=10, spaceAfter=6),
        3: ParagraphStyle('H3', parent=styles['Heading3'], fontSize=13, spaceBefore=8, spaceAfter=4),
        'body': ParagraphStyle('Body', parent=styles['Normal'], fontSize=11, leading=15, spaceAfter=4),
        'bullet': ParagraphStyle(
            'Bullet', parent=styles['Normal'], fontSize=11, leading=15,
            leftIndent=14, bulletIndent=4, spaceAfter=2,
        ),
        'quote': ParagraphStyle(
            'Quote', parent=styles['Normal'], fontSize=11, leading=15,
            leftIndent=12, textColor=QUOTE, spaceAfter=4,
        ),
        'cell': ParagraphStyle('Cell', parent=styles['Normal'], fontSize=9, leading=12),
    }


def inline_markup(text):
    """Convert inline Markdown to reportlab paragraph markup."""
    text = escape(text)
    text = re.sub(r'\*\*(.+?)\*\*', r'<b>\1</b>', text)
    text = re.sub(r'__(.+?)__', r'<b>\1</b>', text)
    text = re.sub(r'(?<!\*)\*(?!\s)(.+?)(?<!\s)\*(?!\*)', r'<i>\1</i>', text)
    text = re.sub(r'`([^`]+)`', r'<font name="Courier">\1</font>', text)
    return text


def _paragraph(text, style, **kwargs):
    """Paragraph from inline Markdown; plain escaped text if the markup doesn't parse."""
    try:
        return Paragraph(inline_markup(text), style, **kwargs)
    except ValueError:
        # Crossing emphasis like **a *b** c* yields tags that don't nest
        return Paragraph(escape(text), style, **kwargs)


def _split_row(line):
    return [cell.strip() for cell in line.strip().strip('|').split('|')]


def _table_flowable(rows, styles, width):
    columns = max(len(r) for r in rows)
    data = [
        [_paragraph(cell, styles['cell']) for cell in row + [''] * (columns - len(row))]
        for row in rows
    ]
    table = Table(data, colWidths=[width / columns] * columns, repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), HEADER_BG),
        ('GRID', (0, 0), (-1, -1), 0.5, LINE),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('TOPPADDING', (0, 0), (-1, -1), 4),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
    ]))
    return table


def markdown_to_flowables(markdown_text, styles, width):
    """Line-oriented Markdown to a list of platypus flowables."""
    story = []
    table_rows = []

    def flush_table():
        if table_rows:
            story.append(_table_flowable(table_rows, styles, width))
            story.append(Spacer(1, 8))
            table_rows.clear()

    for raw in (markdown_text or '').splitlines():
        line = raw.rstrip()

        if line.lstrip().startswith('|'):
            if not _TABLE_SEPARATOR.match(line.strip()):
                table_rows.append(_split_row(line))
            continue
        flush_table()

        if _FENCE.match(line):
            continue
        if not line.strip():
            story.append(Spacer(1, 6))
            continue

        heading = _HEADING.match(line)
        if heading:
            level = min(len(heading.group(1)), 3)
            story.append(_paragraph(heading.group(2), styles[level]))
            continue

        bullet = _BULLET.match(line)
        if bullet:
            story.append(_paragraph(bullet.group(1), styles['bullet'], bulletText='•'))
            continue

        numbered = _NUMBERED.match(line)
        if numbered:
            story.append(_paragraph(
                numbered.group(2), styles['bullet'],
                bulletText=numbered.group(1) + '.',
            ))
            continue

        quote = _QUOTE.match(line)
        if quote:
            story.append(_paragraph(quote.group(1), styles['quote']))
            continue

        story.append(_paragraph(line, styles['body']))

    flush_table()
    return story


def _canary_painter(marker):
    instruction = build_canary_instruction(marker)

    def paint(canvas, doc):
        canvas.saveState()
        text = canvas.beginText(MARGIN, MARGIN / 2)
        text.setTextRenderMode(3)  # invisible
        text.setFont('Helvetica', 5)
        text.textLine(instruction)
        canvas.drawText(text)
        canvas.restoreState()

    return paint


def render_analysis_pdf(markdown_text, title=DEFAULT_TITLE, canary=None):
    """
    Render an analysis to PDF.

    Args:
        markdown_text: The model's Markdown analysis.
        title: Report heading.
        canary: Optional marker written invisibly on every page.

    Returns:
        The PDF document as bytes.
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=MARGIN,
        leftMargin=MARGIN,
        topMargin=MARGIN,
        bottomMargin=MARGIN,
        title=title or DEFAULT_TITLE,
    )
    styles = _build_styles()

    story = [
        Paragraph(escape(title or DEFAULT_TITLE), styles['title']),
        Paragraph("Generated " + datetime.now().strftime('%Y-%m-%d %H:%M'), styles['subtitle']),
    ]
    story.extend(markdown_to_flowables(markdown_text, styles, doc.width))

    if canary:
        painter = _canary_painter(canary)
        doc.build(story, onFirstPage=painter, onLaterPages=painter)
    else:
        doc.build(story)

    return buffer.getvalue()
