"""
Test: Text extraction for txt, pdf, and docx uploads.
"""
import pytest
from assignment_checker.services.extraction_service import (
    UNSUPPORTED_PLACEHOLDER, extract_text, get_extension,
)


class TestGetExtension:
    def test_lowercases(self):
        assert get_extension("Essay.PDF") == "pdf"

    def test_last_dot_wins(self):
        assert get_extension("unit.3.prompt.docx") == "docx"

    def test_no_extension(self):
        assert get_extension("README") == ""

    def test_none(self):
        assert get_extension(None) == ""


class TestTxt:
    def test_utf8_verbatim(self):
        text = "Write an essay about your grandmother’s kitchen.\nInclude a photo."
        assert extract_text(text.encode("utf-8"), "prompt.txt") == text

    def test_bom_stripped(self):
        assert extract_text(b"\xef\xbb\xbfHello", "prompt.txt") == "Hello"

    def test_invalid_bytes_do_not_raise(self):
        result = extract_text(b"abc\xff\xfedef", "prompt.txt")
        assert result.startswith("abc")
        assert result.endswith("def")

    def test_uppercase_extension(self):
        assert extract_text(b"Hi", "PROMPT.TXT") == "Hi"


class TestPdf:
    def test_single_page(self, make_pdf):
        result = extract_text(make_pdf("Describe the water cycle"), "prompt.pdf")
        assert "Describe the water cycle" in result

    def test_pages_in_order(self, make_pdf):
        result = extract_text(make_pdf("First page text", "Second page text"), "prompt.pdf")
        assert result.index("First page text") < result.index("Second page text")

    def test_corrupt_pdf_degrades(self):
        result = extract_text(b"this is not a pdf", "prompt.pdf")
        assert result.startswith("(Error extracting text: ")
        assert result.endswith(")")


class TestDocx:
    def test_paragraphs(self, make_docx):
        result = extract_text(make_docx("Unit 4 Project", "Interview a family member."), "prompt.docx")
        assert "Unit 4 Project" in result
        assert "Interview a family member." in result

    def test_corrupt_docx_degrades(self):
        result = extract_text(b"PK\x03\x04 broken", "prompt.docx")
        assert result.startswith("(Error extracting text: ")


class TestUnsupported:
    @pytest.mark.parametrize("filename", ["slides.pptx", "image.png", "noext", ""])
    def test_placeholder(self, filename):
        assert extract_text(b"anything", filename) == UNSUPPORTED_PLACEHOLDER

    def test_exact_placeholder_text(self):
        assert UNSUPPORTED_PLACEHOLDER == "(Unsupported file type)"
