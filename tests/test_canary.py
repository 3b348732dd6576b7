"""
Test: Canary prompt injection, detection, and extraction round trips.
"""
import pytest
from assignment_checker.services.canary import (
    FRAME, MARKER_PREFIX, MODE_VISIBLE, ONE, ZERO,
    build_canary_instruction, contains_canary, decode_zero_width,
    encode_zero_width, generate_marker, inject_canary,
)
from assignment_checker.services.extraction_service import extract_text
from assignment_checker.services.pdf_export import render_analysis_pdf

PROMPT = "Write a 500-word reflection on your summer."


class TestMarker:
    def test_prefix_and_length(self):
        marker = generate_marker()
        assert marker.startswith(MARKER_PREFIX)
        assert len(marker) == len(MARKER_PREFIX) + 12

    def test_unique(self):
        assert len({generate_marker() for _ in range(50)}) == 50


class TestZeroWidth:
    def test_only_invisible_characters(self):
        encoded = encode_zero_width("CANARY-ABC")
        assert set(encoded) <= {ZERO, ONE, FRAME}

    def test_decode(self):
        assert decode_zero_width("before" + encode_zero_width("CANARY-ABC") + "after") == ["CANARY-ABC"]

    def test_decode_multiple(self):
        text = encode_zero_width("one") + " visible " + encode_zero_width("two")
        assert decode_zero_width(text) == ["one", "two"]

    def test_decode_plain_text(self):
        assert decode_zero_width("nothing hidden here") == []

    def test_non_ascii(self):
        assert decode_zero_width(encode_zero_width("café ✓")) == ["café ✓"]


class TestInject:
    def test_zero_width_keeps_visible_text(self):
        text, marker = inject_canary(PROMPT)
        visible = "".join(ch for ch in text if ch not in (ZERO, ONE, FRAME))
        assert visible == PROMPT
        assert marker not in text
        assert contains_canary(text, marker)

    def test_visible_mode(self):
        text, marker = inject_canary(PROMPT, marker="CANARY-TEST", mode=MODE_VISIBLE)
        assert marker == "CANARY-TEST"
        assert text.startswith(PROMPT)
        assert build_canary_instruction("CANARY-TEST") in text

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            inject_canary(PROMPT, mode="ultraviolet")

    def test_detects_echoed_marker(self):
        _, marker = inject_canary(PROMPT)
        essay = f"My summer was great. {marker} I went to the beach."
        assert contains_canary(essay, marker)

    def test_clean_submission(self):
        _, marker = inject_canary(PROMPT)
        assert not contains_canary("My summer was great.", marker)
        assert not contains_canary("", marker)


class TestRoundTrip:
    def test_txt_round_trip_byte_for_byte(self):
        text, marker = inject_canary(PROMPT)
        extracted = extract_text(text.encode("utf-8"), "prompt.txt")
        assert extracted == text
        assert encode_zero_width(build_canary_instruction(marker)) in extracted

    def test_visible_txt_round_trip(self):
        text, marker = inject_canary(PROMPT, mode=MODE_VISIBLE)
        assert marker in extract_text(text.encode("utf-8"), "prompt.txt")

    def test_pdf_invisible_layer_round_trip(self):
        pdf = render_analysis_pdf("## Result\nLow risk", canary="CANARY-PDF123")
        extracted = extract_text(pdf, "analysis.pdf")
        assert "CANARY-PDF123" in extracted
