"""
Tests for OCRExtractor.

The EasyOCR reader is replaced with a mock so no models are loaded.
"""

from unittest.mock import Mock

import pytest

from swiftcard.ocr import OCRExtractor


def _box(top):
    return [[0, top], [100, top], [100, top + 10], [0, top + 10]]


class TestOCRExtractor:
    """Test cases for OCRExtractor."""

    @pytest.fixture
    def ocr(self, tmp_path):
        """Create extractor with a mocked reader."""
        extractor = OCRExtractor(model_dir=str(tmp_path))
        extractor.reader = Mock()
        return extractor

    def test_defaults(self):
        extractor = OCRExtractor()

        assert extractor.languages == ["en"]
        assert extractor.get_status()["loaded"] is False

    def test_lines_sorted_top_to_bottom(self, ocr):
        ocr.reader.readtext.return_value = [
            (_box(40), "Senior Engineer", 0.9),
            (_box(10), "John Smith", 0.8),
        ]

        result = ocr.extract_text(b"image")

        assert result["success"] is True
        assert result["lines"] == ["John Smith", "Senior Engineer"]
        assert result["raw_text"] == "John Smith\nSenior Engineer"
        assert 0.8 < result["confidence"] < 0.9

    def test_low_confidence_dropped(self, ocr):
        ocr.reader.readtext.return_value = [
            (_box(10), "John Smith", 0.9),
            (_box(20), "~~", 0.05),
        ]

        assert ocr.extract_text(b"image")["lines"] == ["John Smith"]

    def test_correction_toggle(self, ocr):
        ocr.reader.readtext.return_value = [(_box(10), "Acme S0lutions", 0.9)]

        assert ocr.extract_text(b"image")["lines"] == ["Acme Solutions"]
        assert ocr.extract_text(b"image", correct=False)["lines"] == ["Acme S0lutions"]

    def test_no_text(self, ocr):
        ocr.reader.readtext.return_value = []

        result = ocr.extract_text(b"image")

        assert result["success"] is False
        assert result["error"] == "No text found on the card."

    def test_reader_error(self, ocr):
        ocr.reader.readtext.side_effect = RuntimeError("bad image")

        result = ocr.extract_text(b"image")

        assert result["success"] is False
        assert result["error"] == "OCR failed: bad image"

    @pytest.mark.parametrize("text,expected", [
        ("b1ue", "blue"),
        ("emai1", "email"),
        ("s0lutions", "solutions"),
        ("www. acme.c0m", "www.acme.com"),
        ("+1 555 123 4567", "+1 555 123 4567"),
    ])
    def test_correct_ocr_text(self, ocr, text, expected):
        assert ocr._correct_ocr_text(text) == expected
