"""
OCR adapter built on EasyOCR.

Produces the raw lines the field parsers consume. The reader is created
lazily because loading the recognition models is slow.
"""
import logging
import os
import re
from pathlib import Path
from typing import Dict, List, Optional, Union

import easyocr

logger = logging.getLogger(__name__)

ImageInput = Union[str, Path, bytes]

MIN_CONFIDENCE = 0.15


class OCRExtractor:
    """Text recognition for card images."""

    def __init__(
        self,
        languages: List[str] = None,
        gpu: bool = False,
        model_dir: str = "./models",
        min_confidence: float = MIN_CONFIDENCE
    ):
        """
        Initialize OCR extractor.

        Args:
            languages: List of EasyOCR language codes
            gpu: Use GPU for OCR
            model_dir: Directory for model storage
            min_confidence: Drop recognized regions below this confidence
        """
        self.languages = languages or ["en"]
        self.gpu = gpu
        self.model_dir = model_dir
        self.min_confidence = min_confidence
        self._reader: Optional[easyocr.Reader] = None

    @property
    def reader(self) -> easyocr.Reader:
        if self._reader is None:
            os.makedirs(self.model_dir, exist_ok=True)
            logger.info(f"Initializing EasyOCR with languages: {self.languages}")
            self._reader = easyocr.Reader(
                lang_list=self.languages,
                gpu=self.gpu,
                model_storage_directory=self.model_dir,
                download_enabled=True,
                verbose=False
            )
            logger.info("EasyOCR initialized successfully")
        return self._reader

    @reader.setter
    def reader(self, value) -> None:
        self._reader = value

    def _correct_ocr_text(self, text: str) -> str:
        """
        Fix the usual l/1 and o/0 confusions inside words.

        Args:
            text: One recognized line

        Returns:
            Corrected line
        """
        # letter + 1 + letter ("b1ue" -> "blue")
        text = re.sub(r'([a-zA-Z])11([a-zA-Z])', r'\1ll\2', text)
        text = re.sub(r'([a-zA-Z])1([a-zA-Z])', r'\1l\2', text)
        # leading or trailing 1 in a word ("1ive" -> "live", "emai1" -> "email")
        text = re.sub(r'\b1([a-zA-Z]{2,})', r'l\1', text)
        text = re.sub(r'([a-zA-Z]{2,})1\b', r'\1l', text)
        # 0 inside words ("s0lutions" -> "solutions")
        text = re.sub(r'([a-zA-Z])0([a-zA-Z])', r'\1o\2', text)

        text = re.sub(r'www\s*\.\s*', 'www.', text, flags=re.IGNORECASE)
        text = re.sub(r'\.c[o0]m\b', '.com', text, flags=re.IGNORECASE)

        return ' '.join(text.split())

    def extract_text(self, image: ImageInput, correct: bool = True) -> Dict:
        """
        Recognize text lines in an image.

        Args:
            image: Image path or encoded image bytes
            correct: Apply word-level l/1 and o/0 corrections

        Returns:
            Dictionary with success, lines, raw_text, confidence and error
        """
        source = str(image) if isinstance(image, Path) else image
        try:
            logger.info("Extracting text from image")
            results = self.reader.readtext(source, detail=1, paragraph=False)

            # Top to bottom by the Y of the top-left corner
            results = sorted(results, key=lambda r: r[0][0][1])

            lines = []
            confidences = []
            for _bbox, text, confidence in results:
                text = text.strip()
                if confidence < self.min_confidence or not text:
                    continue
                lines.append(self._correct_ocr_text(text) if correct else text)
                confidences.append(confidence)

            # Longer regions weigh more
            weights = [len(line) for line in lines]
            total_weight = sum(weights)
            if total_weight:
                avg_confidence = sum(c * w for c, w in zip(confidences, weights)) / total_weight
            else:
                avg_confidence = 0.0

            logger.info(f"Extracted {len(lines)} lines with {avg_confidence:.2%} confidence")

            if not lines:
                return {
                    "success": False,
                    "error": "No text found on the card.",
                    "lines": [],
                    "raw_text": "",
                    "confidence": 0.0
                }

            return {
                "success": True,
                "error": None,
                "lines": lines,
                "raw_text": "\n".join(lines),
                "confidence": avg_confidence
            }

        except Exception as e:
            logger.error(f"OCR extraction error: {e}", exc_info=True)
            return {
                "success": False,
                "error": f"OCR failed: {e}",
                "lines": [],
                "raw_text": "",
                "confidence": 0.0
            }

    def get_status(self) -> Dict:
        return {
            "engine": "easyocr",
            "languages": self.languages,
            "gpu": self.gpu,
            "loaded": self._reader is not None
        }
