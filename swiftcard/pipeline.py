"""
Card Scan Pipeline
OCR -> field extraction -> (optional) save as a business card
"""

import logging
import time
from datetime import datetime
from typing import Dict, Optional

from .exceptions import SwiftCardError
from .models import BusinessCard
from .normalizer import RawText
from .ocr import ImageInput, OCRExtractor
from .parser import BUSINESS_CARD, DEFAULT_PROFILE, available_profiles, get_parser
from .repository import BusinessCardRepository

logger = logging.getLogger(__name__)


class CardScanPipeline:
    """Runs OCR and the field parsers, and stores scanned business cards."""

    def __init__(
        self,
        ocr: Optional[OCRExtractor] = None,
        repository: Optional[BusinessCardRepository] = None,
        default_profile: str = DEFAULT_PROFILE,
        drop_noise: bool = False
    ):
        self.ocr = ocr or OCRExtractor()
        self.repository = repository or BusinessCardRepository()
        # Fail early on a misconfigured profile
        get_parser(default_profile)
        self.default_profile = default_profile
        self.drop_noise = drop_noise

        logger.info(f"CardScanPipeline initialized (default profile: {default_profile})")

    # ======================================================
    # TEXT
    # ======================================================

    def process_text(self, text: RawText, profile: Optional[str] = None) -> Dict:
        """
        Extract fields from already recognized text.

        Args:
            text: OCR text block or list of lines
            profile: Extraction profile, the pipeline default if None

        Returns:
            Dictionary with success, profile, fields and timing
        """
        start_time = time.time()
        parser = get_parser(profile or self.default_profile, drop_noise=self.drop_noise)
        extraction = parser.parse(text)
        elapsed = time.time() - start_time

        logger.info(
            f"Extracted {len(extraction.fields)}/{len(parser.FIELDS)} fields "
            f"with profile {parser.profile}"
        )
        return {
            "success": True,
            "profile": parser.profile,
            "fields": extraction.to_dict(),
            "confidence_score": round(extraction.completeness, 2),
            "processing_time_ms": int(elapsed * 1000),
            "processed_at": datetime.now().isoformat()
        }

    # ======================================================
    # IMAGE
    # ======================================================

    def process_image(self, image: ImageInput, profile: Optional[str] = None) -> Dict:
        """
        Recognize text in a card image and extract fields.

        Args:
            image: Image path or encoded bytes
            profile: Extraction profile, the pipeline default if None
        """
        profile = profile or self.default_profile
        # Fail on bad profile names before paying for OCR
        parser_profile = get_parser(profile).profile
        start_time = time.time()

        ocr_result = self.ocr.extract_text(image, correct=parser_profile == BUSINESS_CARD)
        if not ocr_result.get("success"):
            return {
                "success": False,
                "profile": parser_profile,
                "error": ocr_result.get("error") or "No text found on the card.",
                "raw_text": ocr_result.get("raw_text", ""),
                "ocr_confidence": ocr_result.get("confidence", 0.0)
            }

        result = self.process_text(ocr_result.get("lines") or ocr_result.get("raw_text", ""), profile)
        result["ocr_confidence"] = round(ocr_result.get("confidence", 0.0), 4)
        result["processing_time_ms"] = int((time.time() - start_time) * 1000)
        return result

    # ======================================================
    # SAVE
    # ======================================================

    def save_card(self, fields: Dict[str, str], card_id: Optional[str] = None) -> BusinessCard:
        """Store business-card fields as a new card or over an existing one."""
        if card_id:
            existing = self.repository.require(card_id)
            card = existing.copy(**{
                k: fields[k] for k in BusinessCard.EDITABLE_FIELDS if fields.get(k)
            })
        else:
            card = BusinessCard.from_fields(fields)
        if not (card.name or card.company or card.title):
            raise SwiftCardError("Scan produced no card details to save")
        return self.repository.save(card)

    # ======================================================
    # STATUS
    # ======================================================

    def get_status(self) -> Dict:
        """Get pipeline status information."""
        return {
            "ocr": self.ocr.get_status(),
            "profiles": available_profiles(),
            "default_profile": self.default_profile,
            "drop_noise": self.drop_noise,
            "cards_stored": len(self.repository)
        }
