"""
Add/edit session for a single business card.

Owns the card being edited as an ObservableStore, fills it from scan
results and saves it through the repository. User-facing notices are
collected in ``messages`` rather than shown directly.
"""

import logging
from typing import List, Optional, Union

from .exceptions import CardNotFoundError, SwiftCardError
from .models import BusinessCard
from .parser import BUSINESS_CARD, ExtractionResult
from .repository import BusinessCardRepository
from .result import Failure, Result, Success
from .storage import ImageStore
from .store import ObservableStore

logger = logging.getLogger(__name__)


class CardEditor:
    """Form state for adding or editing one card."""

    def __init__(self, repository: BusinessCardRepository, image_store: Optional[ImageStore] = None):
        self.repository = repository
        self.image_store = image_store
        self.card: ObservableStore[Optional[BusinessCard]] = ObservableStore(None)
        self.is_saving = ObservableStore(False)
        self.is_uploading = ObservableStore(False)
        self.messages: List[str] = []

    def _notify(self, message: str) -> None:
        self.messages.append(message)

    @property
    def current(self) -> Optional[BusinessCard]:
        return self.card.value

    def new_card(self) -> BusinessCard:
        card = BusinessCard()
        self.card.set(card)
        return card

    def load(self, card_id: str) -> Result:
        card = self.repository.get(card_id)
        if card is None:
            logger.warning(f"Error loading business card for edit: {card_id}")
            self.card.set(None)
            return Failure(CardNotFoundError(card_id))
        self.card.set(card)
        return Success(card)

    def update(self, **fields) -> BusinessCard:
        """Change editable fields of the current card."""
        unknown = set(fields) - set(BusinessCard.EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Not editable: {', '.join(sorted(unknown))}")
        card = (self.current or BusinessCard()).copy(
            **{k: (v or "").strip() for k, v in fields.items()}
        )
        self.card.set(card)
        return card

    def apply_extraction(self, extraction: Union[ExtractionResult, dict]) -> BusinessCard:
        """Fill the form from a business-card scan.

        Only fields the scan found are overwritten; id and image stay.
        """
        if isinstance(extraction, ExtractionResult):
            if extraction.profile != BUSINESS_CARD:
                raise ValueError(f"Cannot fill a business card from profile {extraction.profile}")
            fields = extraction.fields
        else:
            fields = extraction
        found = {k: fields[k] for k in BusinessCard.EDITABLE_FIELDS if fields.get(k)}
        return self.update(**found)

    def save(self) -> Result:
        card = self.current
        if card is None:
            return Failure(SwiftCardError("Nothing to save"))
        self.is_saving.set(True)
        try:
            stored = self.repository.save(card)
            self.card.set(stored)
            return Success(stored)
        except SwiftCardError as e:
            logger.error(f"Error saving business card: {e}")
            self._notify(f"Error saving card: {e}")
            return Failure(e)
        finally:
            self.is_saving.set(False)

    def attach_image(self, data: bytes, extension: str = "jpg") -> Result:
        """Upload an image for the current (saved) card and store its URL."""
        card = self.current
        if card is None or not card.id:
            self._notify("Please save card details first if adding new image for new card.")
            return Failure(SwiftCardError("Card must be saved before adding an image"))
        if self.image_store is None:
            return Failure(SwiftCardError("Image uploads are not configured"))

        self.is_uploading.set(True)
        self._notify("Uploading image...")
        try:
            result = self.image_store.upload(data, card.id, extension)
            if not result.success:
                logger.error(f"Error uploading image: {result.message}")
                self._notify(f"Error uploading image: {result.message}")
                return result
            updated = self.repository.save(card.copy(image_url=result.value))
            self.card.set(updated)
            self._notify("Image uploaded successfully!")
            return Success(updated)
        finally:
            self.is_uploading.set(False)

    def delete(self) -> Result:
        card = self.current
        if card is None or not card.id:
            return Failure(SwiftCardError("Card has not been saved"))
        if not self.repository.delete(card.id):
            return Failure(CardNotFoundError(card.id))
        self.card.set(None)
        return Success(card.id)
