"""
Custom exceptions for the SwiftCard service.

All application-specific exceptions inherit from SwiftCardError. The
extraction engine itself never raises for text input; these cover
programming errors and the collaborators around it.
"""

from typing import Any, Dict, Optional


class SwiftCardError(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        details: Additional error details (for debugging)
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class UnknownProfileError(SwiftCardError, ValueError):
    """Requested extraction profile does not exist."""

    def __init__(self, profile: str):
        super().__init__(f"Unknown extraction profile: {profile}", {"profile": profile})
        self.profile = profile


class CardNotFoundError(SwiftCardError):
    """No business card stored under the given id."""

    def __init__(self, card_id: str):
        super().__init__(f"Business card not found: {card_id}", {"card_id": card_id})
        self.card_id = card_id


class ImageUploadError(SwiftCardError):
    """Storing a card image failed."""
