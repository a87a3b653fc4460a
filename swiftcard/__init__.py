"""
SwiftCard package initialization.
"""

from .parser import (
    BusinessCardParser,
    ExtractionResult,
    FieldCandidate,
    FieldParser,
    IdCardParser,
    available_profiles,
    extract_fields,
    get_parser,
)
from .models import BusinessCard
from .repository import BusinessCardRepository
from .store import ObservableStore
from .result import Success, Failure
from .editor import CardEditor
from .storage import ImageStore

__all__ = [
    "BusinessCardParser",
    "IdCardParser",
    "FieldParser",
    "FieldCandidate",
    "ExtractionResult",
    "available_profiles",
    "extract_fields",
    "get_parser",
    "BusinessCard",
    "BusinessCardRepository",
    "ObservableStore",
    "Success",
    "Failure",
    "CardEditor",
    "ImageStore"
]
