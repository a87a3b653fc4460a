"""
Field parsers for OCR text from business cards and ID cards.

Each profile runs ordered first-match-wins passes over the cleaned lines.
A line feeds at most one field per run.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from .exceptions import UnknownProfileError
from .normalizer import RawText, clean_lines, coerce_raw_text, join_raw_text
from .patterns import (
    BIRTH_YEAR,
    find_bare_gender,
    find_bare_id_number,
    find_date,
    find_labelled_gender,
    find_labelled_id_number,
    has_job_title_indicator,
    has_organization_suffix,
    looks_like_address,
    looks_like_date,
    looks_like_email,
    looks_like_organization_name,
    looks_like_person_name,
    looks_like_phone,
    looks_like_url,
)

logger = logging.getLogger(__name__)

RAW_TEXT_KEY = "rawText"

BUSINESS_CARD = "business_card"
ID_CARD = "id_card"
DEFAULT_PROFILE = BUSINESS_CARD


# =========================
# DATA MODEL
# =========================

@dataclass
class FieldCandidate:
    field: str
    value: str
    line_index: int


@dataclass
class ExtractionResult:
    profile: str
    raw_text: str = ""
    fields: Dict[str, str] = field(default_factory=dict)
    candidates: List[FieldCandidate] = field(default_factory=list)
    field_names: Tuple[str, ...] = ()

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.fields.get(name, default)

    @property
    def completeness(self) -> float:
        """Share of the profile's fields that were found."""
        if not self.field_names:
            return 0.0
        return len(self.fields) / len(self.field_names)

    def to_dict(self) -> Dict[str, str]:
        data = {k: v for k, v in self.fields.items() if v}
        data[RAW_TEXT_KEY] = self.raw_text
        return data


class _Assignments:
    """Tracks which field took which line during one parse run."""

    def __init__(self, lines: List[str], pool: Optional[List[int]] = None):
        self.lines = lines
        self.pool = list(range(len(lines))) if pool is None else pool
        self.candidates: Dict[str, FieldCandidate] = {}
        self.consumed: Set[int] = set()

    def has(self, name: str) -> bool:
        return name in self.candidates

    def free(self) -> List[Tuple[int, str]]:
        taken = {self.lines[i] for i in self.consumed}
        return [
            (i, self.lines[i]) for i in self.pool
            if i not in self.consumed and self.lines[i] not in taken
        ]

    def assign(self, name: str, value: str, index: int) -> bool:
        value = (value or "").strip()
        if not value or self.has(name) or index in self.consumed:
            return False
        self.candidates[name] = FieldCandidate(name, value, index)
        self.consumed.add(index)
        logger.debug(f"Assigned {name}={value!r} from line {index}")
        return True


# =========================
# PARSERS
# =========================

class FieldParser:
    """Base class for extraction profiles.

    Subclasses list their field names in FIELDS and implement _classify,
    which runs the ordered passes over the cleaned lines.
    """

    profile: str = ""
    FIELDS: Tuple[str, ...] = ()

    def __init__(self, drop_noise: bool = False):
        self.drop_noise = drop_noise

    def parse(self, text: RawText) -> ExtractionResult:
        text = coerce_raw_text(text)
        raw_text = join_raw_text(text)
        lines = clean_lines(text, drop_noise=self.drop_noise)
        logger.debug(f"Parsing {len(lines)} lines with profile {self.profile}")

        assignments = self._new_assignments(lines)
        if lines:
            self._classify(assignments)

        candidates = [c for c in assignments.candidates.values() if c.field in self.FIELDS]
        return ExtractionResult(
            profile=self.profile,
            raw_text=raw_text,
            fields={c.field: c.value for c in candidates if c.value},
            candidates=candidates,
            field_names=self.FIELDS,
        )

    def _new_assignments(self, lines: List[str]) -> _Assignments:
        return _Assignments(lines)

    def _classify(self, assignments: _Assignments) -> None:
        raise NotImplementedError


class BusinessCardParser(FieldParser):
    """Name, company and job title from a business card."""

    profile = BUSINESS_CARD
    FIELDS = ("name", "company", "title")

    MAX_LINE_LENGTH = 50
    FALLBACK_COMPANY_MAX_WORDS = 4

    def _is_contact_detail(self, line: str) -> bool:
        return (
            looks_like_email(line)
            or looks_like_phone(line)
            or looks_like_url(line)
            or looks_like_address(line)
        )

    def _find_company(self, a: _Assignments) -> Optional[Tuple[int, str]]:
        free = a.free()
        for i, line in free:
            if has_organization_suffix(line) and looks_like_organization_name(line):
                return i, line
        for i, line in free:
            if looks_like_organization_name(line) and not looks_like_person_name(line):
                return i, line
        # Name-shaped company ("Acme Widgets"), only while a name line remains
        for i, line in free:
            if looks_like_organization_name(line) and any(
                j != i and line != other and looks_like_person_name(other)
                for j, other in free
            ):
                return i, line
        return None

    def _new_assignments(self, lines: List[str]) -> _Assignments:
        pool = [
            i for i, line in enumerate(lines)
            if len(line) <= self.MAX_LINE_LENGTH and not self._is_contact_detail(line)
        ]
        return _Assignments(lines, pool)

    def _classify(self, a: _Assignments) -> None:
        for i, line in a.free():
            if has_job_title_indicator(line):
                a.assign("title", line, i)
                break

        company = self._find_company(a)
        if company:
            a.assign("company", company[1], company[0])

        for i, line in a.free():
            if looks_like_person_name(line):
                a.assign("name", line, i)
                break

        # Positional fallbacks
        remaining = a.free()
        if not a.has("name") and remaining:
            i, line = remaining[0]
            a.assign("name", line, i)

        if not a.has("company"):
            for i, line in a.free():
                if has_organization_suffix(line) or len(line.split()) <= self.FALLBACK_COMPANY_MAX_WORDS:
                    a.assign("company", line, i)
                    break


def _label_pattern(labels: List[str]) -> "re.Pattern":
    # Bilingual cards chain labels: "नाम / Name: ..."
    alt = "|".join(labels)
    return re.compile(
        rf"^(?:{alt})(?:\s*/\s*(?:{alt}))*\s*[:\-.]?\s*(.*)$",
        re.IGNORECASE,
    )


class IdCardParser(FieldParser):
    """Voter/government ID card fields."""

    profile = ID_CARD
    FIELDS = ("epicNumber", "dob", "gender", "name", "relationName")

    NAME_LABEL = _label_pattern([
        r"Elector'?s\s+Name",
        r"Name\b",
        r"निर्वाचक\s*का\s*नाम",
        r"नाम",
    ])
    RELATION_LABEL = _label_pattern([
        r"(?:Father|Husband|Mother|Guardian)'?s?\s*Name\b",
        r"[SDWC]\s*/\s*O\b",
        r"पिता\s*का\s*नाम",
        r"पति\s*का\s*नाम",
        r"माता\s*का\s*नाम",
    ])
    DOB_LABELLED = re.compile(
        r"(?:\bDate\s*of\s*Birth(?:\s*/\s*Age)?|\bYear\s*of\s*Birth|\bD\.?O\.?B\b\.?|जन्म\s*तिथि)"
        r"\s*:?\s*(\d{1,2}[-/.]\d{1,2}[-/.](?:\d{4}|\d{2})|\d{4})(?!\d)",
        re.IGNORECASE,
    )

    MIN_NAME_LENGTH = 3
    MIN_FALLBACK_LENGTH = 6

    def _valid_name(self, value: str) -> bool:
        value = value.strip()
        return len(value) >= self.MIN_NAME_LENGTH and not any(c.isdigit() for c in value)

    def _classify(self, a: _Assignments) -> None:
        self._extract_id_number(a)
        self._extract_dob(a)
        self._extract_gender(a)
        self._extract_labelled_names(a)
        self._fallback_names(a)

    def _extract_id_number(self, a: _Assignments) -> None:
        for i, line in a.free():
            value = find_labelled_id_number(line)
            if value:
                a.assign("epicNumber", value, i)
                return
        for i, line in a.free():
            # A date must never be mistaken for an ID
            if looks_like_date(line):
                continue
            value = find_bare_id_number(line)
            if value:
                a.assign("epicNumber", value, i)
                return

    def _extract_dob(self, a: _Assignments) -> None:
        for i, line in a.free():
            m = self.DOB_LABELLED.search(line)
            if m:
                a.assign("dob", m.group(1), i)
                return
        for i, line in a.free():
            value = find_date(line)
            if value is None:
                # A bare year only counts when it is the whole line
                m = BIRTH_YEAR.fullmatch(line)
                value = m.group(1) if m else None
            if value:
                a.assign("dob", value, i)
                return

    def _extract_gender(self, a: _Assignments) -> None:
        for i, line in a.free():
            value = find_labelled_gender(line)
            if value:
                a.assign("gender", value, i)
                return
        for i, line in a.free():
            value = find_bare_gender(line)
            if value:
                a.assign("gender", value, i)
                return

    def _extract_labelled_names(self, a: _Assignments) -> None:
        for i, line in a.free():
            if a.has("name") and a.has("relationName"):
                return
            m = self.RELATION_LABEL.match(line)
            if m:
                if not a.has("relationName") and self._valid_name(m.group(1)):
                    a.assign("relationName", m.group(1), i)
                continue
            m = self.NAME_LABEL.match(line)
            if m and not a.has("name") and self._valid_name(m.group(1)):
                a.assign("name", m.group(1), i)

    def _fallback_names(self, a: _Assignments) -> None:
        for name in ("name", "relationName"):
            if a.has(name):
                continue
            for i, line in a.free():
                if (
                    len(line.split()) > 1
                    and len(line) >= self.MIN_FALLBACK_LENGTH
                    and not any(c.isdigit() for c in line)
                ):
                    a.assign(name, line, i)
                    break


# =========================
# PROFILE REGISTRY
# =========================

PROFILES = {
    BUSINESS_CARD: BusinessCardParser,
    ID_CARD: IdCardParser,
}


def available_profiles() -> List[str]:
    return list(PROFILES)


def get_parser(profile: Optional[str] = None, drop_noise: bool = False) -> FieldParser:
    """Return a parser for the named extraction profile.

    Args:
        profile: Profile name ("business_card" or "id_card"), default if None
        drop_noise: Drop digit/punctuation-only lines before classifying

    Returns:
        FieldParser instance

    Raises:
        UnknownProfileError: If the profile name is not registered
    """
    if profile is not None and not isinstance(profile, str):
        raise UnknownProfileError(profile)
    key = (profile or DEFAULT_PROFILE).strip().lower().replace("-", "_")
    parser_class = PROFILES.get(key)
    if parser_class is None:
        raise UnknownProfileError(profile)
    return parser_class(drop_noise=drop_noise)


def extract_fields(text: RawText, profile: Optional[str] = None) -> Dict[str, str]:
    """Extract a flat field mapping (always with rawText) from OCR text."""
    return get_parser(profile).parse(text).to_dict()
