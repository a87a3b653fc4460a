"""
Pattern detectors used by the field parsers.

Every detector is a pure function of a single line so it can be tested
with plain string literals.
"""

import re
from typing import Optional

# =========================
# VOCABULARIES
# =========================

JOB_TITLE_INDICATORS = [
    "CEO", "CTO", "CFO", "COO", "CIO", "CMO",
    "President", "Vice President", "VP",
    "Director", "Manager", "Assistant Manager",
    "Senior", "Junior", "Lead", "Head",
    "Supervisor", "Coordinator", "Specialist", "Analyst", "Consultant",
    "Engineer", "Developer", "Designer", "Architect",
    "Executive", "Officer", "Administrator", "Founder", "Partner",
]

# Matched as whole words: short acronyms hide inside names ("Victor")
# and "Partners" is an organization suffix
WHOLE_WORD_TITLE_INDICATORS = {"CEO", "CTO", "CFO", "COO", "CIO", "CMO", "VP", "Partner"}

ORGANIZATION_SUFFIXES = [
    "Inc", "LLC", "Corp", "Corporation", "Ltd", "Limited", "Company", "Co",
    "Group", "Solutions", "Technologies", "Services", "Consulting", "Systems",
    "Enterprise", "Enterprises", "Global", "International", "Associates",
    "Partners",
]

GENDER_MAP = {
    "male": "Male", "m": "Male", "पुरुष": "Male",
    "female": "Female", "f": "Female", "महिला": "Female", "स्त्री": "Female",
    "transgender": "Transgender",
}

# =========================
# COMPILED PATTERNS
# =========================

PHONE_RUN = re.compile(r"\+?\(?\d[\d\s\-\(\)\.]{5,}\d")
URL = re.compile(r"www\.|http|\.[a-z]{2,4}(?=/|\s|$)", re.IGNORECASE)
ADDRESS = re.compile(
    r"\b(?:street|avenue|road|drive|lane|boulevard|blvd|st|ave|rd)\b",
    re.IGNORECASE,
)
DATE = re.compile(r"(?<!\d)(\d{1,2}[-/.]\d{1,2}[-/.](?:\d{4}|\d{2}))(?!\d)")
BIRTH_YEAR = re.compile(r"(?<!\d)((?:19|20)\d{2})(?!\d)")

ID_LABELLED = re.compile(
    r"\b(?:EPIC\s*No|ID\s*No|No)\b\.?\s*[:\-]?\s*"
    r"((?=[A-Z/]*\d)[A-Z0-9][A-Z0-9/]{6,14})(?![A-Z0-9/])",
    re.IGNORECASE,
)
ID_BARE_PATTERNS = [
    re.compile(r"\b([A-Z]{3}\d{7})\b"),
    re.compile(r"\b([A-Z]{2}/\d{1,3}/\d{1,4}/\d{4,7})\b"),
    re.compile(r"\b((?=[A-Z]*\d)[A-Z0-9]{10,})\b"),
]

_GENDER_TERMS = (
    r"(?<![A-Za-z])(female|male|transgender|m|f)(?![A-Za-z])"
    r"|(पुरुष|महिला|स्त्री)"
)
GENDER_LABELLED = re.compile(
    r"(?:\b(?:gender|sex)\b|लिंग)[\s:/\-]*(?:" + _GENDER_TERMS + r")",
    re.IGNORECASE,
)
GENDER_BARE = re.compile(
    r"(?<![A-Za-z])(female|male|transgender)(?![A-Za-z])|(पुरुष|महिला|स्त्री)",
    re.IGNORECASE,
)
GENDER_WHOLE_LINE = re.compile(r"^\s*([MF])\s*$", re.IGNORECASE)

# Middle initials such as "A." or "A"
INITIAL = re.compile(r"^[A-Z]\.?$")

JOB_TITLE = re.compile(
    "|".join(
        rf"\b{re.escape(t)}\b" if t in WHOLE_WORD_TITLE_INDICATORS else re.escape(t)
        for t in JOB_TITLE_INDICATORS
    ),
    re.IGNORECASE,
)
ORGANIZATION_SUFFIX = re.compile(
    r"\b(?:" + "|".join(re.escape(s) for s in ORGANIZATION_SUFFIXES) + r")\b",
    re.IGNORECASE,
)

MAX_ORGANIZATION_LENGTH = 40


# =========================
# CONTACT DETAIL DETECTORS
# =========================

def looks_like_email(line: str) -> bool:
    return "@" in line


def looks_like_phone(line: str) -> bool:
    """Digit run with optional separators holding at least 7 digits."""
    for match in PHONE_RUN.finditer(line):
        if sum(c.isdigit() for c in match.group(0)) >= 7:
            return True
    return False


def looks_like_url(line: str) -> bool:
    return bool(URL.search(line))


def looks_like_address(line: str) -> bool:
    return bool(ADDRESS.search(line))


# =========================
# ID DOCUMENT DETECTORS
# =========================

def find_date(line: str) -> Optional[str]:
    """Return the first D-M-Y shaped date in the line."""
    m = DATE.search(line)
    return m.group(1) if m else None


def looks_like_date(line: str) -> bool:
    return find_date(line) is not None


def find_labelled_id_number(line: str) -> Optional[str]:
    m = ID_LABELLED.search(line)
    return m.group(1).upper() if m else None


def find_bare_id_number(line: str) -> Optional[str]:
    upper = line.upper()
    for pattern in ID_BARE_PATTERNS:
        m = pattern.search(upper)
        if m:
            return m.group(1)
    return None


def looks_like_id_number(line: str) -> bool:
    return bool(find_labelled_id_number(line) or find_bare_id_number(line))


def normalize_gender(term: str) -> str:
    return GENDER_MAP.get(term.strip().lower(), term.strip())


def find_labelled_gender(line: str) -> Optional[str]:
    m = GENDER_LABELLED.search(line)
    if not m:
        return None
    term = m.group(1) or m.group(2)
    return normalize_gender(term)


def find_bare_gender(line: str) -> Optional[str]:
    m = GENDER_WHOLE_LINE.match(line)
    if m:
        return normalize_gender(m.group(1))
    m = GENDER_BARE.search(line)
    if m:
        return normalize_gender(m.group(1) or m.group(2))
    return None


def looks_like_gender(line: str) -> bool:
    return bool(find_labelled_gender(line) or find_bare_gender(line))


# =========================
# NAME / ORGANIZATION SHAPES
# =========================

def _is_name_word(word: str) -> bool:
    if INITIAL.match(word):
        return True
    if len(word) < 2 or not word[0].isupper():
        return False
    letters = sum(c.isalpha() for c in word)
    if letters < len(word) * 0.7:
        return False
    return all(c.isalpha() or c in "'-." for c in word)


def looks_like_person_name(line: str) -> bool:
    """2-4 capitalized words made (almost) entirely of letters."""
    words = line.split()
    if not 2 <= len(words) <= 4:
        return False
    return all(_is_name_word(w) for w in words)


def has_organization_suffix(line: str) -> bool:
    return bool(ORGANIZATION_SUFFIX.search(line))


def has_job_title_indicator(line: str) -> bool:
    return bool(JOB_TITLE.search(line))


def looks_like_organization_name(line: str) -> bool:
    if len(line) > MAX_ORGANIZATION_LENGTH:
        return False
    if has_organization_suffix(line):
        return True
    if 1 <= len(line.split()) <= 6:
        # Mixed case or all caps; all-lowercase lines are rarely company names
        return any(c.isupper() for c in line)
    return False
