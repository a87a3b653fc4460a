"""
Tests for the pattern detectors.

Every detector is exercised with plain string literals.
"""

import pytest

from swiftcard.patterns import (
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
    looks_like_gender,
    looks_like_id_number,
    looks_like_organization_name,
    looks_like_person_name,
    looks_like_phone,
    looks_like_url,
)


class TestContactDetectors:
    """Email, phone, URL and address detection."""

    def test_email(self):
        assert looks_like_email("john@acme.com")
        assert not looks_like_email("John Smith")

    @pytest.mark.parametrize("line,expected", [
        ("+1 555-123-4567", True),
        ("(555) 123 4567", True),
        ("Tel: 98765.43210", True),
        ("Suite 12", False),
        ("Room 12345", False),
    ])
    def test_phone(self, line, expected):
        assert looks_like_phone(line) is expected

    @pytest.mark.parametrize("line,expected", [
        ("www.acme.com", True),
        ("https://acme.io/team", True),
        ("acme.com", True),
        ("John A. Smith", False),
        ("Acme Inc.", False),
    ])
    def test_url(self, line, expected):
        assert looks_like_url(line) is expected

    @pytest.mark.parametrize("line,expected", [
        ("221B Baker Street", True),
        ("5th Ave", True),
        ("Sunrise ROAD", True),
        ("Data Analyst", False),
        ("Stanford Group", False),
    ])
    def test_address(self, line, expected):
        assert looks_like_address(line) is expected


class TestIdDetectors:
    """Date, ID number and gender detection."""

    def test_date(self):
        assert find_date("DOB 05-06-1990") == "05-06-1990"
        assert looks_like_date("5/6/90")
        assert not looks_like_date("1990")
        assert not looks_like_date("ABC1234567")

    def test_labelled_id_number(self):
        assert find_labelled_id_number("EPIC No: ABC1234567") == "ABC1234567"
        assert find_labelled_id_number("ID No. xyz7654321") == "XYZ7654321"
        assert find_labelled_id_number("No. 1234") is None
        assert find_labelled_id_number("Norwegian Consulting") is None

    def test_bare_id_number(self):
        assert find_bare_id_number("ABC1234567") == "ABC1234567"
        assert find_bare_id_number("AP/12/345/678901") == "AP/12/345/678901"
        assert find_bare_id_number("Card 1234ABCD5678") == "1234ABCD5678"
        assert find_bare_id_number("CORPORATION") is None
        assert find_bare_id_number("Ravi Kumar") is None

    def test_looks_like_id_number(self):
        assert looks_like_id_number("EPIC No: ABC1234567")
        assert not looks_like_id_number("Gender: Male")

    def test_labelled_gender(self):
        assert find_labelled_gender("Gender: Male") == "Male"
        assert find_labelled_gender("Sex: F") == "Female"
        assert find_labelled_gender("लिंग: महिला") == "Female"
        assert find_labelled_gender("लिंग / Gender: पुरुष / Male") == "Male"

    def test_bare_gender(self):
        assert find_bare_gender("Female") == "Female"
        assert find_bare_gender("MALE") == "Male"
        assert find_bare_gender("M") == "Male"
        assert find_bare_gender("Malek Ahmed") is None

    def test_looks_like_gender(self):
        assert looks_like_gender("Gender: Female")
        assert not looks_like_gender("Ravi Kumar")


class TestNameShapes:
    """Person and organization name shapes."""

    @pytest.mark.parametrize("line,expected", [
        ("John A. Smith", True),
        ("John Smith", True),
        ("Mary O'Neil", True),
        ("Anne-Marie Dupont", True),
        ("john smith", False),
        ("John", False),
        ("John Paul George Ringo Starr", False),
        ("R2D2 Unit", False),
    ])
    def test_person_name(self, line, expected):
        assert looks_like_person_name(line) is expected

    @pytest.mark.parametrize("line,expected", [
        ("Acme Solutions Inc", True),
        ("Globex Group", True),
        ("ACME", True),
        ("acme widgets", False),
        ("Very Long Company Name That Goes On And On Forever Inc", False),
    ])
    def test_organization_name(self, line, expected):
        assert looks_like_organization_name(line) is expected

    def test_organization_suffix_is_whole_word(self):
        assert has_organization_suffix("Initech Corp.")
        assert not has_organization_suffix("Nicole Cox")

    def test_long_line_is_not_organization(self):
        """Test lines over 40 characters are rejected even without a suffix."""
        line = "Extraordinarily Magnificent Widgetmakers Unlimited"

        assert len(line) > 40
        assert not looks_like_organization_name(line)

    @pytest.mark.parametrize("line,expected", [
        ("Senior Engineer", True),
        ("chief executive officer", True),
        ("Software Engineering", True),
        ("Developers", True),
        ("Engineering Lead Team", True),
        ("Managing Partner", True),
        ("VP Sales", True),
        ("Victor Hugo", False),
        ("Globex Partners", False),
        ("Acme Widgets", False),
    ])
    def test_job_title_indicator(self, line, expected):
        """Test indicators match as substrings, acronyms and Partner as whole words."""
        assert has_job_title_indicator(line) is expected
