"""
Tests for the program faculty text parser.

Verifies that parse_faculty_text:
- Splits entries on '|' outside parentheses
- Reads optional email and phone from the parenthesised contact
- Reports malformed entries as errors instead of guessing
"""

import pytest

from app.utils.faculty_parser import (
    FacultyEntry,
    FacultyParseError,
    parse_faculty_entry,
    parse_faculty_text,
)


class TestParseFacultyText:
    def test_empty_text(self):
        assert parse_faculty_text(None).entries == []
        assert parse_faculty_text("   ").entries == []

    def test_names_only(self):
        result = parse_faculty_text("Dr. A Kumar | Dr. B Singh")

        assert result.entries == [FacultyEntry("Dr. A Kumar"), FacultyEntry("Dr. B Singh")]
        assert result.errors == []

    def test_email_and_phone(self):
        result = parse_faculty_text(
            "Dr. A Kumar (akumar@example.org, +91 98450 00000) | Dr. B Singh (bsingh@example.org)"
        )

        assert result.entries == [
            FacultyEntry("Dr. A Kumar", "akumar@example.org", "+91 98450 00000"),
            FacultyEntry("Dr. B Singh", "bsingh@example.org"),
        ]

    def test_lone_phone_number(self):
        entry = parse_faculty_entry("Dr. C Rao (+91 98450 11111)")

        assert entry == FacultyEntry("Dr. C Rao", None, "+91 98450 11111")

    def test_phone_without_email(self):
        entry = parse_faculty_entry("Dr. C Rao (, 98450 11111)")

        assert entry.email is None
        assert entry.phone == "98450 11111"

    def test_bad_entries_are_reported_and_others_kept(self):
        result = parse_faculty_text("Dr. A Kumar | Dr. X (unclosed | Dr. B Singh")

        assert [e.name for e in result.entries] == ["Dr. A Kumar"]
        assert len(result.errors) == 1
        assert "unclosed '('" in result.errors[0]

    def test_blank_segments_are_ignored(self):
        result = parse_faculty_text("Dr. A Kumar || Dr. B Singh |")

        assert len(result.entries) == 2
        assert result.errors == []

    @pytest.mark.parametrize(
        "raw, message",
        [
            ("(a@example.org)", "missing name"),
            ("Dr. X (a@example.org) extra", "after ')'"),
            ("Dr. X (a@example.org, 1, 2)", "too many contact fields"),
            ("Dr. X (not-an-email)", "is not an email address"),
            ("Dr. X )", "unexpected ')'"),
        ],
    )
    def test_malformed_entry(self, raw, message):
        with pytest.raises(FacultyParseError, match=message):
            parse_faculty_entry(raw)
