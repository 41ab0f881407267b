# app/utils/faculty_parser.py
"""
Parser for the free-text faculty fields on program sessions.

Sessions store their speakers, chairpersons and moderators as one line of
text, for example::

    Dr. A Kumar (akumar@example.org, +91 98450 00000) | Dr. B Singh (bsingh@example.org) | Dr. C Rao

Grammar::

    entries := entry ("|" entry)*
    entry   := name [ "(" contact ")" ]
    contact := [email] [ "," phone ]

Entries that do not match the grammar are returned as errors instead of being
guessed at, so the caller can show them to the organiser.
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional

PHONE_RE = re.compile(r"^\+?[\d\s\-()]{6,}$")


class FacultyParseError(ValueError):
    pass


@dataclass
class FacultyEntry:
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None


@dataclass
class FacultyParseResult:
    entries: List[FacultyEntry] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def _split_entries(text: str) -> List[str]:
    """Split on '|' separators that are not inside parentheses."""
    parts, current, depth = [], [], 0
    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(0, depth - 1)
        if char == "|" and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


def _parse_contact(inner: str) -> tuple:
    fields = [part.strip() for part in inner.split(",")]
    if len(fields) > 2:
        raise FacultyParseError("too many contact fields, expected '(email, phone)'")

    email = fields[0] or None
    phone = fields[1] if len(fields) > 1 and fields[1] else None

    if email and "@" not in email:
        # "(+91 98450 00000)" -- a lone phone number in the email slot
        if phone is None and PHONE_RE.match(email):
            return None, email
        raise FacultyParseError(f"'{email}' is not an email address")
    return email, phone


def parse_faculty_entry(raw: str) -> FacultyEntry:
    text = raw.strip()
    open_idx = text.find("(")

    if open_idx == -1:
        if ")" in text:
            raise FacultyParseError("unexpected ')'")
        return FacultyEntry(name=text)

    name = text[:open_idx].strip()
    if not name:
        raise FacultyParseError("missing name before '('")

    close_idx = text.find(")", open_idx)
    if close_idx == -1:
        raise FacultyParseError("unclosed '('")

    inner = text[open_idx + 1 : close_idx]
    if "(" in inner:
        raise FacultyParseError("nested '(' in contact details")
    if text[close_idx + 1 :].strip():
        raise FacultyParseError("unexpected text after ')'")

    email, phone = _parse_contact(inner)
    return FacultyEntry(name=name, email=email, phone=phone)


def parse_faculty_text(text: Optional[str]) -> FacultyParseResult:
    result = FacultyParseResult()
    if not text or not text.strip():
        return result

    for raw in _split_entries(text):
        if not raw.strip():
            continue
        try:
            result.entries.append(parse_faculty_entry(raw))
        except FacultyParseError as e:
            result.errors.append(f"{raw.strip()}: {e}")
    return result
