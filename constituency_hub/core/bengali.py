"""
Bengali digit and date helpers.

Voter lookup accepts a date of birth typed in either Bengali (০-৯) or ASCII
digits. The helpers here mask raw keystrokes into ``dd/mm/yyyy``, validate
the result, convert it to the ISO form used by the database and render the
printable voter slip.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Optional, Union

BENGALI_DIGITS = "০১২৩৪৫৬৭৮৯"
ENGLISH_DIGITS = "0123456789"

_TO_ENGLISH = str.maketrans(BENGALI_DIGITS, ENGLISH_DIGITS)
_TO_BENGALI = str.maketrans(ENGLISH_DIGITS, BENGALI_DIGITS)
_NON_DIGIT = re.compile(r"[^0-9]")

EDITING_KEYS = frozenset({"Backspace", "Delete", "Tab", "ArrowLeft", "ArrowRight", "Home", "End"})

MIN_YEAR = 1900
MAX_YEAR = 2100
SLIP_TITLE = "ভোটার তথ্য স্লিপ"
SLIP_RULE = "═" * 30


def to_english_digits(value: str) -> str:
    return value.translate(_TO_ENGLISH)


def to_bengali_digits(value: str) -> str:
    return value.translate(_TO_BENGALI)


def is_allowed_date_key(key: str) -> bool:
    """Keystroke filter for the date field: digits of either script and editing keys."""
    if key in EDITING_KEYS:
        return True
    return len(key) == 1 and (key in ENGLISH_DIGITS or key in BENGALI_DIGITS)


def format_date_input(raw: str) -> str:
    """
    Mask free-form input into ``dd/mm/yyyy`` rendered in Bengali digits.

    Non-digits are dropped and at most eight digits are kept. A slash follows
    the second and the fourth digit as soon as they are typed, so ``"05"``
    becomes ``"০৫/"``.
    """
    digits = _NON_DIGIT.sub("", to_english_digits(raw))[:8]
    parts = []
    for index, digit in enumerate(digits):
        parts.append(digit)
        if index in (1, 3):
            parts.append("/")
    return to_bengali_digits("".join(parts))


def next_cursor_position(previous: str, formatted: str, cursor: int) -> int:
    """
    Caret position after re-masking.

    The caret keeps the same number of digits to its left. When it lands right
    before an inserted slash it moves past it.
    """
    digits_before = sum(1 for ch in to_english_digits(previous[:cursor]) if ch.isdigit())
    if digits_before == 0:
        return 0

    seen = 0
    position = len(formatted)
    for index, ch in enumerate(to_english_digits(formatted)):
        if ch.isdigit():
            seen += 1
            if seen == digits_before:
                position = index + 1
                break
    while position < len(formatted) and formatted[position] == "/":
        position += 1
    return position


def _split_date(value: str) -> list[str]:
    return to_english_digits(value).strip().split("/")


def convert_to_api_format(value: str) -> str:
    """Turn ``dd/mm/yyyy`` (either digit script) into ``yyyy-mm-dd``; ``""`` when incomplete."""
    parts = _split_date(value)
    if len(parts) != 3:
        return ""
    day, month, year = parts
    if len(day) != 2 or len(month) != 2 or len(year) != 4:
        return ""
    return f"{year}-{month}-{day}"


def is_valid_date_format(value: str) -> bool:
    """
    Check that a masked date is complete and calendar-sane.

    A single trailing slash is tolerated. Day must be within 1-31, month
    within 1-12 and year within 1900-2100.
    """
    text = to_english_digits(value).strip()
    if text.endswith("/"):
        text = text[:-1]
    parts = text.split("/")
    if len(parts) != 3:
        return False
    day, month, year = parts
    if len(day) != 2 or len(month) != 2 or len(year) != 4:
        return False
    if not (day.isdigit() and month.isdigit() and year.isdigit()):
        return False
    return 1 <= int(day) <= 31 and 1 <= int(month) <= 12 and MIN_YEAR <= int(year) <= MAX_YEAR


def parse_date_query(value: str) -> Optional[date]:
    """
    Accept either a masked ``dd/mm/yyyy`` date or ISO ``yyyy-mm-dd``.

    Returns None when the value is not a real calendar date.
    """
    text = to_english_digits(value).strip()
    if "/" in text:
        if not is_valid_date_format(text):
            return None
        text = convert_to_api_format(text)
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def format_date_bengali(value: Union[str, date, datetime, None]) -> str:
    """Render a stored date as Bengali ``dd/mm/yyyy``; ``-`` when empty."""
    if not value:
        return "-"
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value[:10])
        except ValueError:
            return value
    return to_bengali_digits(value.strftime("%d/%m/%Y"))


def _center_line(ward: Any) -> str:
    if ward is None:
        return "-"
    return f"{getattr(ward, 'voter_area_no', '') or ''}. {getattr(ward, 'voter_area_name', '') or ''}"


def voter_slip_text(voter: Any, ward: Any = None, footer: Optional[str] = None) -> str:
    """Plain-text voter slip offered as a download."""
    lines = [
        SLIP_TITLE,
        SLIP_RULE,
        "",
        f"কেন্দ্র: {_center_line(ward)}",
        "",
        f"নাম: {voter.voter_name}",
        f"সিরিয়াল নং: {voter.serial_no}",
        f"ভোটার নং: {voter.voter_no}",
        f"জন্ম তারিখ: {format_date_bengali(voter.date_of_birth)}",
        f"পিতা/স্বামী: {voter.father_name or '-'}",
        f"মাতা: {voter.mother_name or '-'}",
    ]
    ward_name = getattr(ward, "union_pouro_ward_cant_board", None) if ward is not None else None
    if ward_name:
        lines.append(f"ওয়ার্ড: {ward_name}")
    lines.extend(["", SLIP_RULE])
    if footer:
        lines.append(footer)
    return "\n".join(lines)


def voter_sms_text(voter: Any, ward: Any = None) -> str:
    lines = [
        "ভোটার তথ্য:",
        f"নাম: {voter.voter_name}",
        f"সিরিয়াল নং: {voter.serial_no}",
        f"ভোটার নং: {voter.voter_no}",
        f"জন্ম তারিখ: {format_date_bengali(voter.date_of_birth)}",
        f"ভোট কেন্দ্র: {_center_line(ward)}",
    ]
    ward_name = getattr(ward, "union_pouro_ward_cant_board", None) if ward is not None else None
    if ward_name:
        lines.append(f"ওয়ার্ড: {ward_name}")
    return "\n".join(lines)
