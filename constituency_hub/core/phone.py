"""
Bangladesh mobile number helpers.

Numbers are accepted with spaces, dashes or a ``+880``/``880`` prefix and are
normalised to the local ``01XXXXXXXXX`` form before validation. Poll voters
are identified by the SHA-256 of that normalised form so the raw number is
never stored.
"""

from __future__ import annotations

import hashlib
import re

from .bengali import to_english_digits

BD_MOBILE_PATTERN = re.compile(r"^01[3-9]\d{8}$")


def normalize_phone(phone: str) -> str:
    """Digits only, with any ``880`` country prefix folded back to the local ``0``."""
    digits = re.sub(r"[^0-9]", "", to_english_digits(phone or ""))
    if digits.startswith("880") and len(digits) == 13:
        digits = digits[2:]
    return digits


def is_valid_bd_phone(phone: str) -> bool:
    return bool(BD_MOBILE_PATTERN.match(normalize_phone(phone)))


def to_international(phone: str) -> str:
    """``01XXXXXXXXX`` to ``8801XXXXXXXXX`` as SMS gateways expect."""
    digits = normalize_phone(phone)
    if digits.startswith("0"):
        return "88" + digits
    return digits


def hash_phone_number(phone: str) -> str:
    return hashlib.sha256(normalize_phone(phone).encode("utf-8")).hexdigest()
