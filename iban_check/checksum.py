"""ISO 13616 IBAN checksum (ISO 7064 MOD 97-10).

1. All non-alphanumeric chars are removed and the rest is uppercased.
2. The first 4 chars (country code + check digits) are moved to the end.
3. Letters are converted to numbers: A=10, B=11, ..., Z=35.
4. The resulting number is divided by 97. If the remainder is 1, the IBAN is valid.
"""
from __future__ import annotations
import re
from .models import IbanCheck

_NON_ALNUM = re.compile(r"[^0-9A-Za-z]")

# Digits reduced per step. The remainder folded back in is at most 2 digits.
_CHUNK = 8


def normalize(text: str) -> str:
    """Strip everything except ASCII letters/digits and uppercase the rest."""
    return _NON_ALNUM.sub("", text).upper()


def rotate_leading_four(s: str) -> str:
    """Move the country code and check digits to the end."""
    return s[4:] + s[:4]


def to_digit_string(s: str) -> str:
    """Map 0-9 to themselves and A-Z (either case) to 10-35; drop anything else."""
    parts: list[str] = []
    for ch in s:
        if "0" <= ch <= "9":
            parts.append(ch)
        elif "A" <= ch <= "Z":
            parts.append(str(ord(ch) - 55))
        elif "a" <= ch <= "z":
            parts.append(str(ord(ch) - 87))
        # anything else should have been cleaned already
    return "".join(parts)


def _require_digits(digits: str) -> None:
    if not digits:
        raise ValueError("mod97() needs at least one digit")
    if not digits.isascii() or not digits.isdigit():
        raise ValueError(f"mod97() expects only decimal digits, got {digits!r}")


def mod97(digits: str) -> int:
    """Remainder of a decimal numeral of any length divided by 97.

    Iterative long division: reduce the leading 8 digits mod 97, prepend the
    remainder to the digits that follow and repeat until none are left.
    Only the current 8-digit chunk is ever built, so the work is linear in
    the length of the input.

    Raises ValueError for an empty string or non-digit characters.
    """
    _require_digits(digits)
    remainder = int(digits[:_CHUNK]) % 97
    pos = _CHUNK
    while pos < len(digits):
        prefix = str(remainder)
        take = _CHUNK - len(prefix)
        remainder = int(prefix + digits[pos : pos + take]) % 97
        pos += take
    return remainder


def mod97_direct(digits: str) -> int:
    """Same as mod97() but using Python's arbitrary-precision int.

    Subject to the interpreter's int/str conversion limit (4300 digits by
    default); mod97() is not.
    """
    _require_digits(digits)
    return int(digits) % 97


def check_iban(raw: str) -> IbanCheck:
    """Run the full pipeline and keep every intermediate form."""
    if not isinstance(raw, str):
        return IbanCheck(
            raw=str(raw),
            normalized="",
            rearranged="",
            numeric="",
            checksum=None,
            valid=False,
        )

    normalized = normalize(raw)
    rearranged = rotate_leading_four(normalized)
    numeric = to_digit_string(rearranged)
    checksum = mod97(numeric) if numeric else None

    return IbanCheck(
        raw=raw,
        normalized=normalized,
        rearranged=rearranged,
        numeric=numeric,
        checksum=checksum,
        valid=checksum == 1,
    )


def is_valid_iban(raw: str) -> bool:
    """True iff the IBAN checksum remainder is exactly 1."""
    return check_iban(raw).valid


def compute_check_digits(iban: str) -> str:
    """Return the two check digits that make ``iban`` valid.

    The existing check digits (positions 3-4) are ignored. Raises ValueError
    if fewer than two characters (the country code) survive normalization.
    """
    clean = normalize(iban)
    if len(clean) < 2:
        raise ValueError(f"Cannot compute check digits for {iban!r}: no country code")
    zeroed = clean[:2] + "00" + clean[4:]
    remainder = mod97(to_digit_string(rotate_leading_four(zeroed)))
    return f"{98 - remainder:02d}"
