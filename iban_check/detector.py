from __future__ import annotations
import re
from .checksum import check_iban
from .models import IbanFinding

# Matches IBAN-like patterns: 2 letters, 2 digits, then alphanumeric chars
# with optional spaces (e.g. "DE89 3704 0044 0532 0130 00" or "DE89370400440532013000")
# Each group is: optional-space + one alphanumeric char (11–31 such chars after the 4-char prefix)
_IBAN_PATTERN = re.compile(
    r"\b([A-Z]{2}\d{2}(?:[ ]?[A-Z0-9]){11,31})(?=\s|$|[^A-Z0-9])",
    re.ASCII,
)


class IbanDetector:
    """Finds IBAN-shaped strings in free text and checks their MOD-97 checksum.

    No per-country length table is applied; the checksum is the only signal.
    """

    def __init__(self, only_valid: bool = False) -> None:
        self._only_valid = only_valid

    def detect(self, text: str) -> list[IbanFinding]:
        findings: list[IbanFinding] = []

        for match in _IBAN_PATTERN.finditer(text):
            raw = match.group(0)
            result = check_iban(raw)
            if self._only_valid and not result.valid:
                continue

            findings.append(
                IbanFinding(
                    start=match.start(),
                    end=match.end(),
                    text=raw,
                    normalized=result.normalized,
                    valid=result.valid,
                    # Format matches but checksum fails → lower confidence
                    confidence=1.0 if result.valid else 0.6,
                )
            )

        return findings
