from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class IbanCheck:
    raw: str
    normalized: str
    rearranged: str
    numeric: str
    checksum: int | None  # None when nothing alphanumeric was left to check
    valid: bool

    @property
    def country_code(self) -> str:
        return self.normalized[:2]


@dataclass(frozen=True)
class IbanFinding:
    start: int
    end: int
    text: str
    normalized: str
    valid: bool
    confidence: float

    def __len__(self) -> int:
        return self.end - self.start
