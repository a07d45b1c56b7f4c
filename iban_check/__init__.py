"""iban-check: ISO 13616 IBAN checksum validation without bignum arithmetic."""
from .checksum import (
    check_iban,
    compute_check_digits,
    is_valid_iban,
    mod97,
    mod97_direct,
    normalize,
    rotate_leading_four,
    to_digit_string,
)
from .detector import IbanDetector
from .models import IbanCheck, IbanFinding

__all__ = [
    "IbanCheck",
    "IbanDetector",
    "IbanFinding",
    "check_iban",
    "compute_check_digits",
    "is_valid_iban",
    "mod97",
    "mod97_direct",
    "normalize",
    "rotate_leading_four",
    "to_digit_string",
]
