import random
import string
import time

import pytest
from iban_check.checksum import (
    mod97,
    mod97_direct,
    normalize,
    rotate_leading_four,
    to_digit_string,
)


# ---------------------------------------------------------------------------
# normalize
# ---------------------------------------------------------------------------


def test_normalize_empty():
    assert normalize("") == ""


def test_normalize_uppercases():
    assert normalize("foo") == "FOO"
    assert normalize("FOO") == "FOO"
    assert normalize("123") == "123"


def test_normalize_removes_non_alphanumerics():
    assert normalize("foo bar") == "FOOBAR"
    assert normalize("DE89-3704 0044\t0532.0130/00") == "DE89370400440532013000"


def test_normalize_nothing_left():
    assert normalize(" -/.,;") == ""


def test_normalize_drops_non_ascii_letters():
    # Only ASCII letters count as alphanumeric
    assert normalize("Äb1ß") == "B1"
    assert normalize("١٢٣") == ""


@pytest.mark.parametrize(
    "text", ["", "foo bar", "gb29 nwbk 6016", "a-b_c", "ÄÖÜ äöü", "  12 ab  "]
)
def test_normalize_idempotent(text):
    once = normalize(text)
    assert normalize(once) == once


# ---------------------------------------------------------------------------
# rotate_leading_four
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("s", ["", "a", "ab", "abc", "abcd"])
def test_rotate_short_strings_unchanged(s):
    assert rotate_leading_four(s) == s


def test_rotate_moves_first_four_to_end():
    assert rotate_leading_four("abcdefgh") == "efghabcd"
    assert rotate_leading_four("abcde") == "eabcd"


@pytest.mark.parametrize("s", ["", "ab", "abcd", "abcdefg", "GB29NWBK60161331926819"])
def test_rotate_preserves_length(s):
    assert len(rotate_leading_four(s)) == len(s)


def test_rotate_is_not_self_inverse():
    s = "abcdefghij"
    assert rotate_leading_four(rotate_leading_four(s)) == "ijabcdefgh"
    assert rotate_leading_four(rotate_leading_four(s)) != s


# ---------------------------------------------------------------------------
# to_digit_string
# ---------------------------------------------------------------------------


def test_digit_mapping_examples():
    assert to_digit_string("0") == "0"
    assert to_digit_string("a") == "10"
    assert to_digit_string("z") == "35"
    assert to_digit_string("A") == "10"
    assert to_digit_string("Z") == "35"
    assert to_digit_string("ABC") == "101112"
    assert to_digit_string("AD1200012") == "10131200012"


def test_digit_mapping_letter_range():
    for offset, letter in enumerate(string.ascii_uppercase):
        mapped = to_digit_string(letter)
        assert len(mapped) == 2
        assert mapped == str(10 + offset)
        assert to_digit_string(letter.lower()) == mapped


def test_digit_mapping_digits_pass_through():
    for digit in string.digits:
        assert to_digit_string(digit) == digit


def test_digit_mapping_drops_stray_characters():
    assert to_digit_string("A B-1") == "10111"
    assert to_digit_string("Ä") == ""
    assert to_digit_string("") == ""


# ---------------------------------------------------------------------------
# mod97
# ---------------------------------------------------------------------------


def test_mod97_short_numbers():
    assert mod97("0") == 0
    assert mod97("97") == 0
    assert mod97("10") == 10
    assert mod97("100") == 3
    assert mod97("96") == 96


def test_mod97_long_numbers():
    assert mod97("9700000000000000000000000") == 0
    assert mod97("9700000000000000000000003") == 3


def test_mod97_ignores_leading_zeroes():
    assert mod97("00009700000000000000000000003") == 3
    assert mod97("00000000") == 0


@pytest.mark.parametrize(
    "digits",
    ["1", "12345678", "123456789", "3214282912345698765432161182", "9" * 60],
)
def test_mod97_leading_zero_invariance(digits):
    assert mod97("00" + digits) == mod97(digits)


def test_mod97_empty_raises():
    with pytest.raises(ValueError):
        mod97("")


@pytest.mark.parametrize("bad", ["12a4", "12 34", "-5", "１２"])
def test_mod97_non_digits_raise(bad):
    with pytest.raises(ValueError):
        mod97(bad)


def test_mod97_matches_direct_modulus():
    rng = random.Random(1361)
    for length in range(1, 80):
        digits = "".join(rng.choice(string.digits) for _ in range(length))
        result = mod97(digits)
        assert 0 <= result <= 96
        assert result == mod97_direct(digits) == int(digits) % 97


def test_mod97_very_long_input():
    # No recursion depth limit for long numerals
    digits = "1234567890" * 400
    assert mod97(digits) == int(digits) % 97


def test_mod97_direct_empty_raises():
    with pytest.raises(ValueError):
        mod97_direct("")


def test_mod97_beyond_int_conversion_limit():
    digits = "1" + "0" * 9999
    assert mod97(digits) == pow(10, 9999, 97)


def _best_time(digits: str) -> float:
    best = float("inf")
    for _ in range(3):
        t0 = time.perf_counter()
        mod97(digits)
        best = min(best, time.perf_counter() - t0)
    return best


def test_mod97_scales_linearly():
    short = "7" * 100_000
    long = "7" * 400_000
    ratio = _best_time(long) / _best_time(short)
    # 4x the digits: linear work stays near 4x, quadratic work lands near 16x
    assert ratio < 8


def test_mod97_matches_direct_modulus_across_chunk_boundaries():
    # Remainders of one and two digits both get folded in
    for digits in ["10000000" + "0" * 7, "00000097" + "1" * 13, "99999999" * 5]:
        assert mod97(digits) == int(digits) % 97
