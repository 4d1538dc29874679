"""String helpers for emptiness checks, digit extraction and Cyrillic/Latin look-alikes.

Look-alike letters are pairs that render identically in common fonts, for
example Cyrillic "о" and Latin "o". They are paired by position:

    _RU_SIMILAR_LETTERS[i] <-> _EN_SIMILAR_LETTERS[i]
"""

import re
import unicodedata

_RU_SIMILAR_LETTERS = "аАВсСеЕНкКМоОрРТхХуУ"
_EN_SIMILAR_LETTERS = "aABcCeEHkKMoOpPTxXyY"
_RU_TO_EN = str.maketrans(_RU_SIMILAR_LETTERS, _EN_SIMILAR_LETTERS)
_EN_TO_RU = str.maketrans(_EN_SIMILAR_LETTERS, _RU_SIMILAR_LETTERS)
_DIGITS = re.compile(r"\d+")


def is_empty(value: str | None) -> bool:
    """Return True if value is None, empty, or whitespace only."""
    return value is None or not value.strip()


def to_lower_with_title_case(value: str | None) -> str | None:
    """
    Lower case the string and capitalize its first letter.

    Surrounding whitespace is preserved. Empty or whitespace only input is
    returned unchanged.

    Examples:
        >>> to_lower_with_title_case("  hELLO wORLD ")
        '  Hello world '
    """
    if is_empty(value):
        return value
    value_lower = value.strip().lower()
    value_title = value_lower[0].upper() + value_lower[1:]
    return value.lower().replace(value_lower, value_title, 1)


def remove_digits(value: str | None) -> str | None:
    """Return every character of value except digits, in original order."""
    if is_empty(value):
        return value
    return "".join(ch for ch in value if not ch.isdecimal())


def to_positive_digits(value: str | None, separator: str = "") -> str | None:
    """
    Return the digits of value as one string, ignoring any sign.

    Groups of consecutive digits are joined by separator.

    Examples:
        >>> to_positive_digits("а28о-с53р")
        '2853'
        >>> to_positive_digits("а28о-с53р", "-")
        '28-53'
    """
    if is_empty(value):
        return value
    return (separator or "").join(to_positive_digits_list(value))


def to_positive_digits_list(value: str | None) -> list[str]:
    """
    Return each run of consecutive digits in value, left to right.

    Examples:
        >>> to_positive_digits_list("а28о-с53р")
        ['28', '53']
    """
    if is_empty(value):
        return []
    return [match.group() for match in _DIGITS.finditer(value)]


def has_non_latin_chars(value: str | None) -> bool:
    """Return True if any character of value lies outside 7-bit ASCII."""
    return not is_empty(value) and any(ord(ch) > 127 for ch in value)


def to_similar_latin_letters(value: str | None) -> str | None:
    """Replace Cyrillic letters with their Latin look-alikes."""
    if is_empty(value):
        return value
    return value.translate(_RU_TO_EN)


def to_similar_ru_letters(value: str | None) -> str | None:
    """Replace Latin letters with their Cyrillic look-alikes."""
    if is_empty(value):
        return value
    return value.translate(_EN_TO_RU)


def starts_with_ru_en(
    value: str | None, prefix: str | None = "", ignore_case: bool = False
) -> bool:
    """
    Return True if value starts with prefix, treating look-alike letters as equal.

    Both strings are NFC normalized before comparison so that composed and
    decomposed forms of the same character match. A prefix character matches
    when it equals the value character, or when its Cyrillic/Latin look-alike
    does. ignore_case applies to every comparison.

    Examples:
        >>> starts_with_ru_en("Apple", "аррle", ignore_case=True)
        True
        >>> starts_with_ru_en("Apple", "xyz")
        False
    """
    if not value or not prefix or len(value) < len(prefix):
        return False
    value = unicodedata.normalize("NFC", value)
    prefix = unicodedata.normalize("NFC", prefix)
    if len(value) < len(prefix):
        return False
    for ch, value_ch in zip(prefix, value):
        if _equals(ch, value_ch, ignore_case):
            continue
        similar = _similar_letter(ch)
        if similar is None or not _equals(similar, value_ch, ignore_case):
            return False
    return True


def _similar_letter(ch: str) -> str | None:
    """Return the look-alike of ch from the other alphabet, if any."""
    if (idx := _RU_SIMILAR_LETTERS.find(ch)) >= 0:
        return _EN_SIMILAR_LETTERS[idx]
    if (idx := _EN_SIMILAR_LETTERS.find(ch)) >= 0:
        return _RU_SIMILAR_LETTERS[idx]
    return None


def _equals(ch1: str, ch2: str, ignore_case: bool) -> bool:
    if ignore_case:
        return ch1.upper() == ch2.upper()
    return ch1 == ch2
