import pytest

from reggie_extensions import strs


@pytest.mark.parametrize(
    "value, expected",
    [(None, True), ("", True), ("   ", True), ("\t\n", True), ("a", False), (" a ", False)],
)
def test_is_empty(value, expected):
    assert strs.is_empty(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("hELLO wORLD", "Hello world"),
        ("  aBC ", "  Abc "),
        ("x", "X"),
        ("привет МИР", "Привет мир"),
        ("   ", "   "),
        ("", ""),
        (None, None),
    ],
)
def test_to_lower_with_title_case(value, expected):
    assert strs.to_lower_with_title_case(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [("a1b2c3", "abc"), ("123", ""), ("no digits", "no digits"), ("", ""), (None, None)],
)
def test_remove_digits(value, expected):
    assert strs.remove_digits(value) == expected


def test_to_positive_digits():
    assert strs.to_positive_digits("а28о-с53р") == "2853"
    assert strs.to_positive_digits("а28о-с53р", "-") == "28-53"
    assert strs.to_positive_digits("-7", "-") == "7"
    assert strs.to_positive_digits("abc") == ""
    assert strs.to_positive_digits("") == ""
    assert strs.to_positive_digits(None) is None


def test_to_positive_digits_list():
    assert strs.to_positive_digits_list("а28о-с53р") == ["28", "53"]
    assert strs.to_positive_digits_list("-5 and 10") == ["5", "10"]
    assert strs.to_positive_digits_list("abc") == []
    assert strs.to_positive_digits_list("") == []
    assert strs.to_positive_digits_list(None) == []


@pytest.mark.parametrize(
    "value, expected",
    [("abc", False), ("a b-c!", False), ("aбc", True), ("café", True), ("", False), (None, False)],
)
def test_has_non_latin_chars(value, expected):
    assert strs.has_non_latin_chars(value) is expected


def test_to_similar_latin_letters():
    assert strs.to_similar_latin_letters("Привет") == "\u041fp\u0438\u0432e\u0442"
    assert strs.to_similar_latin_letters("abc") == "abc"
    assert strs.to_similar_latin_letters("") == ""
    assert strs.to_similar_latin_letters(None) is None


def test_to_similar_latin_letters_removes_non_latin():
    lookalikes = "аАВсСеЕНкКМоОрРТхХуУ"
    assert strs.has_non_latin_chars(lookalikes)
    latin = strs.to_similar_latin_letters(lookalikes)
    assert latin == "aABcCeEHkKMoOpPTxXyY"
    assert not strs.has_non_latin_chars(latin)


def test_to_similar_ru_letters():
    assert strs.to_similar_ru_letters("Cat") == "\u0421\u0430t"
    assert strs.to_similar_ru_letters("aABcCeEHkKMoOpPTxXyY") == "аАВсСеЕНкКМоОрРТхХуУ"
    assert strs.to_similar_ru_letters("123") == "123"
    assert strs.to_similar_ru_letters(" ") == " "


@pytest.mark.parametrize(
    "value, prefix, ignore_case, expected",
    [
        ("Apple", "аррle", True, True),
        ("Apple", "аррle", False, False),
        ("apple", "аррle", False, True),
        ("\u0430\u0440ple", "app", False, True),
        ("Apple", "App", False, True),
        ("Apple", "app", False, False),
        ("Apple", "app", True, True),
        ("ПРИВЕТ", "привет", True, True),
        ("Apple", "xyz", False, False),
        ("Ab", "Abc", False, False),
        ("", "a", False, False),
        (None, "a", False, False),
        ("a", "", False, False),
        ("a", None, False, False),
    ],
)
def test_starts_with_ru_en(value, prefix, ignore_case, expected):
    assert strs.starts_with_ru_en(value, prefix, ignore_case=ignore_case) is expected


def test_starts_with_ru_en_normalizes():
    decomposed = "e\u0301"
    composed = "\u00e9"
    assert strs.starts_with_ru_en(decomposed + "x", composed)
    assert strs.starts_with_ru_en(composed + "x", decomposed)
    assert not strs.starts_with_ru_en(decomposed, composed + composed)
