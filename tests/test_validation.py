import pytest

from xkpass.entities import InvalidConfigError
from xkpass.validation import (
    assert_alphabet,
    assert_case_transformation,
    assert_complete_config,
    assert_padding_characters,
    assert_padding_digits,
    assert_separator,
    assert_word_constraints,
    assert_words,
    defines_case_transformation,
    defines_padding_characters,
    defines_padding_digits,
    defines_separator,
    defines_word_constraints,
    is_alphabet,
    is_complete_config,
    word_constraints_digest,
    word_constraints_from,
)


CASE_TRANSFORMS = ["ALTERNATE", "CAPITALISE", "INVERT", "LOWER", "NONE", "RANDOM", "UPPER"]


@pytest.mark.parametrize(
    "alphabet",
    [
        ["+"],
        ("-", "."),
        ["é"],
        ["e\u0301"],
        ["R", "N", "S"],
        ["\U0001F44D\U0001F3FD", "-"],
        ["\U0001F1FA\U0001F1F8", "-"],
        ["\U0001F468\u200d\U0001F469\u200d\U0001F467", "-"],
    ],
)
def test_valid_alphabets(alphabet):
    assert is_alphabet(alphabet) is True
    assert assert_alphabet(alphabet) is True


@pytest.mark.parametrize(
    "alphabet",
    [
        "boogers",
        "+",
        [],
        ["ab"],
        ["+", ""],
        ["+", 1],
        None,
        {"+": 1},
        ["\U0001F1FA\U0001F1F8\U0001F1FA\U0001F1F8"],
    ],
)
def test_invalid_alphabets(alphabet):
    assert is_alphabet(alphabet) is False
    with pytest.raises(InvalidConfigError):
        assert_alphabet(alphabet)


def test_alphabet_error_names_field():
    with pytest.raises(InvalidConfigError) as exc_info:
        assert_alphabet(["ab"], field="symbol_alphabet")
    assert exc_info.value.field == "symbol_alphabet"
    assert "symbol_alphabet" in str(exc_info.value)


@pytest.mark.parametrize("value", CASE_TRANSFORMS)
def test_case_transformation_valid(value):
    assert defines_case_transformation({"case_transform": value}) is True
    assert assert_case_transformation({"case_transform": value}) is True


@pytest.mark.parametrize("value", ["boogers", "capitalise", None, 1])
def test_case_transformation_invalid(value):
    assert defines_case_transformation({"case_transform": value}) is False
    with pytest.raises(InvalidConfigError):
        assert_case_transformation({"case_transform": value})


@pytest.mark.parametrize(
    "settings",
    [
        {"padding_type": "NONE"},
        {
            "padding_type": "FIXED",
            "padding_character": "+",
            "padding_characters_before": 0,
            "padding_characters_after": 2,
        },
        {
            "padding_type": "FIXED",
            "padding_character": "SEPARATOR",
            "padding_characters_before": 1,
            "padding_characters_after": 1,
        },
        {
            "padding_type": "FIXED",
            "padding_character": "RANDOM",
            "symbol_alphabet": ["!"],
            "padding_characters_before": 1,
            "padding_characters_after": 1,
        },
        {"padding_type": "ADAPTIVE", "padding_character": "+", "pad_to_length": 12},
        {
            "padding_type": "ADAPTIVE",
            "padding_character": "RANDOM",
            "padding_alphabet": ["*"],
            "pad_to_length": 30,
        },
    ],
)
def test_padding_characters_valid(settings):
    assert defines_padding_characters(settings) is True
    assert assert_padding_characters(settings) is True


@pytest.mark.parametrize(
    "settings, field",
    [
        ({"padding_type": "boogers"}, "padding_type"),
        ({}, "padding_type"),
        (
            {
                "padding_type": "FIXED",
                "padding_characters_before": 1,
                "padding_characters_after": 1,
            },
            "padding_character",
        ),
        (
            {
                "padding_type": "FIXED",
                "padding_character": "++",
                "padding_characters_before": 1,
                "padding_characters_after": 1,
            },
            "padding_character",
        ),
        (
            {
                "padding_type": "FIXED",
                "padding_character": "RANDOM",
                "padding_characters_before": 1,
                "padding_characters_after": 1,
            },
            "padding_alphabet",
        ),
        (
            {
                "padding_type": "FIXED",
                "padding_character": "+",
                "padding_characters_before": -1,
                "padding_characters_after": 1,
            },
            "padding_characters_before",
        ),
        (
            {"padding_type": "FIXED", "padding_character": "+", "padding_characters_before": 1},
            "padding_characters_after",
        ),
        (
            {"padding_type": "ADAPTIVE", "padding_character": "+", "pad_to_length": 11},
            "pad_to_length",
        ),
        ({"padding_type": "ADAPTIVE", "padding_character": "+"}, "pad_to_length"),
    ],
)
def test_padding_characters_invalid(settings, field):
    assert defines_padding_characters(settings) is False
    with pytest.raises(InvalidConfigError) as exc_info:
        assert_padding_characters(settings)
    assert exc_info.value.field == field


def test_padding_digits():
    assert defines_padding_digits({"padding_digits_before": 0, "padding_digits_after": 0})
    assert assert_padding_digits({"padding_digits_before": 2, "padding_digits_after": 5})
    assert defines_padding_digits({"padding_digits_before": "boogers"}) is False
    assert defines_padding_digits({"padding_digits_before": 1}) is False
    with pytest.raises(InvalidConfigError):
        assert_padding_digits({"padding_digits_before": True, "padding_digits_after": 0})


@pytest.mark.parametrize(
    "settings",
    [
        {"separator_character": "NONE"},
        {"separator_character": "-"},
        {"separator_character": "R"},
        {"separator_character": "\U0001F1FA\U0001F1F8"},
        {"separator_character": "\U0001F44D\U0001F3FD"},
        {"separator_character": "RANDOM", "separator_alphabet": ["-", "+"]},
        {"separator_character": "RANDOM", "symbol_alphabet": ["-"]},
        {
            "separator_character": "RANDOM",
            "separator_alphabet": [],
            "symbol_alphabet": ["-"],
        },
    ],
)
def test_separator_valid(settings):
    assert defines_separator(settings) is True
    assert assert_separator(settings) is True


@pytest.mark.parametrize(
    "settings",
    [
        {"separator_character": "boogers"},
        {"separator_character": "SEPARATOR"},
        {"separator_character": ""},
        {},
        {"separator_character": "RANDOM"},
        {"separator_character": "RANDOM", "separator_alphabet": ["--"]},
    ],
)
def test_separator_invalid(settings):
    assert defines_separator(settings) is False
    with pytest.raises(InvalidConfigError):
        assert_separator(settings)


@pytest.mark.parametrize(
    "settings",
    [
        {"word_length_min": 4, "word_length_max": 4},
        {"word_length_min": 4, "word_length_max": 8, "allow_accents": 0},
        {"word_length_min": 5, "word_length_max": 8, "allow_accents": "yes"},
        {
            "word_length_min": 4,
            "word_length_max": 8,
            "character_substitutions": {"a": "@", "é": "3"},
        },
    ],
)
def test_word_constraints_valid(settings):
    assert defines_word_constraints(settings) is True
    assert assert_word_constraints(settings) is True


@pytest.mark.parametrize(
    "settings, field",
    [
        ({"word_length_min": 8, "word_length_max": 4}, "word_length_min"),
        ({"word_length_min": 3, "word_length_max": 8}, "word_length_min"),
        ({"word_length_min": 4, "word_length_max": 3}, "word_length_max"),
        ({"word_length_min": 4.0, "word_length_max": 8}, "word_length_min"),
        ({"word_length_max": 8}, "word_length_min"),
        (
            {"word_length_min": 4, "word_length_max": 8, "allow_accents": [True]},
            "allow_accents",
        ),
        (
            {"word_length_min": 4, "word_length_max": 8, "character_substitutions": "a"},
            "character_substitutions",
        ),
        (
            {
                "word_length_min": 4,
                "word_length_max": 8,
                "character_substitutions": {"ab": "x"},
            },
            "character_substitutions",
        ),
        (
            {
                "word_length_min": 4,
                "word_length_max": 8,
                "character_substitutions": {"1": "x"},
            },
            "character_substitutions",
        ),
        (
            {
                "word_length_min": 4,
                "word_length_max": 8,
                "character_substitutions": {"a": ""},
            },
            "character_substitutions",
        ),
    ],
)
def test_word_constraints_invalid(settings, field):
    assert defines_word_constraints(settings) is False
    with pytest.raises(InvalidConfigError) as exc_info:
        assert_word_constraints(settings)
    assert exc_info.value.field == field


def test_words_requires_three_or_more():
    base = {"word_length_min": 4, "word_length_max": 8}
    assert assert_words({**base, "num_words": 3})
    with pytest.raises(InvalidConfigError) as exc_info:
        assert_words({**base, "num_words": 2})
    assert exc_info.value.field == "num_words"


def test_complete_config(complete_settings):
    assert assert_complete_config(complete_settings) is True
    assert is_complete_config({**complete_settings, "num_words": 1}) is False
    assert is_complete_config({**complete_settings, "symbol_alphabet": ["!!"]}) is False


def test_complete_config_rejects_non_mapping():
    assert is_complete_config(["num_words", 3]) is False


def test_digest_ignores_accent_representation():
    base = {"word_length_min": 4, "word_length_max": 8}
    assert word_constraints_digest({**base, "allow_accents": 0}) == word_constraints_digest(
        {**base, "allow_accents": False}
    )
    assert word_constraints_digest(base) == word_constraints_digest(
        {**base, "allow_accents": False, "character_substitutions": {}}
    )
    assert word_constraints_digest({**base, "allow_accents": 1}) == word_constraints_digest(
        {**base, "allow_accents": True}
    )


def test_digest_ignores_unrelated_settings():
    base = {"word_length_min": 4, "word_length_max": 8}
    assert word_constraints_digest(base) == word_constraints_digest(
        {**base, "num_words": 5, "case_transform": "UPPER"}
    )


@pytest.mark.parametrize(
    "changes",
    [
        {"word_length_min": 5},
        {"word_length_max": 9},
        {"allow_accents": True},
        {"character_substitutions": {"a": "@"}},
        {"character_substitutions": {"a": "4"}},
    ],
)
def test_digest_changes_with_each_constraint(changes):
    base = {"word_length_min": 4, "word_length_max": 8}
    assert word_constraints_digest(base) != word_constraints_digest({**base, **changes})


def test_digest_depends_on_substitution_order():
    base = {"word_length_min": 4, "word_length_max": 8}
    forward = {**base, "character_substitutions": {"a": "b", "b": "c"}}
    backward = {**base, "character_substitutions": {"b": "c", "a": "b"}}
    assert word_constraints_digest(forward) != word_constraints_digest(backward)


def test_substitution_keys_are_normalised():
    base = {"word_length_min": 4, "word_length_max": 8}
    decomposed = {**base, "character_substitutions": {"e\u0301": "3"}}
    composed = {**base, "character_substitutions": {"é": "3"}}

    assert word_constraints_from(decomposed).character_substitutions == {"é": "3"}
    assert word_constraints_digest(decomposed) == word_constraints_digest(composed)
