"""Validation rules for password policy settings.

Every rule is a plain function over a settings mapping so that partial
settings (for example just the word constraints a ``WordSource`` needs) can be
checked on their own. ``assert_*`` functions return ``True`` or raise
``InvalidConfigError``; the matching ``is_*``/``defines_*`` predicates return a
boolean and never raise.

Anything exposing an ``all`` mapping (a ``PolicyConfig``) is accepted wherever
a mapping is.
"""

import hashlib
import json
import unicodedata
from typing import Any, Callable, Mapping

from xkpass.entities import (
    CaseTransform,
    CharacterKind,
    InvalidConfigError,
    PaddingType,
    WordConstraints,
    enum_values,
    is_single_character,
)


MIN_WORD_LENGTH = 4
MIN_NUM_WORDS = 3
MIN_PAD_TO_LENGTH = 12

ALPHABET_FIELDS = ("separator_alphabet", "symbol_alphabet", "padding_alphabet")


def as_settings(settings: Any) -> Mapping[str, Any]:
    if isinstance(settings, Mapping):
        return settings
    all_settings = getattr(settings, "all", None)
    if isinstance(all_settings, Mapping):
        return all_settings
    raise InvalidConfigError("settings", "a mapping of settings", settings)


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _predicate(assertion: Callable[..., bool]) -> Callable[..., bool]:
    def check(*args: Any, **kwargs: Any) -> bool:
        try:
            return assertion(*args, **kwargs)
        except InvalidConfigError:
            return False

    check.__name__ = assertion.__name__.replace("assert_", "defines_", 1)
    check.__doc__ = f"Boolean form of ``{assertion.__name__}``."
    return check


def _assert_non_negative_integer(settings: Mapping[str, Any], field: str) -> None:
    value = settings.get(field)
    if not is_integer(value) or value < 0:
        raise InvalidConfigError(field, "an integer greater than or equal to 0", value)


def assert_alphabet(value: Any, field: str = "alphabet") -> bool:
    if not isinstance(value, (list, tuple)) or not value:
        raise InvalidConfigError(field, "a non-empty list of single characters", value)
    for item in value:
        if not is_single_character(item):
            raise InvalidConfigError(
                field, "a non-empty list of single characters", value
            )
    return True


is_alphabet = _predicate(assert_alphabet)
is_alphabet.__name__ = "is_alphabet"


def assert_case_transformation(settings: Any) -> bool:
    value = as_settings(settings).get("case_transform")
    if not isinstance(value, str) or value not in enum_values(CaseTransform):
        raise InvalidConfigError(
            "case_transform",
            f"one of {', '.join(sorted(enum_values(CaseTransform)))}",
            value,
        )
    return True


def assert_padding_characters(settings: Any) -> bool:
    settings = as_settings(settings)
    padding_type = settings.get("padding_type")
    if not isinstance(padding_type, str) or padding_type not in enum_values(
        PaddingType
    ):
        raise InvalidConfigError(
            "padding_type", "one of NONE, FIXED, ADAPTIVE", padding_type
        )
    if padding_type == PaddingType.NONE:
        return True

    padding_character = settings.get("padding_character")
    if padding_character == CharacterKind.RANDOM:
        if not (
            is_alphabet(settings.get("padding_alphabet"))
            or is_alphabet(settings.get("symbol_alphabet"))
        ):
            raise InvalidConfigError(
                "padding_alphabet",
                "a valid padding_alphabet or symbol_alphabet when padding_character is RANDOM",
                settings.get("padding_alphabet"),
            )
    elif padding_character != CharacterKind.SEPARATOR:
        if not is_single_character(padding_character):
            raise InvalidConfigError(
                "padding_character",
                "a single character, RANDOM or SEPARATOR",
                padding_character,
            )

    match padding_type:
        case PaddingType.FIXED:
            _assert_non_negative_integer(settings, "padding_characters_before")
            _assert_non_negative_integer(settings, "padding_characters_after")
        case PaddingType.ADAPTIVE:
            pad_to_length = settings.get("pad_to_length")
            if not is_integer(pad_to_length) or pad_to_length < MIN_PAD_TO_LENGTH:
                raise InvalidConfigError(
                    "pad_to_length",
                    f"an integer greater than or equal to {MIN_PAD_TO_LENGTH}",
                    pad_to_length,
                )
    return True


def assert_padding_digits(settings: Any) -> bool:
    settings = as_settings(settings)
    _assert_non_negative_integer(settings, "padding_digits_before")
    _assert_non_negative_integer(settings, "padding_digits_after")
    return True


def assert_separator(settings: Any) -> bool:
    settings = as_settings(settings)
    separator = settings.get("separator_character")
    if separator == CharacterKind.NONE:
        return True
    if separator == CharacterKind.RANDOM:
        if not (
            is_alphabet(settings.get("separator_alphabet"))
            or is_alphabet(settings.get("symbol_alphabet"))
        ):
            raise InvalidConfigError(
                "separator_alphabet",
                "a valid separator_alphabet or symbol_alphabet when separator_character is RANDOM",
                settings.get("separator_alphabet"),
            )
        return True
    if not is_single_character(separator):
        raise InvalidConfigError(
            "separator_character", "a single character, NONE or RANDOM", separator
        )
    return True


def assert_word_constraints(settings: Any) -> bool:
    settings = as_settings(settings)
    for field in ("word_length_min", "word_length_max"):
        value = settings.get(field)
        if not is_integer(value) or value < MIN_WORD_LENGTH:
            raise InvalidConfigError(
                field, f"an integer greater than or equal to {MIN_WORD_LENGTH}", value
            )
    if settings["word_length_min"] > settings["word_length_max"]:
        raise InvalidConfigError(
            "word_length_min",
            f"a value no greater than word_length_max ({settings['word_length_max']})",
            settings["word_length_min"],
        )

    allow_accents = settings.get("allow_accents")
    if allow_accents is not None and not isinstance(
        allow_accents, (bool, int, float, str)
    ):
        raise InvalidConfigError(
            "allow_accents", "a boolean or other primitive value", allow_accents
        )

    substitutions = settings.get("character_substitutions")
    if substitutions is not None:
        if not isinstance(substitutions, Mapping):
            raise InvalidConfigError(
                "character_substitutions",
                "a mapping of single letters to replacement strings",
                substitutions,
            )
        for key, replacement in substitutions.items():
            if not is_single_character(key) or not unicodedata.normalize(
                "NFC", key
            ).isalpha():
                raise InvalidConfigError(
                    "character_substitutions", "single letters as keys", key
                )
            if not isinstance(replacement, str) or not replacement:
                raise InvalidConfigError(
                    "character_substitutions",
                    f"a non-empty string replacement for '{key}'",
                    replacement,
                )
    return True


def assert_words(settings: Any) -> bool:
    settings = as_settings(settings)
    assert_word_constraints(settings)
    num_words = settings.get("num_words")
    if not is_integer(num_words) or num_words < MIN_NUM_WORDS:
        raise InvalidConfigError(
            "num_words", f"an integer greater than or equal to {MIN_NUM_WORDS}", num_words
        )
    return True


def assert_optional_alphabets(settings: Any) -> bool:
    settings = as_settings(settings)
    for field in ALPHABET_FIELDS:
        value = settings.get(field)
        if value is None:
            continue
        if isinstance(value, (list, tuple)) and not value:
            continue
        assert_alphabet(value, field=field)
    return True


def assert_complete_config(settings: Any) -> bool:
    settings = as_settings(settings)
    assert_words(settings)
    assert_case_transformation(settings)
    assert_optional_alphabets(settings)
    assert_separator(settings)
    assert_padding_digits(settings)
    assert_padding_characters(settings)
    return True


defines_case_transformation = _predicate(assert_case_transformation)
defines_padding_characters = _predicate(assert_padding_characters)
defines_padding_digits = _predicate(assert_padding_digits)
defines_separator = _predicate(assert_separator)
defines_word_constraints = _predicate(assert_word_constraints)
defines_words = _predicate(assert_words)
is_complete_config = _predicate(assert_complete_config)
is_complete_config.__name__ = "is_complete_config"


def normalized_substitutions(substitutions: Mapping[str, str] | None) -> dict[str, str]:
    """Substitutions with NFC keys, the form loaded words are stored in."""
    return {
        unicodedata.normalize("NFC", key): replacement
        for key, replacement in (substitutions or {}).items()
    }


def word_constraints_from(settings: Any) -> WordConstraints:
    if isinstance(settings, WordConstraints):
        return settings
    settings = as_settings(settings)
    assert_word_constraints(settings)
    return WordConstraints(
        word_length_min=settings["word_length_min"],
        word_length_max=settings["word_length_max"],
        allow_accents=bool(settings.get("allow_accents")),
        character_substitutions=normalized_substitutions(
            settings.get("character_substitutions")
        ),
    )


def word_constraints_digest(settings: Any) -> str:
    """Content hash of the word constraints, used as the filter cache key.

    Substitutions are serialised as an ordered list of pairs because they are
    applied in mapping order and the order can change the filtered words.
    """
    constraints = word_constraints_from(settings)
    canonical = json.dumps(
        [
            ["word_length_min", constraints.word_length_min],
            ["word_length_max", constraints.word_length_max],
            ["allow_accents", constraints.allow_accents],
            [
                "character_substitutions",
                [list(pair) for pair in constraints.character_substitutions.items()],
            ],
        ],
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
