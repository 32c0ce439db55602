"""Password assembly pipeline.

Each password is built in a fixed order:

1. pick ``num_words`` words from the filtered pool (independent draws),
2. apply the case transformation,
3. add the leading/trailing digit groups as extra elements,
4. resolve the separator (once per password),
5. join the elements with the separator,
6. add padding characters.

The stage functions accept either a ``PolicyConfig`` or a plain (possibly
partial) settings mapping so they can be used and tested on their own.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, List, Sequence

from loguru import logger

from xkpass.entities import (
    CaseTransform,
    CharacterKind,
    CharacterSpec,
    InvalidArgumentError,
    InvalidConfigError,
    NotSupportedError,
    PaddingType,
    graphemes,
)
from xkpass.policy import PolicyConfig
from xkpass.random_source import RandomSource
from xkpass.validation import MIN_PAD_TO_LENGTH, as_settings, is_alphabet
from xkpass.word_source import WordSource


def _draw_from_alphabet(
    settings: Any, preferred: str, rng: RandomSource, field: str
) -> str:
    for alphabet_field in (preferred, "symbol_alphabet"):
        alphabet = settings.get(alphabet_field)
        if is_alphabet(alphabet):
            return rng.item(list(alphabet))
    raise InvalidConfigError(
        field, f"a valid {preferred} or symbol_alphabet to draw from", None
    )


def select_words(pool: Sequence[str], num_words: int, rng: RandomSource) -> List[str]:
    if not pool:
        raise InvalidConfigError(
            "word_length_min",
            "word constraints that match at least one word in the word source",
            len(pool),
        )
    return [pool[i] for i in rng.indexes(num_words, len(pool))]


def _capitalise(word: str) -> str:
    lowered = word.lower()
    return lowered[:1].upper() + lowered[1:]


def _invert(word: str) -> str:
    raised = word.upper()
    return raised[:1].lower() + raised[1:]


def apply_case_transformation(
    words: List[str], settings: Any, rng: RandomSource
) -> List[str]:
    """Transform the case of ``words`` in place and return the same list."""
    case_transform = as_settings(settings).get("case_transform")
    match case_transform:
        case CaseTransform.NONE:
            pass
        case CaseTransform.CAPITALISE:
            words[:] = [_capitalise(w) for w in words]
        case CaseTransform.INVERT:
            words[:] = [_invert(w) for w in words]
        case CaseTransform.LOWER:
            words[:] = [w.lower() for w in words]
        case CaseTransform.UPPER:
            words[:] = [w.upper() for w in words]
        case CaseTransform.ALTERNATE:
            even_lower = rng.boolean()
            words[:] = [
                w.lower() if (i % 2 == 0) == even_lower else w.upper()
                for i, w in enumerate(words)
            ]
        case CaseTransform.RANDOM:
            if words:
                upper_flags = rng.booleans(len(words))
                words[:] = [
                    w.upper() if upper else w.lower()
                    for w, upper in zip(words, upper_flags)
                ]
        case _:
            raise InvalidConfigError(
                "case_transform",
                f"one of {', '.join(member.value for member in CaseTransform)}",
                case_transform,
            )
    return words


def add_padding_digits(
    words: List[str], settings: Any, rng: RandomSource
) -> List[str]:
    """Insert the digit groups as new first/last elements of ``words`` in place."""
    settings = as_settings(settings)
    digits_before = settings.get("padding_digits_before") or 0
    digits_after = settings.get("padding_digits_after") or 0
    if digits_before > 0:
        words.insert(0, "".join(str(d) for d in rng.digits(digits_before)))
    if digits_after > 0:
        words.append("".join(str(d) for d in rng.digits(digits_after)))
    return words


def generate_separator(settings: Any, rng: RandomSource) -> str:
    settings = as_settings(settings)
    spec = CharacterSpec.parse(
        settings.get("separator_character"),
        field="separator_character",
        sentinels=(CharacterKind.NONE, CharacterKind.RANDOM),
    )
    match spec.kind:
        case CharacterKind.NONE:
            return ""
        case CharacterKind.RANDOM:
            return _draw_from_alphabet(
                settings, "separator_alphabet", rng, "separator_character"
            )
        case _:
            return spec.char


def _resolve_padding_character(
    settings: Any, rng: RandomSource, separator: str
) -> str:
    spec = CharacterSpec.parse(
        settings.get("padding_character"),
        field="padding_character",
        sentinels=(CharacterKind.RANDOM, CharacterKind.SEPARATOR),
    )
    match spec.kind:
        case CharacterKind.RANDOM:
            return _draw_from_alphabet(
                settings, "padding_alphabet", rng, "padding_character"
            )
        case CharacterKind.SEPARATOR:
            # may be "" when the separator is NONE; padding then adds nothing
            return separator
        case _:
            return spec.char


def add_padding_characters(
    text: str, settings: Any, rng: RandomSource, separator: str = ""
) -> str:
    settings = as_settings(settings)
    padding_type = settings.get("padding_type")
    if padding_type == PaddingType.NONE:
        return text
    if padding_type not in (PaddingType.FIXED, PaddingType.ADAPTIVE):
        raise InvalidConfigError(
            "padding_type", "one of NONE, FIXED, ADAPTIVE", padding_type
        )

    char = _resolve_padding_character(settings, rng, separator)

    if padding_type == PaddingType.FIXED:
        before = settings.get("padding_characters_before") or 0
        after = settings.get("padding_characters_after") or 0
        return f"{char * before}{text}{char * after}"

    # measured in grapheme clusters
    pad_to_length = settings.get("pad_to_length") or MIN_PAD_TO_LENGTH
    clusters = graphemes(text)
    if len(clusters) >= pad_to_length:
        return "".join(clusters[:pad_to_length])
    return text + char * (pad_to_length - len(clusters))


def _generate_one(config: PolicyConfig, pool: List[str], rng: RandomSource) -> str:
    words = select_words(pool, config.num_words, rng)
    apply_case_transformation(words, config, rng)
    add_padding_digits(words, config, rng)
    separator = generate_separator(config, rng)
    joined = separator.join(words)
    return add_padding_characters(joined, config, rng, separator)


def generate_passwords(
    config: PolicyConfig,
    word_source: WordSource,
    rng: RandomSource,
    count: int = 1,
) -> List[str]:
    """Generate ``count`` passwords, each from fresh random draws.

    Any failing stage aborts the whole batch.
    """
    if not isinstance(count, int) or isinstance(count, bool) or count < 1:
        raise InvalidArgumentError(
            f"count must be an integer greater than or equal to 1, got {count!r}"
        )
    if not isinstance(config, PolicyConfig):
        raise InvalidArgumentError("config must be a PolicyConfig")
    if not isinstance(word_source, WordSource):
        raise InvalidArgumentError("word_source must be a WordSource")
    if not isinstance(rng, RandomSource):
        raise InvalidArgumentError("rng must be a RandomSource")

    word_source.assert_ready()
    if not rng.is_synchronous:
        raise NotSupportedError(
            "synchronous password generation needs a synchronous random source"
        )

    pool = word_source.filtered_words(config)
    passwords = [_generate_one(config, pool, rng) for _ in range(count)]
    logger.debug(
        f"Generated {count} password(s) from a pool of {len(pool)} words"
    )
    return passwords


@lru_cache
def default_word_source() -> WordSource:
    return WordSource.default()


def passwords(n: int = 1) -> List[str]:
    """Generate ``n`` passwords with the default policy, words and secure RNG."""
    return generate_passwords(
        PolicyConfig.default(), default_word_source(), RandomSource(), n
    )


def password() -> str:
    return passwords(1)[0]
