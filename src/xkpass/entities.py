from enum import StrEnum
import unicodedata
from typing import Any, Iterable, NamedTuple

from pydantic import BaseModel, ConfigDict, Field
import regex


class XkpassError(Exception):
    "Base class for every error raised by xkpass."


class InvalidArgumentError(XkpassError, ValueError):
    "Exception raised when a call site passes a malformed argument."


class InvalidConfigError(XkpassError):
    """Exception raised when a password policy setting fails validation.

    Deliberately not a ``ValueError`` so that raising it from inside a pydantic
    validator propagates it unchanged instead of wrapping it.
    """

    def __init__(self, field: str, expected: str, value: Any = None):
        self.field = field
        self.expected = expected
        self.value = value
        super().__init__(f"Invalid setting '{field}': expected {expected}, got {value!r}")


class NotReadyError(XkpassError):
    "Exception raised when words are requested before a load has completed."


class LoadInProgressError(XkpassError):
    "Exception raised when a word load is attempted while another is in flight."


class InvalidResultError(XkpassError):
    "Exception raised when a random number generator breaks its contract."


class NotSupportedError(XkpassError):
    "Exception raised when a synchronous call is made on an async-only source."


class CaseTransform(StrEnum):
    NONE = "NONE"
    ALTERNATE = "ALTERNATE"
    CAPITALISE = "CAPITALISE"
    INVERT = "INVERT"
    LOWER = "LOWER"
    RANDOM = "RANDOM"
    UPPER = "UPPER"


class PaddingType(StrEnum):
    NONE = "NONE"
    FIXED = "FIXED"
    ADAPTIVE = "ADAPTIVE"


class CharacterKind(StrEnum):
    """How a separator or padding character setting is resolved."""

    NONE = "NONE"
    RANDOM = "RANDOM"
    SEPARATOR = "SEPARATOR"
    LITERAL = "LITERAL"


def enum_values(enum_cls: type[StrEnum]) -> set[str]:
    return {member.value for member in enum_cls}


def graphemes(text: str) -> list[str]:
    """Split NFC-normalised ``text`` into extended grapheme clusters."""
    return regex.findall(r"\X", unicodedata.normalize("NFC", text))


def is_single_character(value: Any) -> bool:
    """True for a string holding exactly one user-perceived character.

    Counts extended grapheme clusters, so a base letter with combining marks,
    a flag pair or an emoji ZWJ sequence each count as one character.
    """
    if not isinstance(value, str):
        return False
    return len(graphemes(value)) == 1


class CharacterSpec(NamedTuple):
    """A separator or padding character setting with its sentinel resolved.

    ``char`` is only meaningful for ``CharacterKind.LITERAL`` and is empty otherwise.
    """

    kind: CharacterKind
    char: str = ""

    @classmethod
    def literal(cls, char: str) -> "CharacterSpec":
        if not is_single_character(char):
            raise InvalidConfigError("character", "exactly one character", char)
        return cls(CharacterKind.LITERAL, unicodedata.normalize("NFC", char))

    @classmethod
    def parse(
        cls,
        value: Any,
        field: str = "character",
        sentinels: Iterable[CharacterKind] = (
            CharacterKind.NONE,
            CharacterKind.RANDOM,
            CharacterKind.SEPARATOR,
        ),
    ) -> "CharacterSpec":
        if isinstance(value, CharacterSpec):
            return value
        allowed = [kind.value for kind in sentinels]
        if isinstance(value, str) and value in allowed:
            return cls(CharacterKind(value))
        if is_single_character(value):
            return cls(CharacterKind.LITERAL, unicodedata.normalize("NFC", value))
        raise InvalidConfigError(
            field,
            f"a single character or one of {', '.join(allowed)}",
            value,
        )


class WordConstraints(BaseModel):
    """The subset of a policy that decides which dictionary words are usable."""

    word_length_min: int
    word_length_max: int
    allow_accents: bool = False
    character_substitutions: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class WordList(NamedTuple):
    words: list[str]
    rejected_words: list[Any]


class LoadStats(BaseModel):
    num_loaded: int = 0
    num_rejected: int = 0
    rejected_words: list[Any] = Field(default_factory=list)


class CacheStats(NamedTuple):
    hits: int
    misses: int
    num_lists_cached: int
