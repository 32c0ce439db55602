from copy import deepcopy
from types import MappingProxyType
from typing import Annotated, Any, Mapping

from loguru import logger
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator

from xkpass.entities import (
    CaseTransform,
    CharacterKind,
    CharacterSpec,
    PaddingType,
    WordConstraints,
)
from xkpass.validation import (
    MIN_PAD_TO_LENGTH,
    as_settings,
    assert_complete_config,
    normalized_substitutions,
    word_constraints_digest,
    word_constraints_from,
)


DEFAULT_SYMBOL_ALPHABET = (
    "!",
    "@",
    "$",
    "%",
    "^",
    "&",
    "*",
    "-",
    "_",
    "+",
    "=",
    ":",
    "|",
    "~",
    "?",
    "/",
    ".",
    ";",
)

DEFAULT_SETTINGS: Mapping[str, Any] = MappingProxyType(
    {
        "allow_accents": False,
        "case_transform": "CAPITALISE",
        "character_substitutions": {},
        "num_words": 3,
        "padding_character": "RANDOM",
        "padding_characters_before": 2,
        "padding_characters_after": 2,
        "padding_digits_before": 2,
        "padding_digits_after": 2,
        "padding_type": "FIXED",
        "separator_character": "RANDOM",
        "symbol_alphabet": list(DEFAULT_SYMBOL_ALPHABET),
        "word_length_min": 4,
        "word_length_max": 8,
    }
)


def _read_only(mapping: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(normalized_substitutions(mapping))


ReadOnlyMapping = Annotated[Mapping[str, str], AfterValidator(_read_only)]


class PolicyConfig(BaseModel):
    """An immutable, fully validated set of password generation settings.

    Build one from a raw settings mapping with ``PolicyConfig(**settings)`` or
    ``PolicyConfig.from_settings(settings)``. The whole mapping is checked with
    ``assert_complete_config`` before any field is stored, so an invalid value
    anywhere raises ``InvalidConfigError`` and nothing is built. Unknown keys
    are dropped. Alphabets are stored as tuples and substitutions as a
    read-only mapping, so nothing held by the caller can change the config.
    """

    num_words: int
    word_length_min: int
    word_length_max: int
    allow_accents: bool = False
    character_substitutions: ReadOnlyMapping = Field(
        default_factory=dict, validate_default=True
    )
    case_transform: CaseTransform
    separator_character: str
    separator_alphabet: tuple[str, ...] = ()
    symbol_alphabet: tuple[str, ...] = ()
    padding_type: PaddingType
    padding_character: str = ""
    padding_alphabet: tuple[str, ...] = ()
    padding_characters_before: int = 0
    padding_characters_after: int = 0
    pad_to_length: int = MIN_PAD_TO_LENGTH
    padding_digits_before: int
    padding_digits_after: int

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def validate_settings(cls, data: Any) -> Any:
        if isinstance(data, PolicyConfig):
            return data
        raw = as_settings(data)
        assert_complete_config(raw)
        settings = {
            key: deepcopy(value)
            for key, value in raw.items()
            if key in cls.model_fields and value is not None
        }
        if "allow_accents" in settings:
            settings["allow_accents"] = bool(settings["allow_accents"])
        return settings

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any] | None = None) -> "PolicyConfig":
        if settings is None:
            return cls.default()
        return cls.model_validate(settings)

    @classmethod
    def default(cls) -> "PolicyConfig":
        return cls.model_validate(DEFAULT_SETTINGS)

    def derive(self, **overrides: Any) -> "PolicyConfig":
        """Return a new config with ``overrides`` applied on top of this one."""
        derived = type(self).model_validate({**self.all, **overrides})
        logger.debug(f"Derived policy config overriding {sorted(overrides)}")
        return derived

    @property
    def all(self) -> dict[str, Any]:
        """Every setting as a fresh plain dict, with defaults filled in."""
        return {
            "allow_accents": self.allow_accents,
            "case_transform": self.case_transform.value,
            "character_substitutions": dict(self.character_substitutions),
            "num_words": self.num_words,
            "pad_to_length": self.pad_to_length,
            "padding_alphabet": list(self.padding_alphabet),
            "padding_character": self.padding_character,
            "padding_characters_before": self.padding_characters_before,
            "padding_characters_after": self.padding_characters_after,
            "padding_digits_before": self.padding_digits_before,
            "padding_digits_after": self.padding_digits_after,
            "padding_type": self.padding_type.value,
            "separator_alphabet": list(self.separator_alphabet),
            "separator_character": self.separator_character,
            "symbol_alphabet": list(self.symbol_alphabet),
            "word_length_min": self.word_length_min,
            "word_length_max": self.word_length_max,
        }

    @property
    def separator(self) -> CharacterSpec:
        return CharacterSpec.parse(
            self.separator_character,
            field="separator_character",
            sentinels=(CharacterKind.NONE, CharacterKind.RANDOM),
        )

    @property
    def padding(self) -> CharacterSpec | None:
        if self.padding_type == PaddingType.NONE:
            return None
        return CharacterSpec.parse(
            self.padding_character,
            field="padding_character",
            sentinels=(CharacterKind.RANDOM, CharacterKind.SEPARATOR),
        )

    @property
    def word_constraints(self) -> WordConstraints:
        return word_constraints_from(self)

    @property
    def word_constraints_digest(self) -> str:
        return word_constraints_digest(self)
