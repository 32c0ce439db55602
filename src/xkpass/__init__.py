from xkpass.assembler import generate_passwords, password, passwords
from xkpass.entities import (
    CaseTransform,
    CharacterKind,
    CharacterSpec,
    InvalidArgumentError,
    InvalidConfigError,
    InvalidResultError,
    LoadInProgressError,
    NotReadyError,
    NotSupportedError,
    PaddingType,
    XkpassError,
)
from xkpass.policy import DEFAULT_SETTINGS, PolicyConfig
from xkpass.random_source import RandomSource
from xkpass.word_source import WordSource


__all__ = [
    "CaseTransform",
    "CharacterKind",
    "CharacterSpec",
    "DEFAULT_SETTINGS",
    "InvalidArgumentError",
    "InvalidConfigError",
    "InvalidResultError",
    "LoadInProgressError",
    "NotReadyError",
    "NotSupportedError",
    "PaddingType",
    "PolicyConfig",
    "RandomSource",
    "WordSource",
    "XkpassError",
    "generate_passwords",
    "password",
    "passwords",
]
