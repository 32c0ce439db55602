from itertools import cycle

import pytest

from xkpass.random_source import RandomSource
from xkpass.word_source import WordSource


def scripted_source(values):
    """A RandomSource that replays ``values`` forever, in order."""
    stream = cycle(values)
    return RandomSource(lambda n: [next(stream) for _ in range(n)])


@pytest.fixture
def low_rng():
    return scripted_source([0.0])


@pytest.fixture
def high_rng():
    return scripted_source([0.99999])


@pytest.fixture
def seeded_rng():
    return RandomSource.seeded(1234)


@pytest.fixture
def word_source():
    return WordSource(
        ["poop", "gives", "cliché", "boggers", "Saturday", "vica-versa"]
    )


@pytest.fixture
def complete_settings():
    return {
        "allow_accents": True,
        "case_transform": "ALTERNATE",
        "character_substitutions": {"a": "@", "o": "0"},
        "num_words": 4,
        "pad_to_length": 24,
        "padding_alphabet": ["+", "="],
        "padding_character": "RANDOM",
        "padding_characters_before": 1,
        "padding_characters_after": 3,
        "padding_digits_before": 1,
        "padding_digits_after": 2,
        "padding_type": "FIXED",
        "separator_alphabet": ["-", "."],
        "separator_character": "RANDOM",
        "symbol_alphabet": ["!", "?"],
        "word_length_min": 5,
        "word_length_max": 9,
    }
