from __future__ import annotations

import inspect
from pathlib import Path
import unicodedata
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Sequence, Tuple

from loguru import logger
from unidecode import unidecode

from xkpass.config import config
from xkpass.entities import (
    CacheStats,
    InvalidArgumentError,
    LoadInProgressError,
    LoadStats,
    NotReadyError,
    WordList,
)
from xkpass.validation import (
    MIN_WORD_LENGTH,
    word_constraints_digest,
    word_constraints_from,
)
from xkpass.word_lists import DEFAULT_WORDS


Sanitizer = Callable[[str], str]
WordsSource = Sequence[str] | Callable[[], Sequence[str]]


class WordSource:
    """A sanitised, deduplicated dictionary of candidate words.

    Words can be loaded from a list, a callable returning a list, or (with
    ``load_async``) an awaitable. Only one load may run at a time. Filtered
    views are cached per word-constraint digest until the next load.
    """

    MIN_WORD_LENGTH = MIN_WORD_LENGTH

    def __init__(
        self,
        words: WordsSource | None = None,
        *,
        sanitizers: Iterable[Sanitizer] = (),
    ) -> None:
        self._words: List[str] = []
        self._sanitizers: List[Sanitizer] = []
        self._loaded = False
        self._load_in_progress = False
        self._last_load_stats = LoadStats()
        self._filtered_words_cache: Dict[str, Tuple[str, ...]] = {}
        self._cache_hits = 0
        self._cache_misses = 0

        for sanitizer in sanitizers:
            if not callable(sanitizer):
                raise InvalidArgumentError(
                    f"sanitizers must be callables, got {sanitizer!r}"
                )
            self._sanitizers.append(sanitizer)

        if words is not None:
            self.load_sync(words)

    @classmethod
    def default(cls) -> WordSource:
        if config.word_list_path is not None:
            return cls.from_file(config.word_list_path)
        return cls(DEFAULT_WORDS)

    @classmethod
    def from_file(cls, path: Path | str, **kwargs: Any) -> WordSource:
        path = Path(path)
        logger.info(f"Loading word list from {path}")
        lines = path.read_text(encoding="utf-8").splitlines()
        return cls([line.strip() for line in lines if line.strip()], **kwargs)

    @staticmethod
    def base_sanitizer(text: str) -> str:
        """Remove every character that is not a Unicode letter or a dash."""
        return "".join(c for c in str(text) if c == "-" or c.isalpha())

    @staticmethod
    def strip_diacritics(text: str) -> str:
        """Remove accents, e.g. 'cliché' becomes 'cliche' and 'smørrebrød' 'smorrebrod'.

        Letters from non-Latin scripts are left as they are.
        """
        decomposed = unicodedata.normalize("NFD", text)
        stripped = "".join(c for c in decomposed if unicodedata.category(c) != "Mn")
        out = []
        for c in unicodedata.normalize("NFC", stripped):
            if not c.isascii() and unicodedata.name(c, "").startswith("LATIN"):
                out.append(unidecode(c))
            else:
                out.append(c)
        return "".join(out)

    @property
    def all_words(self) -> List[str]:
        return list(self._words)

    @property
    def sanitizers(self) -> List[Sanitizer]:
        return list(self._sanitizers)

    @property
    def last_load_stats(self) -> LoadStats:
        return self._last_load_stats.model_copy(deep=True)

    @property
    def filtered_words_cache_stats(self) -> CacheStats:
        return CacheStats(
            hits=self._cache_hits,
            misses=self._cache_misses,
            num_lists_cached=len(self._filtered_words_cache),
        )

    @property
    def ready(self) -> bool:
        """False only while an asynchronous load is in flight."""
        return not self._load_in_progress

    @property
    def loaded(self) -> bool:
        return self._loaded

    def assert_ready(self) -> bool:
        if self._load_in_progress:
            raise NotReadyError("word source is still loading")
        if not self._loaded:
            raise NotReadyError("no words have been loaded into the word source")
        return True

    def sanitize(self, text: str) -> str:
        output = text
        for sanitizer in self._sanitizers:
            output = sanitizer(str(output))
        return self.base_sanitizer(output)

    def build_word_list(self, words: Sequence[Any]) -> WordList:
        if not isinstance(words, (list, tuple)):
            raise InvalidArgumentError("words must be a list of strings")

        accepted: List[str] = []
        rejected: List[Any] = []
        for word in words:
            if not isinstance(word, str):
                rejected.append(word)
                continue
            try:
                sanitized = self.sanitize(word)
            except Exception as e:
                logger.debug(f"Sanitizer failed, rejecting word: {e}")
                rejected.append(word)
                continue
            if len(sanitized) < self.MIN_WORD_LENGTH:
                rejected.append(word)
                continue
            accepted.append(sanitized)

        return WordList(words=sorted(set(accepted)), rejected_words=rejected)

    def _clear_cache(self) -> None:
        self._filtered_words_cache = {}
        self._cache_hits = 0
        self._cache_misses = 0

    def _store(self, word_list: WordList) -> LoadStats:
        stats = LoadStats(
            num_loaded=len(word_list.words),
            num_rejected=len(word_list.rejected_words),
            rejected_words=word_list.rejected_words,
        )
        self._words = word_list.words
        self._last_load_stats = stats
        self._clear_cache()
        self._loaded = True
        logger.info(
            f"Loaded {stats.num_loaded} words ({stats.num_rejected} rejected)"
        )
        return stats.model_copy(deep=True)

    def load_sync(self, source: WordsSource) -> LoadStats:
        """Replace the loaded words with those from ``source``."""
        if self._load_in_progress:
            raise LoadInProgressError("another load is already in progress")

        if isinstance(source, (list, tuple)):
            words = source
        elif callable(source):
            words = source()
            if not isinstance(words, (list, tuple)) or not all(
                isinstance(word, str) for word in words
            ):
                raise InvalidArgumentError("callback did not return a list of strings")
        else:
            raise InvalidArgumentError(
                "word source must be a list of strings or a callable returning one"
            )

        return self._store(self.build_word_list(words))

    async def load_async(
        self,
        source: Awaitable[Sequence[str]] | Callable[[], Awaitable[Sequence[str]]],
    ) -> LoadStats:
        """Replace the loaded words with those ``source`` resolves to.

        The word source reports not ready until the load finishes. If
        ``source`` fails, the error propagates and the source is left empty.
        """
        if self._load_in_progress:
            if inspect.iscoroutine(source):
                source.close()
            raise LoadInProgressError("another load is already in progress")
        if callable(source) and not inspect.isawaitable(source):
            source = source()
        if not inspect.isawaitable(source):
            raise InvalidArgumentError(
                "async word source must be an awaitable or a callable returning one"
            )

        self._load_in_progress = True
        self._words = []
        self._loaded = False
        self._clear_cache()
        try:
            words = await source
            word_list = self.build_word_list(words)
        finally:
            self._load_in_progress = False
        return self._store(word_list)

    def filtered_words(self, constraints: Any) -> List[str]:
        """Words satisfying ``constraints``, a ``PolicyConfig`` or settings mapping.

        Substitutions are applied first (first occurrence of each key, in
        mapping order), then the length limits, then accent stripping unless
        ``allow_accents`` is set. Results are cached by constraint digest and
        each call returns a new list.
        """
        self.assert_ready()

        word_constraints = word_constraints_from(constraints)
        digest = word_constraints_digest(word_constraints)

        cached = self._filtered_words_cache.get(digest)
        if cached is not None:
            self._cache_hits += 1
            return list(cached)
        self._cache_misses += 1

        substitutions = word_constraints.character_substitutions
        filtered: List[str] = []
        for word in self._words:
            for char, replacement in substitutions.items():
                word = word.replace(char, replacement, 1)
            if not (
                word_constraints.word_length_min
                <= len(word)
                <= word_constraints.word_length_max
            ):
                continue
            if word_constraints.allow_accents:
                filtered.append(word)
            else:
                filtered.append(self.strip_diacritics(word))

        self._filtered_words_cache[digest] = tuple(filtered)
        logger.debug(
            f"Cached {len(filtered)} filtered words under digest {digest[:12]}"
        )
        return filtered
