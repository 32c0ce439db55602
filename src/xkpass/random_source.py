from __future__ import annotations

import inspect
import math
from numbers import Real
import random
import secrets
from typing import Any, Awaitable, Callable, List, Sequence, TypeVar

from loguru import logger

from xkpass.entities import (
    InvalidArgumentError,
    InvalidResultError,
    NotSupportedError,
)


T = TypeVar("T")

SyncRNG = Callable[[int], Sequence[float]]
AsyncRNG = Callable[[int], Awaitable[Sequence[float]]]

_system_random = secrets.SystemRandom()

# Marks "argument not passed" so that an explicit None can mean "no sync RNG"
_DEFAULT: Any = object()


def secure_rng(n: int = 1) -> List[float]:
    """Draw ``n`` floats in [0, 1) from the operating system CSPRNG."""
    return [_system_random.random() for _ in range(n)]


def _assert_count(n: Any, name: str = "n") -> None:
    if not isinstance(n, int) or isinstance(n, bool) or n < 1:
        raise InvalidArgumentError(
            f"{name} must be an integer greater than or equal to 1, got {n!r}"
        )


def _validated(numbers: Any, n: int) -> List[float]:
    if not isinstance(numbers, (list, tuple)):
        raise InvalidResultError(
            f"random number generator returned {type(numbers).__name__}, expected a list"
        )
    if len(numbers) != n:
        raise InvalidResultError(
            f"random number generator returned wrong number of numbers: needed {n}, got {len(numbers)}"
        )
    for number in numbers:
        if isinstance(number, bool) or not isinstance(number, Real):
            raise InvalidResultError(
                f"random number generator returned a non-numeric value: {number!r}"
            )
        if not 0 <= number < 1:
            raise InvalidResultError(
                f"random number generator returned a value outside [0, 1): {number!r}"
            )
    return list(numbers)


class RandomSource:
    """Supplies uniformly distributed floats in [0, 1) and values derived from them.

    The only primitive is "give me ``n`` numbers"; booleans, digits, indexes and
    items are pure functions of those numbers, so a scripted generator fully
    determines every derived value.

    ``sync_rng`` defaults to the operating system CSPRNG. Passing ``None`` makes
    the source async-only; synchronous calls then raise ``NotSupportedError``.
    ``async_rng`` defaults to wrapping ``sync_rng``.
    """

    def __init__(
        self,
        sync_rng: SyncRNG | None = _DEFAULT,
        async_rng: AsyncRNG | None = None,
    ) -> None:
        if sync_rng is _DEFAULT:
            sync_rng = secure_rng
        if sync_rng is not None and not callable(sync_rng):
            raise InvalidArgumentError("sync_rng must be a callable or None")
        if async_rng is not None and not callable(async_rng):
            raise InvalidArgumentError("async_rng must be a callable or None")
        if sync_rng is None and async_rng is None:
            raise InvalidArgumentError(
                "a random source needs a synchronous or an asynchronous generator"
            )
        self._sync_rng = sync_rng
        self._async_rng = async_rng

    @classmethod
    def seeded(cls, seed: Any = None) -> RandomSource:
        """A reproducible source backed by ``random.Random``.

        Not cryptographically secure; only for tests and demos.
        """
        logger.warning(
            "Using a non-cryptographic random source; passwords will be predictable"
        )
        generator = random.Random(seed)
        return cls(lambda n: [generator.random() for _ in range(n)])

    @property
    def is_synchronous(self) -> bool:
        return self._sync_rng is not None

    # Pure derivations

    @staticmethod
    def index_from_number(number: float, length: int) -> int:
        """Map ``number`` in [0, 1) onto an index into a sequence of ``length`` items.

        Uses round-half-up of ``number * (length - 1)``, so both ends get half the
        weight of the inner indexes. This is not ``floor(number * length)``.
        """
        if not isinstance(length, int) or isinstance(length, bool) or length < 1:
            raise InvalidArgumentError(
                f"length must be an integer greater than or equal to 1, got {length!r}"
            )
        if length == 1:
            return 0
        return math.floor(number * (length - 1) + 0.5)

    @staticmethod
    def boolean_from_number(number: float) -> bool:
        return number >= 0.5

    @staticmethod
    def digit_from_number(number: float) -> int:
        return RandomSource.index_from_number(number, 10)

    # Synchronous generation

    def numbers(self, n: int = 1) -> List[float]:
        _assert_count(n)
        if self._sync_rng is None:
            raise NotSupportedError(
                "this random source does not support synchronous generation"
            )
        return _validated(self._sync_rng(n), n)

    def number(self) -> float:
        return self.numbers(1)[0]

    def booleans(self, n: int = 1) -> List[bool]:
        return [self.boolean_from_number(r) for r in self.numbers(n)]

    def boolean(self) -> bool:
        return self.booleans(1)[0]

    def digits(self, n: int = 1) -> List[int]:
        return [self.digit_from_number(r) for r in self.numbers(n)]

    def digit(self) -> int:
        return self.digits(1)[0]

    def indexes(self, n: int, length: int) -> List[int]:
        # validate before drawing so a bad length never consumes entropy
        self.index_from_number(0, length)
        return [self.index_from_number(r, length) for r in self.numbers(n)]

    def index(self, length: int) -> int:
        return self.indexes(1, length)[0]

    def item(self, items: Sequence[T]) -> T:
        """Pick one element. A single-element sequence is returned without drawing."""
        if not isinstance(items, (list, tuple)) or not items:
            raise InvalidArgumentError("items must be a non-empty list or tuple")
        if len(items) == 1:
            return items[0]
        return items[self.index(len(items))]

    # Asynchronous generation

    async def numbers_async(self, n: int = 1) -> List[float]:
        _assert_count(n)
        if self._async_rng is not None:
            result = self._async_rng(n)
            if inspect.isawaitable(result):
                result = await result
        else:
            result = self._sync_rng(n)
        return _validated(result, n)

    async def number_async(self) -> float:
        return (await self.numbers_async(1))[0]
