import itertools
import random
from typing import Iterator, Union


NEWLINE_PROBABILITY = 1 / 5
GREEK_PROBABILITY = 1 / 8
SYMBOL_PROBABILITY = 1 / 10
PICTOGRAPH_PROBABILITY = 1 / 12

SYMBOLS = ("✋", "✅", "❌", "❎", "⭐")
PICTOGRAPHS = ("🍐", "🏀", "🍗", "🎉")


class RandomCharIter:
    """Infinite iterator of random characters of varying UTF-8 width.

    Each draw is a chain of independent weighted coin flips, first match
    wins: newline, a two-byte Greek letter, a three-byte symbol, a
    four-byte pictograph, and otherwise an ASCII lowercase letter. The same
    seeded ``random.Random`` always yields the same text.
    """

    def __init__(self, rng: random.Random):
        self.rng = rng

    def _flip(self, probability: float) -> bool:
        return self.rng.random() < probability

    def __iter__(self) -> "RandomCharIter":
        return self

    def __next__(self) -> str:
        if self._flip(NEWLINE_PROBABILITY):
            return "\n"
        if self._flip(GREEK_PROBABILITY):
            return chr(self.rng.randint(ord("α"), ord("ω")))
        if self._flip(SYMBOL_PROBABILITY):
            return self.rng.choice(SYMBOLS)
        if self._flip(PICTOGRAPH_PROBABILITY):
            return self.rng.choice(PICTOGRAPHS)
        return chr(self.rng.randint(ord("a"), ord("z")))


def random_text_iterator(seed_or_rng: Union[int, random.Random, None] = None) -> Iterator[str]:
    """Return a :class:`RandomCharIter` over an int seed or an existing generator."""
    if isinstance(seed_or_rng, random.Random):
        return RandomCharIter(seed_or_rng)
    return RandomCharIter(random.Random(seed_or_rng))


def random_text(seed_or_rng: Union[int, random.Random, None], length: int) -> str:
    if length < 0:
        raise ValueError("length must be non-negative")
    return "".join(itertools.islice(random_text_iterator(seed_or_rng), length))
