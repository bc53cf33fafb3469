import random
from dataclasses import dataclass
from typing import Optional

from workloads.word_generator import WORDS

## === Config Class === ##

@dataclass
class NamespaceConfig:
    """
    Configuration for NamespaceGenerator
        min_depth / max_depth: int, number of segments per key
        fanout: int, distinct segment names available per level
        separator: str, joins segments ("." for python-style dotted names)
        seed: int, seed for random number generator
    """
    min_depth: int = 2
    max_depth: int = 5
    fanout: int = 8
    separator: str = "."
    seed: Optional[int] = None

    def __post_init__(self):
        if self.min_depth < 1:
            raise ValueError("min_depth must be at least 1")
        if self.max_depth < self.min_depth:
            raise ValueError("max_depth must be >= min_depth")
        if not 1 <= self.fanout <= len(WORDS):
            raise ValueError(f"fanout must be between 1 and {len(WORDS)}")
        if not self.separator:
            raise ValueError("separator must be a non-empty string")


class NamespaceGenerator:
    """Dotted keys such as "lorem.ipsum.dolor" with a bounded vocabulary per level,
    so siblings repeat and keys share long token prefixes."""

    def __init__(self, config: NamespaceConfig):
        self.config = config
        self.rng = random.Random(self.config.seed)
        levels = self.config.max_depth
        self.vocab = [self.rng.sample(WORDS, self.config.fanout) for _ in range(levels)]

    def single(self):
        depth = self.rng.randint(self.config.min_depth, self.config.max_depth)
        segs = [self.rng.choice(self.vocab[level]) for level in range(depth)]
        return self.config.separator.join(segs)

    def batch(self, n):
        if n <= 0:
            raise ValueError("n must be positive")
        return [self.single() for _ in range(n)]
