import random
from typing import Dict, Optional
from dataclasses import dataclass
from faker import Faker

## === Config Class === ##

@dataclass
class IPConfig:
    """
    Configuration for IPGenerator
        public_share: float, proportion of public IPs
        private_weights: dict, weights for private IPs {a: x, b: x, c: x}
        subnet_share: float, proportion of addresses drawn from a few fixed /24s,
            which gives a delimiter(".") trie long shared octet paths
        num_subnets: int, size of that fixed /24 pool
        seed: int, seed for random number generator
    """
    public_share: float = 0.9
    private_weights: Optional[Dict[str, float]] = None
    subnet_share: float = 0.0
    num_subnets: int = 4
    seed: Optional[int] = None

    def __post_init__(self):
        if not 0 <= self.public_share <= 1:
            raise ValueError("public_share must be between 0 and 1")
        if not 0 <= self.subnet_share <= 1:
            raise ValueError("subnet_share must be between 0 and 1")
        if self.num_subnets < 1:
            raise ValueError("num_subnets must be at least 1")
        if self.private_weights is None:
            self.private_weights = {'a': 0.35, 'b': 0.10, 'c': 0.55}
        else:
            missing = [k for k in ('a', 'b', 'c') if k not in self.private_weights]
            if missing:
                raise ValueError(f"private_weights missing keys: {missing}")
            if any(self.private_weights[k] < 0 for k in ('a', 'b', 'c')):
                raise ValueError("private_weights must be non-negative")
            if sum(self.private_weights[k] for k in ('a', 'b', 'c')) == 0:
                raise ValueError("Sum of private_weights must be > 0")
            self.private_weights = {cls: self.private_weights[cls] for cls in sorted(self.private_weights)}


class IPGenerator:
    def __init__(self, config: IPConfig):
        self.config = config
        self.rng = random.Random(self.config.seed)

        self.fake = Faker()
        if self.config.seed is not None:
            self.fake.seed_instance(self.config.seed)
        self.priv_classes, self.weights = zip(*self.config.private_weights.items())
        self.subnets = [self._subnet() for _ in range(self.config.num_subnets)]

    def _subnet(self):
        return self.fake.ipv4_public().rsplit(".", 1)[0]

    def _priv_class(self):
        return self.rng.choices(self.priv_classes, weights=self.weights, k=1)[0]

    def single(self):
        if self.rng.random() < self.config.subnet_share:
            return f"{self.rng.choice(self.subnets)}.{self.rng.randint(1, 254)}"
        if self.rng.random() > self.config.public_share:
            return self.fake.ipv4_private(address_class=self._priv_class())
        return self.fake.ipv4_public()

    def batch(self, n):
        if n <= 0:
            raise ValueError("n must be positive")
        return [self.single() for _ in range(n)]
