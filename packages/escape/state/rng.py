"""
XorShift128 RNG - deterministic randomness for every game decision.

Nothing in the engine calls the random module. Each consumer receives a
Random seeded from the run seed, so a seed string fully determines enemy
behaviour and headless playthroughs.

Streams (see GameRNG):
- ai_rng: Enemy decision policy (reseeded per loop: seed + loop)
- choice_rng: Choices made by RandomMenu during headless runs
"""

from dataclasses import dataclass

_MASK64 = 0xFFFFFFFFFFFFFFFF


class XorShift128:
    """
    XorShift128 PRNG.

    State is two 64-bit integers (seed0, seed1), derived from the seed
    through the MurmurHash3 finalizer.
    """

    def __init__(self, seed: int):
        # A zero state would only ever produce zeros
        if seed == 0:
            seed = -0x8000000000000000
        self.seed0 = self._murmur_hash3(seed)
        self.seed1 = self._murmur_hash3(self.seed0)

    @staticmethod
    def _murmur_hash3(x: int) -> int:
        """MurmurHash3 finalizer - used for seed initialization."""
        x = x & _MASK64
        x ^= x >> 33
        x = (x * 0xff51afd7ed558ccd) & _MASK64
        x ^= x >> 33
        x = (x * 0xc4ceb9fe1a85ec53) & _MASK64
        x ^= x >> 33
        return x

    def _next_long(self) -> int:
        """Next unsigned 64-bit value."""
        s1 = self.seed0
        s0 = self.seed1
        self.seed0 = s0
        s1 ^= (s1 << 23) & _MASK64
        self.seed1 = (s1 ^ s0 ^ (s1 >> 17) ^ (s0 >> 26)) & _MASK64
        return (self.seed0 + self.seed1) & _MASK64

    def next_int(self, bound: int) -> int:
        """Random int in [0, bound)."""
        if bound <= 0:
            raise ValueError("bound must be positive")
        return (self._next_long() >> 1) % bound


class Random:
    """
    Counting wrapper around XorShift128.

    The counter records how many values have been drawn, which makes it easy
    to check in tests that a policy consumed exactly one roll per decision.
    """

    def __init__(self, seed: int, counter: int = 0):
        """
        Initialize RNG with seed and optional counter.

        Args:
            seed: 64-bit seed value
            counter: Number of draws to skip before the first use
        """
        self._rng = XorShift128(seed)
        self.counter = 0
        for _ in range(counter):
            self.random_int(999)

    def random_int(self, range_val: int) -> int:
        """Random int in [0, range_val] INCLUSIVE."""
        self.counter += 1
        return self._rng.next_int(range_val + 1)


def seed_to_long(seed_string: str) -> int:
    """
    Convert a seed string (e.g., "ESCAPE42") to its numeric value.

    Seeds use base-35 encoding: 0-9 + A-Z excluding O. O is read as 0 so the
    two cannot be confused when typed. A purely numeric string is taken as a
    plain integer.
    """
    if seed_string.lstrip("-").isdigit():
        return int(seed_string)

    characters = "0123456789ABCDEFGHIJKLMNPQRSTUVWXYZ"
    seed_string = seed_string.upper().replace("O", "0")

    result = 0
    for char in seed_string:
        remainder = characters.find(char)
        if remainder == -1:
            continue
        result = result * len(characters) + remainder

    return result & _MASK64


@dataclass
class GameRNG:
    """
    RNG streams for one session.

    ai_rng is reseeded with seed + loop at the start of every loop, so the
    enemies of a given loop behave the same way on every replay of a seed.
    """
    seed: int
    loop: int = 0

    ai_rng: Random = None
    choice_rng: Random = None

    def __post_init__(self):
        self.choice_rng = Random(self.seed)
        self._init_loop_streams()

    def _init_loop_streams(self):
        self.ai_rng = Random(self.seed + self.loop)

    def advance_loop(self):
        """Start a new loop of the run, reseeding per-loop streams."""
        self.loop += 1
        self._init_loop_streams()
