import logging
import secrets
from random import Random
from typing import Optional, Tuple

from rabinxor.crypto.errors import GenerationTimeout, InvalidArgument
from rabinxor.crypto.primality import DEFAULT_ROUNDS, is_probable_prime

logger = logging.getLogger(__name__)

# below 5 bits there are fewer than two primes == 3 (mod 4) with the top bit set
MIN_PAIR_BITS = 5


def _candidate(bits: int, rng: Random) -> int:
    # top bit fixes the bit length, the two low bits force n == 3 (mod 4)
    return rng.getrandbits(bits) | (1 << (bits - 1)) | 0b11


def generate_prime(
    bits: int,
    rounds: int = DEFAULT_ROUNDS,
    max_attempts: Optional[int] = None,
    rng: Optional[Random] = None,
) -> int:
    """Return a probable prime of exactly `bits` bits, congruent to 3 mod 4."""
    if bits < 2:
        raise InvalidArgument("bits must be at least 2")
    if max_attempts is not None and max_attempts < 1:
        raise InvalidArgument("max_attempts must be positive")
    if rng is None:
        rng = secrets.SystemRandom()

    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        attempts += 1
        candidate = _candidate(bits, rng)
        if is_probable_prime(candidate, rounds, rng=rng):
            logger.debug("found %d-bit prime after %d attempt(s)", bits, attempts)
            return candidate

    logger.warning("no %d-bit prime found in %d attempt(s)", bits, attempts)
    raise GenerationTimeout(f"no {bits}-bit prime found in {max_attempts} attempts")


def generate_prime_pair(
    bits: int,
    rounds: int = DEFAULT_ROUNDS,
    max_attempts: Optional[int] = None,
    rng: Optional[Random] = None,
) -> Tuple[int, int]:
    """Return two distinct primes p, q of `bits` bits each, both 3 mod 4."""
    if bits < MIN_PAIR_BITS:
        raise InvalidArgument(f"bits must be at least {MIN_PAIR_BITS} for a distinct pair")
    if rng is None:
        rng = secrets.SystemRandom()

    p = generate_prime(bits, rounds, max_attempts, rng)
    q = generate_prime(bits, rounds, max_attempts, rng)
    while p == q:
        q = generate_prime(bits, rounds, max_attempts, rng)
    return p, q
