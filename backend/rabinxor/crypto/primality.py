import secrets
from random import Random
from typing import Optional

from rabinxor.crypto.bigint import modpow
from rabinxor.crypto.errors import InvalidArgument

DEFAULT_ROUNDS = 12
SMALL_PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31)


def is_probable_prime(n: int, rounds: int = DEFAULT_ROUNDS, rng: Optional[Random] = None) -> bool:
    """
    Miller-Rabin test with a trial-division fast path.

    A composite passes with probability at most 4**-rounds. Witnesses are
    drawn from `rng`, a secrets.SystemRandom unless one is injected.
    """
    if rounds < 0:
        raise InvalidArgument("rounds must be non-negative")
    if n < 2:
        return False
    if n in SMALL_PRIMES:
        return True
    if any((n % p) == 0 for p in SMALL_PRIMES):
        return False

    if rng is None:
        rng = secrets.SystemRandom()

    d = n - 1
    s = 0
    while d % 2 == 0:
        d //= 2
        s += 1

    for _ in range(rounds):
        a = rng.randrange(2, n - 1)
        x = modpow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = modpow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True
