import math
import secrets
from dataclasses import dataclass
from random import Random
from typing import Iterable, Optional, Tuple

from rabinxor.crypto.bigint import (
    byte_length,
    from_fixed_width_bytes,
    modinverse,
    modpow,
    to_fixed_width_bytes,
)
from rabinxor.crypto.errors import InvalidArgument, InvalidModulus
from rabinxor.crypto.primality import DEFAULT_ROUNDS
from rabinxor.crypto.primes import generate_prime_pair

Roots = Tuple[int, int, int, int]


@dataclass(frozen=True)
class RabinKey:
    p: int
    q: int

    @property
    def n(self) -> int:
        return self.p * self.q

    @property
    def width(self) -> int:
        return byte_length(self.n)


def validate_modulus(p: int, q: int) -> None:
    """Raise InvalidModulus unless p, q are distinct, coprime and both 3 mod 4."""
    if p < 3 or q < 3:
        raise InvalidModulus("p and q must be at least 3")
    if p == q:
        raise InvalidModulus("p and q must be distinct")
    if p % 4 != 3 or q % 4 != 3:
        raise InvalidModulus("p and q must both be congruent to 3 mod 4")
    if math.gcd(p, q) != 1:
        raise InvalidModulus("p and q must be coprime")


def generate_key(
    bits: int,
    rounds: int = DEFAULT_ROUNDS,
    max_attempts: Optional[int] = None,
    rng: Optional[Random] = None,
) -> RabinKey:
    p, q = generate_prime_pair(bits, rounds, max_attempts, rng)
    return RabinKey(p=p, q=q)


def rabin_square(m: int, n: int) -> int:
    return modpow(m, 2, n)


def roots(c: int, p: int, q: int) -> Roots:
    """
    Return the four square roots of c modulo n = p*q.

    r2 and r4 are the negations of r1 and r3 modulo n. c is assumed to be a
    quadratic residue; otherwise the values returned are not roots.
    """
    validate_modulus(p, q)
    n = p * q
    if not 0 <= c < n:
        raise InvalidArgument("c must satisfy 0 <= c < n")

    mp = modpow(c, (p + 1) // 4, p)
    mq = modpow(c, (q + 1) // 4, q)

    # CRT basis: a1 == 1 (mod p), 0 (mod q); a2 == 0 (mod p), 1 (mod q)
    a1 = q * modinverse(q % p, p)
    a2 = p * modinverse(p % q, q)

    r1 = (mp * a1 + mq * a2) % n
    r2 = (n - r1) % n
    r3 = (((p - mp) % p) * a1 + mq * a2) % n
    r4 = (n - r3) % n
    return r1, r2, r3, r4


def xor_combine(values: Iterable[int], width: int) -> bytes:
    """XOR the `width`-byte encodings of values together."""
    out = bytearray(width)
    for value in values:
        for i, b in enumerate(to_fixed_width_bytes(value, width)):
            out[i] ^= b
    return bytes(out)


def rabin_transform(m: int, p: int, q: int) -> bytes:
    """Square m mod n and XOR the four square roots of the result."""
    validate_modulus(p, q)
    n = p * q
    if not 0 < m < n:
        raise InvalidArgument("m must satisfy 0 < m < n")
    c = rabin_square(m, n)
    return xor_combine(roots(c, p, q), byte_length(n))


def rabin_transform_int(m: int, p: int, q: int) -> int:
    return from_fixed_width_bytes(rabin_transform(m, p, q))


def random_message(n: int, rng: Optional[Random] = None) -> int:
    """Sample m uniformly from [2, n - 1]."""
    if n <= 2:
        raise InvalidArgument("n must be greater than 2")
    if rng is None:
        rng = secrets.SystemRandom()
    return rng.randrange(2, n)
