"""
Arbitrary-precision helpers over Python ints: modular exponentiation,
extended Euclid / modular inverse and fixed-width unsigned byte encoding.

Every encoding in this package is big-endian, zero-padded on the left.
"""

from typing import Tuple

from rabinxor.crypto.errors import InvalidArgument, NoInverseExists, Overflow

BYTE_ORDER = "big"


def modpow(base: int, exponent: int, modulus: int) -> int:
    """Return base**exponent mod modulus, reduced into [0, modulus)."""
    if modulus <= 0:
        raise InvalidArgument("modulus must be positive")
    if exponent < 0:
        raise InvalidArgument("exponent must be non-negative")
    # built-in pow does left-to-right square-and-multiply with reduction at each step
    return pow(base, exponent, modulus)


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """Return (g, x, y) with a*x + b*y == g == gcd(a, b), g >= 0."""
    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_x, x = x, old_x - quotient * x
        old_y, y = y, old_y - quotient * y
    if old_r < 0:
        return -old_r, -old_x, -old_y
    return old_r, old_x, old_y


def modinverse(a: int, modulus: int) -> int:
    """Return x in [0, modulus) such that a*x == 1 (mod modulus)."""
    if modulus <= 0:
        raise InvalidArgument("modulus must be positive")
    g, x, _ = extended_gcd(a % modulus, modulus)
    if g != 1:
        raise NoInverseExists(f"{a} has no inverse modulo {modulus} (gcd={g})")
    return x % modulus


def byte_length(value: int) -> int:
    """Minimal number of bytes holding the unsigned magnitude of value."""
    return (abs(value).bit_length() + 7) // 8


def to_fixed_width_bytes(value: int, width: int, signed: bool = False) -> bytes:
    """
    Encode value as exactly `width` big-endian bytes.

    Non-negative values are always written unsigned, so a value whose
    magnitude fits in `width` bytes never overflows, even with signed=True.
    Negative values need signed=True and are written in two's complement;
    they overflow when -value exceeds 2**(8*width - 1).
    """
    if width < 0:
        raise InvalidArgument("width must be non-negative")
    if value < 0 and not signed:
        raise InvalidArgument("negative value needs signed=True")
    if byte_length(value) > width:
        raise Overflow(f"value does not fit in {width} byte(s)")
    try:
        return value.to_bytes(width, BYTE_ORDER, signed=value < 0)
    except OverflowError as exc:
        raise Overflow(f"negative value does not fit in {width} byte(s) of two's complement") from exc


def from_fixed_width_bytes(data: bytes) -> int:
    """Decode big-endian bytes as a non-negative integer."""
    return int.from_bytes(data, BYTE_ORDER, signed=False)
