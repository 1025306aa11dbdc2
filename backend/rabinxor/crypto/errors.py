"""Typed failures raised by the numeric core."""


class RabinXorError(Exception):
    """Base class for every error raised by rabinxor.crypto."""


class InvalidArgument(RabinXorError, ValueError):
    """An input lies outside the domain the operation accepts."""


class InvalidModulus(RabinXorError, ValueError):
    """p and q do not form a usable Rabin modulus."""


class NoInverseExists(RabinXorError, ArithmeticError):
    """gcd(a, modulus) != 1, so a has no modular inverse."""


class Overflow(RabinXorError, OverflowError):
    """A value does not fit in the requested fixed byte width."""


class GenerationTimeout(RabinXorError, RuntimeError):
    """Prime search exhausted its retry budget."""
