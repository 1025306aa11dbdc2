from rabinxor.crypto.bigint import (
    byte_length,
    extended_gcd,
    from_fixed_width_bytes,
    modinverse,
    modpow,
    to_fixed_width_bytes,
)
from rabinxor.crypto.errors import (
    GenerationTimeout,
    InvalidArgument,
    InvalidModulus,
    NoInverseExists,
    Overflow,
    RabinXorError,
)
from rabinxor.crypto.primality import DEFAULT_ROUNDS, is_probable_prime
from rabinxor.crypto.primes import generate_prime, generate_prime_pair
from rabinxor.crypto.rabin import (
    RabinKey,
    generate_key,
    rabin_square,
    rabin_transform,
    rabin_transform_int,
    random_message,
    roots,
    validate_modulus,
    xor_combine,
)

__all__ = [
    "DEFAULT_ROUNDS",
    "GenerationTimeout",
    "InvalidArgument",
    "InvalidModulus",
    "NoInverseExists",
    "Overflow",
    "RabinKey",
    "RabinXorError",
    "byte_length",
    "extended_gcd",
    "from_fixed_width_bytes",
    "generate_key",
    "generate_prime",
    "generate_prime_pair",
    "is_probable_prime",
    "modinverse",
    "modpow",
    "rabin_square",
    "rabin_transform",
    "rabin_transform_int",
    "random_message",
    "roots",
    "to_fixed_width_bytes",
    "validate_modulus",
    "xor_combine",
]
