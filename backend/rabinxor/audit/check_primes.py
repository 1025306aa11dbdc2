"""Verifies generated primes: exact bit length, 3 mod 4, Miller-Rabin."""

import sys
from random import Random
from typing import Optional

from rabinxor.crypto import DEFAULT_ROUNDS, generate_prime, is_probable_prime


def check(bits: int = 128, samples: int = 4, rounds: int = DEFAULT_ROUNDS, rng: Optional[Random] = None) -> dict:
    violations = []
    primes = []

    for _ in range(samples):
        p = generate_prime(bits, rounds, rng=rng)
        primes.append(p)
        if p.bit_length() != bits:
            violations.append({"prime": str(p), "error": f"bit length {p.bit_length()} != {bits}"})
        if p % 4 != 3:
            violations.append({"prime": str(p), "error": "not congruent to 3 mod 4"})
        if not is_probable_prime(p, rounds, rng=rng):
            violations.append({"prime": str(p), "error": "failed Miller-Rabin"})

    return {
        "check": "primes_3_mod_4",
        "bits": bits,
        "samples": len(primes),
        "violations": violations,
        "passed": len(violations) == 0,
    }


if __name__ == "__main__":
    result = check()
    status = "PASS" if result["passed"] else "FAIL"
    print(f"{status} - primes: {len(result['violations'])} violation(s)")
    for v in result["violations"]:
        print(f"  {v}")
    sys.exit(0 if result["passed"] else 1)
