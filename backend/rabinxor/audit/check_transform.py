"""Verifies the XOR transform: known vector, determinism, order-insensitivity, width."""

import itertools
import sys
from random import Random
from typing import Optional

from rabinxor.crypto import (
    byte_length,
    generate_key,
    rabin_square,
    rabin_transform,
    random_message,
    roots,
    xor_combine,
)

# p=7, q=11, m=20: roots (64, 13, 20, 57), 0x40 ^ 0x0D ^ 0x14 ^ 0x39
KNOWN_VECTOR = {"p": 7, "q": 11, "m": 20, "output": bytes([0x60])}


def check(bits: int = 128, samples: int = 4, rng: Optional[Random] = None) -> dict:
    violations = []

    got = rabin_transform(KNOWN_VECTOR["m"], KNOWN_VECTOR["p"], KNOWN_VECTOR["q"])
    if got != KNOWN_VECTOR["output"]:
        violations.append({"error": "known vector mismatch", "expected": KNOWN_VECTOR["output"].hex(), "got": got.hex()})

    key = generate_key(bits, rng=rng)
    width = byte_length(key.n)
    for _ in range(samples):
        m = random_message(key.n, rng=rng)
        out = rabin_transform(m, key.p, key.q)
        if len(out) != width:
            violations.append({"m": str(m), "error": f"output width {len(out)} != {width}"})
        if rabin_transform(m, key.p, key.q) != out:
            violations.append({"m": str(m), "error": "transform is not deterministic"})
        rs = roots(rabin_square(m, key.n), key.p, key.q)
        if any(xor_combine(perm, width) != out for perm in itertools.permutations(rs)):
            violations.append({"m": str(m), "error": "output depends on root order"})

    return {
        "check": "xor_transform",
        "bits": bits,
        "samples": samples,
        "violations": violations,
        "passed": len(violations) == 0,
    }


if __name__ == "__main__":
    result = check()
    status = "PASS" if result["passed"] else "FAIL"
    print(f"{status} - transform: {len(result['violations'])} violation(s)")
    for v in result["violations"]:
        print(f"  {v}")
    sys.exit(0 if result["passed"] else 1)
