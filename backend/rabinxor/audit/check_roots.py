"""Verifies that every root squares back to c and that the roots pair up as negations."""

import sys
from random import Random
from typing import Optional

from rabinxor.crypto import generate_key, rabin_square, random_message, roots


def check(bits: int = 128, samples: int = 8, rng: Optional[Random] = None) -> dict:
    key = generate_key(bits, rng=rng)
    n = key.n
    violations = []

    for _ in range(samples):
        m = random_message(n, rng=rng)
        c = rabin_square(m, n)
        rs = roots(c, key.p, key.q)
        for r in rs:
            if pow(r, 2, n) != c:
                violations.append({"c": str(c), "root": str(r), "error": "root does not square to c"})
        r1, r2, r3, r4 = rs
        if r2 != (n - r1) % n or r4 != (n - r3) % n:
            violations.append({"c": str(c), "error": "roots are not negation pairs"})
        if m not in rs:
            violations.append({"c": str(c), "error": "original message missing from roots"})

    return {
        "check": "rabin_roots",
        "bits": bits,
        "samples": samples,
        "violations": violations,
        "passed": len(violations) == 0,
    }


if __name__ == "__main__":
    result = check()
    status = "PASS" if result["passed"] else "FAIL"
    print(f"{status} - roots: {len(result['violations'])} violation(s)")
    for v in result["violations"]:
        print(f"  {v}")
    sys.exit(0 if result["passed"] else 1)
