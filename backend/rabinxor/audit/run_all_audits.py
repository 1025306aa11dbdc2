"""Runs every property audit and writes a consolidated report."""

import json
import sys
from datetime import datetime, timezone

from rabinxor.audit.check_primes import check as check_primes
from rabinxor.audit.check_roots import check as check_roots
from rabinxor.audit.check_transform import check as check_transform


CHECKS = [
    check_primes,
    check_roots,
    check_transform,
]


def run_checks() -> list[dict]:
    return [fn() for fn in CHECKS]


def main():
    print("=" * 60)
    print("  PROPERTY AUDIT - Rabin XOR transform")
    print(f"  {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')}")
    print("=" * 60)
    print()

    all_results = run_checks()

    passed = 0
    failed = 0
    for r in all_results:
        name = r["check"]
        violations = r.get("violations", [])
        if r["passed"]:
            passed += 1
            print(f"  [ok]   {name}")
        else:
            failed += 1
            print(f"  [fail] {name} ({len(violations)} violation(s))")
            for v in violations:
                print(f"      {json.dumps(v)}")

    print()
    print("-" * 60)
    total = passed + failed
    print(f"  Result: {passed}/{total} checks passed")

    report = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "summary": {"total": total, "passed": passed, "failed": failed},
        "checks": all_results,
    }
    report_path = "audit_report.json"
    with open(report_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, default=str)
    print(f"\n  JSON report written to {report_path}")
    print("=" * 60)

    sys.exit(0 if failed == 0 else 1)


if __name__ == "__main__":
    main()
