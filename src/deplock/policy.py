"""Policy configuration and enforcement helpers."""

from __future__ import annotations

from dataclasses import dataclass

from deplock.errors import LockMismatchError
from deplock.reconcile import FAILURE_VERDICTS, ReconcileReport, Verdict
from deplock.version import VersionSyntax


@dataclass(frozen=True, slots=True)
class Policy:
    enable_integrity_checking: bool = True
    version_syntax: VersionSyntax = "regex"
    fail_on: frozenset[Verdict] = FAILURE_VERDICTS


def ensure_lock_satisfied(report: ReconcileReport, *, policy: Policy) -> None:
    """Raise with every failing outcome at once, never just the first."""
    failures = report.failures(policy.fail_on)
    if not failures:
        return
    lines = [f"  - {outcome.describe()}" for outcome in failures]
    counts = {
        verdict: str(count)
        for verdict, count in report.counts().items()
        if Verdict(verdict) in policy.fail_on
    }
    hint = "Update the lock manifest if these changes are intended."
    if any(outcome.verdict is Verdict.CHECKSUM_MISMATCH for outcome in failures):
        hint = (
            "A checksum mismatch with an otherwise identical dependency can mean the "
            "artifact was tampered with; verify its source before relocking."
        )
    raise LockMismatchError(
        "Resolved dependencies do not match the lock manifest:\n" + "\n".join(lines),
        hint=hint,
        context={"operation": "verify_lock", **counts},
    )


__all__ = ["Policy", "ensure_lock_satisfied"]
