"""End-to-end lock verification for one build."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace

from deplock.artifacts import Artifacts
from deplock.identifier import ArtifactIdentifier
from deplock.lockfile import LockManifest, manifest_digest
from deplock.models import ResolvedDependency
from deplock.observability import StructuredLogger
from deplock.policy import Policy, ensure_lock_satisfied
from deplock.reconcile import ReconcileReport, reconcile


def verify_lock(
    manifest: LockManifest,
    resolved: Iterable[ResolvedDependency],
    *,
    policy: Policy | None = None,
    anchored_versions: Mapping[ArtifactIdentifier, str] | None = None,
    logger: StructuredLogger | None = None,
) -> ReconcileReport:
    """Reconcile ``resolved`` against ``manifest`` and enforce ``policy``.

    With integrity checking disabled by the policy, checksums are dropped
    from the locked side as well as the resolved side. Raises
    ``LockMismatchError`` when any outcome in ``policy.fail_on`` is present;
    otherwise returns the full report.
    """
    active_policy = policy or Policy()
    artifacts = Artifacts.from_resolved(resolved, active_policy.enable_integrity_checking)
    locked = manifest.dependencies
    if not active_policy.enable_integrity_checking:
        locked = tuple(replace(entry, checksum=None) for entry in locked)
    report = reconcile(
        locked,
        artifacts,
        anchored_versions=anchored_versions,
        lock_digest=manifest_digest(manifest),
        logger=logger,
    )
    ensure_lock_satisfied(report, policy=active_policy)
    return report


__all__ = ["verify_lock"]
