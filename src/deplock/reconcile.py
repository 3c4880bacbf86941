"""Classification of resolved artifacts against locked dependencies."""

from __future__ import annotations

import json
import warnings
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum

from deplock.artifacts import Artifacts
from deplock.checksum import Checksum
from deplock.identifier import ArtifactIdentifier
from deplock.locked import Divergence, LockedDependency
from deplock.models import Artifact
from deplock.observability import StructuredLogger


class Verdict(StrEnum):
    MATCH = "match"
    MISSING = "missing"
    EXTRA = "extra"
    GENERAL_MISMATCH = "general_mismatch"
    CHECKSUM_MISMATCH = "checksum_mismatch"


FAILURE_VERDICTS = frozenset(verdict for verdict in Verdict if verdict is not Verdict.MATCH)


@dataclass(frozen=True, slots=True)
class ReconcileOutcome:
    verdict: Verdict
    identifier: ArtifactIdentifier
    locked: LockedDependency | None = None
    artifact: Artifact | None = None
    divergences: frozenset[Divergence] = frozenset()
    anchored_version: str | None = None

    def diverging_fields(self) -> list[Divergence]:
        return [divergence for divergence in Divergence if divergence in self.divergences]

    def describe(self) -> str:
        if self.verdict is Verdict.MATCH:
            return f"{self.identifier} matches the lock manifest."
        if self.locked is None:
            return f"Extra dependency {self.artifact}: resolved but absent from the lock manifest."
        if self.artifact is None:
            return f"Missing dependency {self.locked}: locked but not resolved by the build."
        locked, artifact, anchored = self.locked, self.artifact, self.anchored_version
        if self.verdict is Verdict.CHECKSUM_MISMATCH:
            return (
                f"Checksum mismatch for {self.identifier}: expected "
                f"{_expected(locked, Divergence.CHECKSUM)}, "
                f"got {_actual(artifact, anchored, Divergence.CHECKSUM)}. "
                "Version, scope and optional flag all match."
            )
        details = ", ".join(
            f"{divergence.value} expected {_expected(locked, divergence)} "
            f"got {_actual(artifact, anchored, divergence)}"
            for divergence in self.diverging_fields()
        )
        return f"Dependency {self.identifier} differs from the lock manifest: {details}."

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "verdict": self.verdict.value,
            "identifier": str(self.identifier),
            "divergences": [divergence.value for divergence in self.diverging_fields()],
            "message": self.describe(),
        }
        if self.locked is not None:
            payload["locked"] = self.locked.to_record()
        if self.artifact is not None:
            payload["actual"] = str(self.artifact)
        if self.anchored_version is not None:
            payload["anchored_version"] = self.anchored_version
        return payload


@dataclass(frozen=True, slots=True)
class ReconcileReport:
    outcomes: tuple[ReconcileOutcome, ...] = ()
    lock_digest: str | None = None

    @property
    def ok(self) -> bool:
        return all(outcome.verdict is Verdict.MATCH for outcome in self.outcomes)

    def by_verdict(self, verdict: Verdict) -> list[ReconcileOutcome]:
        return [outcome for outcome in self.outcomes if outcome.verdict is verdict]

    def failures(self, verdicts: Collection[Verdict] = FAILURE_VERDICTS) -> list[ReconcileOutcome]:
        return [outcome for outcome in self.outcomes if outcome.verdict in verdicts]

    def counts(self) -> dict[str, int]:
        counts = {verdict.value: 0 for verdict in Verdict}
        for outcome in self.outcomes:
            counts[outcome.verdict.value] += 1
        return counts

    def to_dict(self) -> dict[str, object]:
        return {
            "ok": self.ok,
            "lock_digest": self.lock_digest,
            "counts": self.counts(),
            "outcomes": [outcome.to_dict() for outcome in self.outcomes],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, sort_keys=True) + "\n"


def reconcile(
    locked: Iterable[LockedDependency],
    artifacts: Artifacts,
    *,
    anchored_versions: Mapping[ArtifactIdentifier, str] | None = None,
    lock_digest: str | None = None,
    logger: StructuredLogger | None = None,
) -> ReconcileReport:
    """Classify every locked entry, then every resolved artifact left unclaimed.

    ``anchored_versions`` maps identifiers whose locked version must be
    tested against the given version instead of the resolved one.
    """
    anchored = dict(anchored_versions or {})
    duplicates = artifacts.duplicate_identifiers()
    if duplicates:
        names = ", ".join(str(identifier) for identifier in duplicates)
        warnings.warn(
            f"Resolved dependencies contain duplicate identities: {names}.",
            RuntimeWarning,
            stacklevel=2,
        )
        if logger is not None:
            logger.log(
                operation="reconcile",
                identifier=None,
                verdict=None,
                message="Duplicate resolved identities; the first in sort order is compared.",
                level="warn",
                extra={"duplicates": [str(identifier) for identifier in duplicates]},
            )

    outcomes: list[ReconcileOutcome] = []
    claimed: set[ArtifactIdentifier] = set()
    for entry in locked:
        claimed.add(entry.identifier)
        outcomes.append(
            _classify(entry, artifacts.by(entry.identifier), anchored.get(entry.identifier))
        )
    for artifact in artifacts:
        if artifact.identifier not in claimed:
            outcomes.append(
                ReconcileOutcome(
                    verdict=Verdict.EXTRA,
                    identifier=artifact.identifier,
                    artifact=artifact,
                )
            )

    if logger is not None:
        for outcome in outcomes:
            logger.log(
                operation="reconcile",
                identifier=str(outcome.identifier),
                verdict=outcome.verdict.value,
                message=outcome.describe(),
                level="info" if outcome.verdict is Verdict.MATCH else "error",
            )
    return ReconcileReport(outcomes=tuple(outcomes), lock_digest=lock_digest)


def _classify(
    entry: LockedDependency,
    artifact: Artifact | None,
    anchored_version: str | None,
) -> ReconcileOutcome:
    if artifact is None:
        return ReconcileOutcome(verdict=Verdict.MISSING, identifier=entry.identifier, locked=entry)
    predicate = entry.with_my_version(anchored_version) if anchored_version is not None else entry
    if predicate.test(artifact):
        verdict = Verdict.MATCH
    elif predicate.differs_only_by_checksum(artifact):
        verdict = Verdict.CHECKSUM_MISMATCH
    else:
        verdict = Verdict.GENERAL_MISMATCH
    return ReconcileOutcome(
        verdict=verdict,
        identifier=entry.identifier,
        locked=entry,
        artifact=artifact,
        divergences=predicate.compare(artifact),
        anchored_version=anchored_version,
    )


def _expected(locked: LockedDependency, divergence: Divergence) -> str:
    if divergence is Divergence.VERSION:
        return str(locked.version)
    if divergence is Divergence.SCOPE:
        return locked.scope
    if divergence is Divergence.OPTIONAL:
        return str(locked.optional).lower()
    if divergence is Divergence.CHECKSUM:
        return _checksum_text(locked.checksum)
    return str(locked.identifier)


def _actual(artifact: Artifact, anchored_version: str | None, divergence: Divergence) -> str:
    if divergence is Divergence.VERSION:
        return anchored_version or artifact.version
    if divergence is Divergence.SCOPE:
        return artifact.scope
    if divergence is Divergence.OPTIONAL:
        return str(artifact.optional).lower()
    if divergence is Divergence.CHECKSUM:
        return _checksum_text(artifact.checksum)
    return str(artifact.identifier)


def _checksum_text(checksum: Checksum | None) -> str:
    return str(checksum) if checksum is not None else "no checksum"


__all__ = [
    "FAILURE_VERDICTS",
    "ReconcileOutcome",
    "ReconcileReport",
    "Verdict",
    "reconcile",
]
