"""Resolved and declared dependency records, and the ``Artifact`` built from them."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering

from deplock.checksum import Checksum, check_algorithm_header
from deplock.identifier import ArtifactIdentifier


@dataclass(frozen=True, slots=True)
class ResolvedDependency:
    """One entry of the host build tool's resolved dependency graph."""

    group_id: str
    artifact_id: str
    version: str
    scope: str
    optional: bool = False
    classifier: str | None = None
    type: str | None = None
    checksum: str | None = None


@dataclass(frozen=True, slots=True)
class DeclaredDependency:
    """A dependency as declared in the build file, before resolution."""

    group_id: str
    artifact_id: str
    version: str
    scope: str
    optional: bool = False
    classifier: str | None = None
    type: str | None = None


@total_ordering
@dataclass(frozen=True, slots=True)
class Artifact:
    identifier: ArtifactIdentifier
    version: str
    scope: str
    optional: bool = False
    checksum: Checksum | None = None

    @classmethod
    def from_resolved(
        cls,
        resolved: ResolvedDependency,
        enable_integrity_checking: bool,
    ) -> Artifact:
        checksum = None
        if enable_integrity_checking and resolved.checksum is not None:
            checksum = check_algorithm_header(
                resolved.checksum,
                f"Resolver supplied an unsupported checksum for {resolved.group_id}:"
                f"{resolved.artifact_id}",
            )
        return cls(
            identifier=_identifier_of(resolved),
            version=resolved.version,
            scope=resolved.scope,
            optional=resolved.optional,
            checksum=checksum,
        )

    @classmethod
    def from_declared(cls, declared: DeclaredDependency) -> Artifact:
        return cls(
            identifier=_identifier_of(declared),
            version=declared.version,
            scope=declared.scope,
            optional=declared.optional,
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Artifact):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        checksum = str(self.checksum) if self.checksum is not None else "NO_CHECKSUM"
        return (
            f"{self.identifier}:{self.version}:{self.scope}"
            f":optional={str(self.optional).lower()}@{checksum}"
        )

    def sort_key(self) -> tuple[tuple[str, str, bool, str, str], str, str, bool, bool, str]:
        return (
            self.identifier.sort_key(),
            self.version,
            self.scope,
            self.optional,
            self.checksum is not None,
            str(self.checksum or ""),
        )


def _identifier_of(dependency: ResolvedDependency | DeclaredDependency) -> ArtifactIdentifier:
    return (
        ArtifactIdentifier.builder()
        .group_id(dependency.group_id)
        .artifact_id(dependency.artifact_id)
        .classifier(dependency.classifier)
        .type(dependency.type)
        .build()
    )


__all__ = ["Artifact", "DeclaredDependency", "ResolvedDependency"]
