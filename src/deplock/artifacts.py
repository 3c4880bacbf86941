"""Sorted, read-only collections of artifacts."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator, Sequence
from typing import overload

from deplock.identifier import ArtifactIdentifier
from deplock.models import Artifact, DeclaredDependency, ResolvedDependency


class Artifacts(Sequence[Artifact]):
    """Artifacts sorted into a deterministic order on construction.

    Duplicate identities are kept as-is; ``by`` returns the first in order.
    """

    __slots__ = ("_artifacts", "_index")

    def __init__(self, artifacts: Iterable[Artifact]) -> None:
        self._artifacts: tuple[Artifact, ...] = tuple(sorted(artifacts))
        self._index: dict[ArtifactIdentifier, Artifact] = {}
        for artifact in self._artifacts:
            self._index.setdefault(artifact.identifier, artifact)

    @classmethod
    def from_resolved(
        cls,
        resolved: Iterable[ResolvedDependency],
        enable_integrity_checking: bool,
    ) -> Artifacts:
        return cls(Artifact.from_resolved(item, enable_integrity_checking) for item in resolved)

    @classmethod
    def from_artifacts(
        cls,
        artifacts: Iterable[Artifact],
        enable_integrity_checking: bool,
    ) -> Artifacts:
        """Wrap already-built artifacts; their checksums are taken as given."""
        return cls(artifacts)

    @classmethod
    def from_declared(cls, declared: Iterable[DeclaredDependency]) -> Artifacts:
        return cls(Artifact.from_declared(item) for item in declared)

    def by(self, identifier: ArtifactIdentifier) -> Artifact | None:
        return self._index.get(identifier)

    def identifiers(self) -> list[ArtifactIdentifier]:
        return list(self._index)

    def duplicate_identifiers(self) -> list[ArtifactIdentifier]:
        counts = Counter(artifact.identifier for artifact in self._artifacts)
        return [identifier for identifier, count in counts.items() if count > 1]

    @overload
    def __getitem__(self, index: int) -> Artifact: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Artifact]: ...

    def __getitem__(self, index: int | slice) -> Artifact | Sequence[Artifact]:
        return self._artifacts[index]

    def __len__(self) -> int:
        return len(self._artifacts)

    def __iter__(self) -> Iterator[Artifact]:
        return iter(self._artifacts)

    def __repr__(self) -> str:
        return f"Artifacts({list(self._artifacts)!r})"


__all__ = ["Artifacts"]
