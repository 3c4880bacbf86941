"""Lock manifest typed model."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from deplock.locked import LockedDependency
from deplock.models import Artifact
from deplock.version import VersionSyntax

SCHEMA_VERSION = 1


@dataclass(frozen=True, slots=True)
class LockManifest:
    dependencies: tuple[LockedDependency, ...] = ()
    schema_version: int = SCHEMA_VERSION

    @classmethod
    def from_artifacts(
        cls,
        artifacts: Iterable[Artifact],
        integrity_check: bool,
        *,
        version_syntax: VersionSyntax = "regex",
    ) -> LockManifest:
        """Record a fresh manifest from the artifacts of a resolved build."""
        locked = (
            LockedDependency.from_artifact(item, integrity_check, version_syntax=version_syntax)
            for item in artifacts
        )
        return cls(dependencies=tuple(sorted(locked)))

    def records(self) -> list[dict[str, object]]:
        return [dependency.to_record() for dependency in self.dependencies]


__all__ = ["SCHEMA_VERSION", "LockManifest"]
