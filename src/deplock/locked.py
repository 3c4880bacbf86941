"""Locked dependency records and the comparison against resolved artifacts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from functools import total_ordering
from typing import Any

from deplock.checksum import Checksum, check_algorithm_header
from deplock.errors import LockfileError, MissingRequiredFieldError
from deplock.identifier import ArtifactIdentifier
from deplock.models import Artifact
from deplock.version import VersionPattern, VersionSyntax

UNSUPPORTED_CHECKSUM_MESSAGE = (
    "Encountered unsupported checksum format, consider using a later version of deplock"
)


class Divergence(StrEnum):
    """A field on which a locked entry and a resolved artifact disagree."""

    IDENTITY = "identity"
    VERSION = "version"
    SCOPE = "scope"
    OPTIONAL = "optional"
    CHECKSUM = "checksum"


@total_ordering
@dataclass(frozen=True, slots=True)
class LockedDependency:
    identifier: ArtifactIdentifier
    version: VersionPattern
    scope: str
    optional: bool = False
    checksum: Checksum | None = None

    @classmethod
    def from_record(
        cls,
        record: Mapping[str, Any],
        enable_integrity_checking: bool,
        *,
        version_syntax: VersionSyntax = "regex",
    ) -> LockedDependency:
        """Build a locked entry from one manifest record.

        With integrity checking disabled the ``checksum`` field is dropped
        before validation, so it never takes part in a comparison.
        """
        identifier = (
            ArtifactIdentifier.builder()
            .group_id(_required_str(record, "groupId"))
            .artifact_id(_required_str(record, "artifactId"))
            .classifier(_optional_str(record, "classifier"))
            .type(_optional_str(record, "type"))
            .build()
        )
        checksum = None
        if enable_integrity_checking:
            raw_checksum = _optional_str(record, "checksum")
            if raw_checksum is not None:
                checksum = check_algorithm_header(raw_checksum, UNSUPPORTED_CHECKSUM_MESSAGE)
        return cls(
            identifier=identifier,
            version=VersionPattern.parse(_required_str(record, "version"), version_syntax),
            scope=_required_str(record, "scope"),
            optional=_optional_bool(record, "optional", default=False),
            checksum=checksum,
        )

    @classmethod
    def from_artifact(
        cls,
        artifact: Artifact,
        integrity_check: bool,
        *,
        version_syntax: VersionSyntax = "regex",
    ) -> LockedDependency:
        return cls(
            identifier=artifact.identifier,
            version=VersionPattern.exact(artifact.version, version_syntax),
            scope=artifact.scope,
            optional=artifact.optional,
            checksum=artifact.checksum if integrity_check else None,
        )

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "groupId": self.identifier.group_id,
            "artifactId": self.identifier.artifact_id,
            "version": str(self.version),
            "scope": self.scope,
            "type": self.identifier.type,
            "optional": self.optional,
        }
        if self.checksum is not None:
            record["checksum"] = str(self.checksum)
        if self.identifier.classifier is not None:
            record["classifier"] = self.identifier.classifier
        return record

    def to_artifact(self) -> Artifact:
        return Artifact(
            identifier=self.identifier,
            version=self.version.exact_text(),
            scope=self.scope,
            optional=self.optional,
            checksum=self.checksum,
        )

    def compare(self, artifact: Artifact) -> frozenset[Divergence]:
        """Return every field on which ``artifact`` diverges from this entry."""
        return self._compare(artifact, artifact.version)

    def test(self, artifact: Artifact) -> bool:
        return not self.compare(artifact)

    def differs_only_by_checksum(self, artifact: Artifact) -> bool:
        return not (self.compare(artifact) - {Divergence.CHECKSUM})

    def with_my_version(self, my_version: str) -> WithMyVersion:
        return WithMyVersion(locked=self, my_version=my_version)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LockedDependency):
            return NotImplemented
        return str(self) < str(other)

    def __str__(self) -> str:
        return self._render(str(self.version))

    def _compare(self, artifact: Artifact, subject_version: str) -> frozenset[Divergence]:
        divergences: set[Divergence] = set()
        if self.identifier != artifact.identifier:
            divergences.add(Divergence.IDENTITY)
        if not self.version.matches(subject_version):
            divergences.add(Divergence.VERSION)
        if self.scope != artifact.scope:
            divergences.add(Divergence.SCOPE)
        if self.optional != artifact.optional:
            divergences.add(Divergence.OPTIONAL)
        if self.checksum != artifact.checksum:
            divergences.add(Divergence.CHECKSUM)
        return frozenset(divergences)

    def _render(self, version: str) -> str:
        checksum = str(self.checksum) if self.checksum is not None else "NO_CHECKSUM"
        return (
            f"{self.identifier}:{version}:{self.scope}"
            f":optional={str(self.optional).lower()}@{checksum}"
        )


@dataclass(frozen=True, slots=True)
class WithMyVersion:
    """A locked entry whose version pattern is tested against ``my_version``.

    The resolved artifact's own version is not consulted; identity, scope,
    optional flag and checksum are compared as usual.
    """

    locked: LockedDependency
    my_version: str

    def compare(self, artifact: Artifact) -> frozenset[Divergence]:
        return self.locked._compare(artifact, self.my_version)

    def test(self, artifact: Artifact) -> bool:
        return not self.compare(artifact)

    def differs_only_by_checksum(self, artifact: Artifact) -> bool:
        return not (self.compare(artifact) - {Divergence.CHECKSUM})

    def __str__(self) -> str:
        return self.locked._render(self.my_version)


def _required_str(record: Mapping[str, Any], key: str) -> str:
    if key not in record or record[key] is None:
        raise MissingRequiredFieldError(
            f"Lock manifest entry is missing required field `{key}`.",
            hint="Regenerate the lock manifest or add the field by hand.",
            context={"field": key, "entry": _describe(record)},
        )
    value = record[key]
    if not isinstance(value, str) or not value:
        raise LockfileError(
            f"Invalid lock manifest `{key}` value.",
            context={"field": key, "entry": _describe(record)},
        )
    return value


def _optional_str(record: Mapping[str, Any], key: str) -> str | None:
    value = record.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise LockfileError(
            f"Invalid lock manifest `{key}` value.",
            context={"field": key, "entry": _describe(record)},
        )
    return value


def _optional_bool(record: Mapping[str, Any], key: str, *, default: bool) -> bool:
    value = record.get(key, default)
    if not isinstance(value, bool):
        raise LockfileError(
            f"Invalid lock manifest `{key}` value.",
            hint="Use a JSON boolean (true/false).",
            context={"field": key, "entry": _describe(record)},
        )
    return value


def _describe(record: Mapping[str, Any]) -> str:
    return f"{record.get('groupId', '?')}:{record.get('artifactId', '?')}"


__all__ = [
    "UNSUPPORTED_CHECKSUM_MESSAGE",
    "Divergence",
    "LockedDependency",
    "WithMyVersion",
]
