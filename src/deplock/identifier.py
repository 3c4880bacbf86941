"""Artifact identity: the join key between resolved and locked dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering

from deplock.errors import MissingRequiredFieldError

DEFAULT_TYPE = "jar"


@total_ordering
@dataclass(frozen=True, slots=True)
class ArtifactIdentifier:
    """Group, artifact name, optional classifier and type of a dependency.

    Version, scope and checksum are deliberately not part of the identity.
    """

    group_id: str
    artifact_id: str
    classifier: str | None = None
    type: str = DEFAULT_TYPE

    @staticmethod
    def builder() -> ArtifactIdentifierBuilder:
        return ArtifactIdentifierBuilder()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ArtifactIdentifier):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        parts = [self.group_id, self.artifact_id, self.type]
        if self.classifier is not None:
            parts.append(self.classifier)
        return ":".join(parts)

    def sort_key(self) -> tuple[str, str, bool, str, str]:
        # An absent classifier sorts before any present one, including "".
        return (
            self.group_id,
            self.artifact_id,
            self.classifier is not None,
            self.classifier or "",
            self.type,
        )


class ArtifactIdentifierBuilder:
    def __init__(self) -> None:
        self._group_id: str | None = None
        self._artifact_id: str | None = None
        self._classifier: str | None = None
        self._type: str | None = None

    def group_id(self, value: str | None) -> ArtifactIdentifierBuilder:
        self._group_id = value
        return self

    def artifact_id(self, value: str | None) -> ArtifactIdentifierBuilder:
        self._artifact_id = value
        return self

    def classifier(self, value: str | None) -> ArtifactIdentifierBuilder:
        self._classifier = value
        return self

    def type(self, value: str | None) -> ArtifactIdentifierBuilder:
        self._type = value
        return self

    def build(self) -> ArtifactIdentifier:
        if not self._group_id:
            raise MissingRequiredFieldError(
                "Artifact identifier requires a groupId.",
                context={"field": "groupId", "artifactId": self._artifact_id or ""},
            )
        if not self._artifact_id:
            raise MissingRequiredFieldError(
                "Artifact identifier requires an artifactId.",
                context={"field": "artifactId", "groupId": self._group_id},
            )
        return ArtifactIdentifier(
            group_id=self._group_id,
            artifact_id=self._artifact_id,
            classifier=self._classifier,
            type=self._type or DEFAULT_TYPE,
        )


__all__ = ["DEFAULT_TYPE", "ArtifactIdentifier", "ArtifactIdentifierBuilder"]
