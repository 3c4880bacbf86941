from typing import Any

import pytest

from deplock import (
    Artifact,
    ArtifactIdentifier,
    Checksum,
    Divergence,
    LockedDependency,
    VersionPattern,
)
from deplock.errors import (
    LockfileError,
    MissingRequiredFieldError,
    UnsupportedChecksumFormatError,
)


def _artifact(identifier: ArtifactIdentifier, **overrides: Any) -> Artifact:
    fields: dict[str, Any] = {
        "identifier": identifier,
        "version": "1.2.3",
        "scope": "compile",
        "optional": False,
        "checksum": Checksum(algorithm="sha256", digest="abc"),
    }
    fields.update(overrides)
    return Artifact(**fields)


def test_from_record_reads_every_field(lib_record: dict[str, Any]) -> None:
    record = {**lib_record, "classifier": "tests", "type": "test-jar", "optional": True}

    locked = LockedDependency.from_record(record, True)

    assert locked.identifier == ArtifactIdentifier(
        group_id="com.x", artifact_id="lib", classifier="tests", type="test-jar"
    )
    assert locked.version == VersionPattern.literal("1.2.3")
    assert locked.scope == "compile"
    assert locked.optional is True
    assert locked.checksum == Checksum(algorithm="sha256", digest="abc")


def test_from_record_applies_defaults() -> None:
    record = {"groupId": "com.x", "artifactId": "lib", "version": "1.0", "scope": "runtime"}

    locked = LockedDependency.from_record(record, True)

    assert locked.identifier.type == "jar"
    assert locked.identifier.classifier is None
    assert locked.optional is False
    assert locked.checksum is None


def test_disabled_integrity_checking_ignores_checksum(lib_record: dict[str, Any]) -> None:
    locked = LockedDependency.from_record({**lib_record, "checksum": "crc32:zz"}, False)

    assert locked.checksum is None
    assert "checksum" not in locked.to_record()


@pytest.mark.parametrize("field", ["groupId", "artifactId", "version", "scope"])
def test_missing_required_field_is_fatal(lib_record: dict[str, Any], field: str) -> None:
    record = dict(lib_record)
    del record[field]

    with pytest.raises(MissingRequiredFieldError) as excinfo:
        LockedDependency.from_record(record, True)

    assert excinfo.value.context["field"] == field


def test_wrongly_typed_fields_are_rejected(lib_record: dict[str, Any]) -> None:
    with pytest.raises(LockfileError):
        LockedDependency.from_record({**lib_record, "optional": "false"}, True)
    with pytest.raises(LockfileError):
        LockedDependency.from_record({**lib_record, "version": 3}, True)


def test_unsupported_checksum_fails_at_construction(lib_record: dict[str, Any]) -> None:
    with pytest.raises(UnsupportedChecksumFormatError) as excinfo:
        LockedDependency.from_record({**lib_record, "checksum": "abc"}, True)

    assert "later version" in str(excinfo.value)
    assert excinfo.value.context["checksum"] == "abc"


def test_to_record_emits_optional_fields_only_when_present() -> None:
    locked = LockedDependency(
        identifier=ArtifactIdentifier(group_id="com.x", artifact_id="lib"),
        version=VersionPattern.literal("1.0"),
        scope="compile",
    )

    assert locked.to_record() == {
        "groupId": "com.x",
        "artifactId": "lib",
        "version": "1.0",
        "scope": "compile",
        "type": "jar",
        "optional": False,
    }


@pytest.mark.parametrize("integrity", [True, False])
@pytest.mark.parametrize(
    "extra",
    [{}, {"classifier": "sources"}, {"type": "pom", "optional": True}, {"version": "1.2.*"}],
)
def test_record_round_trip(
    lib_record: dict[str, Any], integrity: bool, extra: dict[str, Any]
) -> None:
    locked = LockedDependency.from_record({**lib_record, **extra}, integrity)

    assert LockedDependency.from_record(locked.to_record(), integrity) == locked


def test_test_requires_every_field(
    lib_record: dict[str, Any], lib_identifier: ArtifactIdentifier
) -> None:
    locked = LockedDependency.from_record(lib_record, True)

    assert locked.test(_artifact(lib_identifier))
    assert not locked.test(_artifact(lib_identifier, version="1.2.4"))
    assert not locked.test(_artifact(lib_identifier, scope="test"))
    assert not locked.test(_artifact(lib_identifier, optional=True))
    assert not locked.test(_artifact(lib_identifier, checksum=None))


def test_identity_never_matches_across_identifiers(lib_record: dict[str, Any]) -> None:
    locked = LockedDependency.from_record(lib_record, True)
    others = [
        ArtifactIdentifier(group_id="com.y", artifact_id="lib"),
        ArtifactIdentifier(group_id="com.x", artifact_id="other"),
        ArtifactIdentifier(group_id="com.x", artifact_id="lib", classifier="sources"),
        ArtifactIdentifier(group_id="com.x", artifact_id="lib", type="pom"),
    ]

    for identifier in others:
        artifact = _artifact(identifier)
        assert not locked.test(artifact)
        assert not locked.differs_only_by_checksum(artifact)
        assert locked.compare(artifact) == {Divergence.IDENTITY}


def test_differs_only_by_checksum(
    lib_record: dict[str, Any], lib_identifier: ArtifactIdentifier
) -> None:
    locked = LockedDependency.from_record(lib_record, True)
    tampered = _artifact(lib_identifier, checksum=Checksum(algorithm="sha256", digest="def"))

    assert not locked.test(tampered)
    assert locked.differs_only_by_checksum(tampered)
    assert locked.compare(tampered) == {Divergence.CHECKSUM}
    assert not locked.differs_only_by_checksum(_artifact(lib_identifier, version="1.2.4"))


def test_compare_reports_every_divergence(
    lib_record: dict[str, Any], lib_identifier: ArtifactIdentifier
) -> None:
    locked = LockedDependency.from_record(lib_record, True)
    artifact = _artifact(lib_identifier, version="2.0", scope="runtime", checksum=None)

    assert locked.compare(artifact) == {
        Divergence.VERSION,
        Divergence.SCOPE,
        Divergence.CHECKSUM,
    }


def test_checksum_isolation_without_integrity(
    lib_record: dict[str, Any], lib_identifier: ArtifactIdentifier
) -> None:
    locked = LockedDependency.from_record(lib_record, False)
    candidates = [
        _artifact(lib_identifier, checksum=None),
        _artifact(lib_identifier, version="9.9", checksum=None),
        _artifact(lib_identifier, scope="test", checksum=None),
    ]

    for artifact in candidates:
        assert locked.test(artifact) == locked.differs_only_by_checksum(artifact)


def test_version_pattern_matches_each_literal(
    lib_record: dict[str, Any], lib_identifier: ArtifactIdentifier
) -> None:
    locked = LockedDependency.from_record({**lib_record, "version": r"1\.2\.(3|4)"}, True)

    assert locked.test(_artifact(lib_identifier, version="1.2.3"))
    assert locked.test(_artifact(lib_identifier, version="1.2.4"))
    assert not locked.test(_artifact(lib_identifier, version="1.2.5"))


def test_with_my_version_anchors_the_subject_version(
    lib_record: dict[str, Any], lib_identifier: ArtifactIdentifier
) -> None:
    locked = LockedDependency.from_record({**lib_record, "version": "4.0.0"}, True)
    artifact = _artifact(lib_identifier, version="4.0.0-SNAPSHOT")

    assert not locked.test(artifact)
    anchored = locked.with_my_version("4.0.0")
    assert anchored.test(artifact)
    assert not anchored.test(_artifact(lib_identifier, scope="test"))
    assert not locked.with_my_version("5.0.0").test(artifact)
    assert str(anchored) == "com.x:lib:jar:4.0.0:compile:optional=false@sha256:abc"


def test_from_artifact_and_to_artifact(lib_identifier: ArtifactIdentifier) -> None:
    artifact = _artifact(lib_identifier)

    with_checksum = LockedDependency.from_artifact(artifact, True)
    without_checksum = LockedDependency.from_artifact(artifact, False)

    assert with_checksum.test(artifact)
    assert with_checksum.to_artifact() == artifact
    assert without_checksum.checksum is None
    assert without_checksum.differs_only_by_checksum(artifact)


def test_str_and_ordering() -> None:
    first = LockedDependency.from_record(
        {"groupId": "a", "artifactId": "b", "version": "1", "scope": "compile"}, True
    )
    second = LockedDependency.from_record(
        {"groupId": "b", "artifactId": "a", "version": "1", "scope": "compile"}, True
    )

    assert str(first) == "a:b:jar:1:compile:optional=false@NO_CHECKSUM"
    assert sorted([second, first]) == [first, second]


@pytest.mark.parametrize("version", ["2.0~rc1", "1!2.0", "1.0(patched"])
def test_from_artifact_record_roundtrip_keeps_unusual_versions(
    lib_identifier: ArtifactIdentifier, version: str
) -> None:
    artifact = _artifact(lib_identifier, version=version)

    locked = LockedDependency.from_artifact(artifact, True)

    assert LockedDependency.from_record(locked.to_record(), True) == locked
    assert locked.test(artifact)
    assert locked.to_artifact() == artifact
