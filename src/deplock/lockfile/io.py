"""Lock manifest parser, serializer and digest."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable, Mapping
from typing import Any

import cbor2

from deplock.errors import LockfileError
from deplock.locked import LockedDependency
from deplock.lockfile.model import SCHEMA_VERSION, LockManifest
from deplock.version import VersionSyntax


def serialize_manifest(manifest: LockManifest) -> str:
    payload = {
        "schemaVersion": manifest.schema_version,
        "dependencies": manifest.records(),
    }
    return json.dumps(payload, indent=2, sort_keys=True) + "\n"


def parse_manifest(
    raw: str,
    *,
    enable_integrity_checking: bool,
    version_syntax: VersionSyntax = "regex",
) -> LockManifest:
    """Parse a manifest document; any invalid entry aborts the whole load.

    Both ``{"schemaVersion": 1, "dependencies": [...]}`` and a bare list of
    records are accepted.
    """
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise LockfileError("Invalid lock manifest JSON.", hint=str(exc)) from exc

    schema_version = SCHEMA_VERSION
    if isinstance(payload, dict):
        schema_version = payload.get("schemaVersion", SCHEMA_VERSION)
        if schema_version != SCHEMA_VERSION:
            raise LockfileError(
                "Unsupported lock manifest schema version.",
                hint="The manifest was written by a newer release; upgrade deplock.",
                context={"schemaVersion": str(schema_version)},
            )
        records = payload.get("dependencies")
    else:
        records = payload
    if not isinstance(records, list):
        raise LockfileError("Invalid lock manifest `dependencies` value.")

    return LockManifest(
        dependencies=load_locked_dependencies(
            records,
            enable_integrity_checking=enable_integrity_checking,
            version_syntax=version_syntax,
        ),
        schema_version=schema_version,
    )


def load_locked_dependencies(
    records: Iterable[Any],
    *,
    enable_integrity_checking: bool,
    version_syntax: VersionSyntax = "regex",
) -> tuple[LockedDependency, ...]:
    loaded: list[LockedDependency] = []
    for position, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise LockfileError(
                "Invalid dependency entry in lock manifest.",
                context={"position": str(position)},
            )
        loaded.append(
            LockedDependency.from_record(
                record,
                enable_integrity_checking,
                version_syntax=version_syntax,
            )
        )
    return tuple(loaded)


def manifest_digest(manifest: LockManifest) -> str:
    """SHA-256 over the canonical CBOR encoding of the manifest records."""
    payload = {
        "schema_version": manifest.schema_version,
        "dependencies": manifest.records(),
    }
    encoded = cbor2.dumps(payload, canonical=True)
    return hashlib.sha256(encoded).hexdigest()
