"""Lock manifest model and codecs."""

from deplock.lockfile.io import (
    load_locked_dependencies,
    manifest_digest,
    parse_manifest,
    serialize_manifest,
)
from deplock.lockfile.model import SCHEMA_VERSION, LockManifest

__all__ = [
    "SCHEMA_VERSION",
    "LockManifest",
    "load_locked_dependencies",
    "manifest_digest",
    "parse_manifest",
    "serialize_manifest",
]
