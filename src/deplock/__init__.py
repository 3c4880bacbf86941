"""Public package entrypoint for dependency lock reconciliation."""

from .artifacts import Artifacts
from .checksum import Checksum, check_algorithm_header
from .errors import (
    DeplockError,
    ErrorCode,
    LockfileError,
    LockMismatchError,
    MissingRequiredFieldError,
    UnsupportedChecksumFormatError,
    ValidationError,
)
from .identifier import ArtifactIdentifier
from .locked import Divergence, LockedDependency, WithMyVersion
from .lockfile import LockManifest, manifest_digest, parse_manifest, serialize_manifest
from .models import Artifact, DeclaredDependency, ResolvedDependency
from .observability import StructuredLogger
from .policy import Policy, ensure_lock_satisfied
from .reconcile import ReconcileOutcome, ReconcileReport, Verdict, reconcile
from .verify import verify_lock
from .version import VersionPattern

__all__ = [
    "Artifact",
    "ArtifactIdentifier",
    "Artifacts",
    "Checksum",
    "DeclaredDependency",
    "DeplockError",
    "Divergence",
    "ErrorCode",
    "LockManifest",
    "LockMismatchError",
    "LockedDependency",
    "LockfileError",
    "MissingRequiredFieldError",
    "Policy",
    "ReconcileOutcome",
    "ReconcileReport",
    "ResolvedDependency",
    "StructuredLogger",
    "UnsupportedChecksumFormatError",
    "ValidationError",
    "Verdict",
    "VersionPattern",
    "WithMyVersion",
    "check_algorithm_header",
    "ensure_lock_satisfied",
    "manifest_digest",
    "parse_manifest",
    "reconcile",
    "serialize_manifest",
    "verify_lock",
]
