"""Shared test fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from deplock import ArtifactIdentifier


@pytest.fixture
def lib_identifier() -> ArtifactIdentifier:
    return ArtifactIdentifier(group_id="com.x", artifact_id="lib")


@pytest.fixture
def lib_record() -> dict[str, Any]:
    """The locked `com.x:lib` entry used across reconciliation tests."""
    return {
        "groupId": "com.x",
        "artifactId": "lib",
        "version": "1.2.3",
        "scope": "compile",
        "optional": False,
        "checksum": "sha256:abc",
    }
