"""Self-describing checksum strings: ``<algorithm>:<digest>``."""

from __future__ import annotations

from dataclasses import dataclass

from deplock.errors import UnsupportedChecksumFormatError

SEPARATOR = ":"
SUPPORTED_ALGORITHMS = ("md5", "sha1", "sha256", "sha384", "sha512")


@dataclass(frozen=True, slots=True)
class Checksum:
    algorithm: str
    digest: str

    @classmethod
    def parse(cls, value: str) -> Checksum:
        return check_algorithm_header(value, "Unsupported checksum format")

    def __str__(self) -> str:
        return f"{self.algorithm}{SEPARATOR}{self.digest}"


def check_algorithm_header(value: str, context_message: str) -> Checksum:
    """Validate the algorithm tag of ``value`` and split it into a ``Checksum``.

    Only the header is checked; the digest is never recomputed here.
    """
    algorithm, separator, digest = value.partition(SEPARATOR)
    if not separator:
        reason = "missing algorithm header"
    elif algorithm not in SUPPORTED_ALGORITHMS:
        reason = f"unrecognized algorithm '{algorithm}'"
    elif not digest:
        reason = "empty digest"
    else:
        return Checksum(algorithm=algorithm, digest=digest)
    raise UnsupportedChecksumFormatError(
        f"{context_message}: {value!r} ({reason}).",
        hint=(
            "Supported algorithms are "
            + ", ".join(SUPPORTED_ALGORITHMS)
            + "; a manifest written by a newer release needs a newer deplock."
        ),
        context={"checksum": value, "reason": reason},
    )


__all__ = ["SEPARATOR", "SUPPORTED_ALGORITHMS", "Checksum", "check_algorithm_header"]
