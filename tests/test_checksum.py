import pytest

from deplock import Checksum, check_algorithm_header
from deplock.errors import ErrorCode, UnsupportedChecksumFormatError


def test_check_algorithm_header_splits_algorithm_and_digest() -> None:
    checksum = check_algorithm_header("sha512:0a1b2c", "context")

    assert checksum == Checksum(algorithm="sha512", digest="0a1b2c")
    assert str(checksum) == "sha512:0a1b2c"


def test_digest_may_contain_separator_characters() -> None:
    checksum = Checksum.parse("sha256:abc:def")

    assert checksum.digest == "abc:def"


@pytest.mark.parametrize(
    ("value", "reason"),
    [
        ("0a1b2c", "missing algorithm header"),
        ("blake3:0a1b2c", "unrecognized algorithm 'blake3'"),
        ("SHA256:0a1b2c", "unrecognized algorithm 'SHA256'"),
        ("sha256:", "empty digest"),
    ],
)
def test_unsupported_headers_are_rejected(value: str, reason: str) -> None:
    with pytest.raises(UnsupportedChecksumFormatError) as excinfo:
        check_algorithm_header(value, "Encountered unsupported checksum format")

    error = excinfo.value
    assert error.code == ErrorCode.UNSUPPORTED_CHECKSUM_FORMAT.value
    assert error.context == {"checksum": value, "reason": reason}
    assert "Encountered unsupported checksum format" in str(error)
    assert repr(value) in str(error)
    assert error.hint is not None and "newer" in error.hint
