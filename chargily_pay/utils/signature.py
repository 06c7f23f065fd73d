"""HMAC signature verification utilities."""

import enum
import hashlib
import hmac
from typing import Any, Callable, Optional

SIGNATURE_HEADER = "signature"


class SignatureCheck(enum.Enum):
    """Outcome of checking a webhook signature."""
    VALID = "valid"
    ABSENT = "absent"
    MISMATCH = "mismatch"


def compute_signature(
    payload: bytes,
    secret_key: str,
    digestmod: Callable[..., Any] = hashlib.sha256
) -> str:
    """
    Compute the hex HMAC digest of a raw webhook body.

    Args:
        payload: Raw request body bytes
        secret_key: Chargily API secret key
        digestmod: Hash constructor (default: SHA-256)

    Returns:
        Lowercase hex digest
    """
    if not isinstance(payload, (bytes, bytearray, memoryview)):
        raise TypeError(
            f"payload must be the raw request body bytes, got {type(payload).__name__}"
        )
    if not isinstance(secret_key, str):
        raise TypeError(f"secret_key must be str, got {type(secret_key).__name__}")

    return hmac.new(secret_key.encode(), bytes(payload), digestmod).hexdigest()


def check_signature(
    payload: bytes,
    signature: Optional[str],
    secret_key: str,
    digestmod: Callable[..., Any] = hashlib.sha256,
    compare: Callable[[bytes, bytes], bool] = hmac.compare_digest
) -> SignatureCheck:
    """
    Check a webhook signature against the raw body.

    The payload must be the exact bytes received on the wire. A body that was
    parsed and re-serialized will not match.

    Args:
        payload: Raw request body bytes
        signature: Value of the ``signature`` header (hex digest)
        secret_key: Chargily API secret key
        digestmod: Hash constructor (default: SHA-256)
        compare: Constant-time comparison (default: hmac.compare_digest)

    Returns:
        SignatureCheck.ABSENT if no signature was given, VALID on an exact
        match, MISMATCH otherwise
    """
    if not signature:
        return SignatureCheck.ABSENT

    expected = compute_signature(payload, secret_key, digestmod).encode()
    received = signature.encode("utf-8", errors="surrogateescape")

    # Length is not secret; content comparison stays constant-time.
    if len(received) != len(expected):
        return SignatureCheck.MISMATCH

    if not compare(expected, received):
        return SignatureCheck.MISMATCH

    return SignatureCheck.VALID


def verify_signature(
    payload: bytes,
    signature: Optional[str],
    secret_key: str,
    digestmod: Callable[..., Any] = hashlib.sha256,
    compare: Callable[[bytes, bytes], bool] = hmac.compare_digest
) -> bool:
    """
    Verify HMAC-SHA256 signature of a webhook body.

    Args:
        payload: Raw request body bytes
        signature: Value of the ``signature`` header (hex digest)
        secret_key: Chargily API secret key
        digestmod: Hash constructor (default: SHA-256)
        compare: Constant-time comparison (default: hmac.compare_digest)

    Returns:
        True if signature is valid
    """
    result = check_signature(
        payload,
        signature,
        secret_key,
        digestmod=digestmod,
        compare=compare
    )
    return result is SignatureCheck.VALID
