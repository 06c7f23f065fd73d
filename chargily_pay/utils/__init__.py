"""Utility helpers for the Chargily Pay SDK."""

from .signature import (
    SIGNATURE_HEADER,
    SignatureCheck,
    check_signature,
    compute_signature,
    verify_signature
)

__all__ = [
    "SIGNATURE_HEADER",
    "SignatureCheck",
    "check_signature",
    "compute_signature",
    "verify_signature"
]
