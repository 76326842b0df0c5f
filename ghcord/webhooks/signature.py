"""GitHub webhook signature validation."""

from __future__ import annotations

import hashlib
import hmac
from typing import Sequence

SIGNATURE_PREFIX = "sha256="


def timing_safe_equal(a: Sequence[int], b: Sequence[int]) -> bool:
    """Compare two byte sequences in constant time.

    Every position is visited even after a mismatch is found, so the running
    time depends only on the length of the inputs.
    """
    if len(a) != len(b):
        return False
    result = 0
    for i in range(len(a)):
        result |= a[i] ^ b[i]
    return result == 0


def sign_payload(secret: str, body: bytes | str) -> str:
    """Return the ``X-Hub-Signature-256`` value GitHub would send for *body*."""
    if isinstance(body, str):
        body = body.encode()
    digest = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return SIGNATURE_PREFIX + digest


def verify_signature(secret: str, body: bytes | str, signature: str | None) -> bool:
    """Validate a GitHub HMAC-SHA256 signature against the raw request body.

    Must be called with the body exactly as received; re-serialized JSON will
    not match. Returns False for a missing signature or one of the wrong size.
    """
    if not signature:
        return False
    expected = sign_payload(secret, body).encode()
    # aiohttp decodes undecodable header bytes to lone surrogates
    provided = signature.encode("utf-8", "surrogateescape")
    return timing_safe_equal(expected, provided)
