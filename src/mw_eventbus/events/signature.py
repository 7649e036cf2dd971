"""Event signatures shared between the job producer and job executor."""
from __future__ import annotations

import hashlib
import hmac


def sign_event(serialized_event: str, secret: str) -> str:
    """Return the hex signature of a serialized event.

    SHA-256 over the HMAC-SHA256 of the event, which is what an HS256 JWT
    signature step followed by ``sha256`` produces.
    """
    mac = hmac.new(secret.encode("utf-8"), serialized_event.encode("utf-8"), hashlib.sha256)
    return hashlib.sha256(mac.digest()).hexdigest()


def verify_event_signature(serialized_event: str, secret: str, signature: object) -> bool:
    """Verify *signature* using constant-time comparison."""
    if not isinstance(signature, str):
        return False
    expected = sign_event(serialized_event, secret)
    return hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8"))


__all__ = ["sign_event", "verify_event_signature"]
