import hmac

def equal(a: bytes, b: bytes) -> bool:
    # Timing-safe compare; only for secret digests.
    return hmac.compare_digest(a, b)
