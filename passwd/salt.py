import secrets

from .errors import SaltGenerationFailed

def generate_salt(n: int) -> bytes:
    """Return ``n`` bytes from the OS CSPRNG. There is no weaker fallback."""
    if n < 1:
        raise ValueError(f"salt length must be positive, got {n}")
    try:
        return secrets.token_bytes(n)
    except (OSError, NotImplementedError) as exc:
        raise SaltGenerationFailed("secure random source unavailable") from exc
