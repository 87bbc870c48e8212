# passwd/hasher.py
import threading
from typing import Optional, Union

from .codec import decode, encode
from .compare import equal
from .config import Settings, settings as default_settings
from .errors import HashFormatError, PasswordRequired, VerificationMismatch
from .kdf import ALGORITHM_ID, derive
from .normalize import normalize, rune_count
from .salt import generate_salt
from .schemas import HashParameters
from .utils.logging import logger

Password = Union[str, bytes]

def _normalized(password: Password) -> bytes:
    # No trimming: "   " is a valid password, "" is not.
    if not password:
        raise PasswordRequired("password cannot be empty")
    pw = normalize(password)
    if rune_count(pw) == 0:
        raise PasswordRequired("password cannot be empty")
    return pw

class Hasher:
    """
    argon2id password hasher. Parameters are validated once here; hash()
    never fails on configuration. Instances hold no mutable state and can
    be shared between threads.
    """

    def __init__(self, params: Optional[HashParameters] = None, **overrides):
        params = params or HashParameters()
        if overrides:
            params = HashParameters(**{**params.model_dump(), **overrides})
        self._params = params

    @classmethod
    def from_settings(cls, s: Optional[Settings] = None) -> "Hasher":
        return cls(**(s or default_settings).hash_overrides())

    @property
    def params(self) -> HashParameters:
        return self._params

    def __repr__(self) -> str:
        p = self._params
        return (f"Hasher(time_cost={p.time_cost}, memory_cost={p.memory_cost}, "
                f"parallelism={p.parallelism}, salt_len={p.salt_len}, key_len={p.key_len})")

    def hash(self, password: Password) -> str:
        pw = _normalized(password)
        p = self._params
        salt = generate_salt(p.salt_len)
        digest = derive(pw, salt, p.time_cost, p.memory_cost, p.parallelism, p.key_len)
        logger.debug("Hashed password (m=%d, t=%d, p=%d)", p.memory_cost, p.time_cost, p.parallelism)
        return encode(ALGORITHM_ID, p, salt, digest)

    def verify(self, password: Password, encoded: Union[str, bytes]) -> bool:
        """
        True if ``password`` matches ``encoded``. The stored parameters are used,
        not this hasher's, so hashes made with older settings still verify.
        A corrupt or foreign hash raises; it never reads as a wrong password.

        The stored costs are trusted up to their u32/u8 limits. A tampered
        row such as ``m=4294967295`` makes argon2 fail to allocate, which
        surfaces as DerivationFailed; a huge ``t`` blocks for as long as that
        many passes take. Callers that accept hashes from untrusted storage
        should check ``decode(encoded).params`` against their own ceiling first.
        """
        pw = _normalized(password)
        try:
            stored = decode(encoded)
        except HashFormatError as exc:
            logger.warning("Rejected stored hash: %s", type(exc).__name__)
            raise
        computed = derive(pw, stored.salt, stored.time_cost, stored.memory_cost,
                          stored.parallelism, len(stored.digest))
        return equal(computed, stored.digest)

    def check(self, password: Password, encoded: Union[str, bytes]) -> None:
        if not self.verify(password, encoded):
            raise VerificationMismatch("password does not match")


_default: Optional[Hasher] = None
_default_lock = threading.Lock()

def default_hasher() -> Hasher:
    """Process-wide Hasher with the documented defaults, built on first use."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = Hasher()
    return _default

def hash(password: Password) -> str:
    return default_hasher().hash(password)

def verify(password: Password, encoded: Union[str, bytes]) -> bool:
    return default_hasher().verify(password, encoded)

def check(password: Password, encoded: Union[str, bytes]) -> None:
    default_hasher().check(password, encoded)
