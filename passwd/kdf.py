# passwd/kdf.py
from argon2.exceptions import HashingError
from argon2.low_level import ARGON2_VERSION, Type, hash_secret_raw

from .errors import DerivationFailed

ALGORITHM_ID = "argon2id"
VERSION = ARGON2_VERSION

def derive(password: bytes, salt: bytes, time_cost: int, memory_cost: int,
           parallelism: int, key_len: int) -> bytes:
    """
    Raw argon2id digest of ``key_len`` bytes. Deterministic for identical
    inputs. Blocks for the whole computation; argon2-cffi drops the GIL.
    """
    try:
        return hash_secret_raw(
            secret=password,
            salt=salt,
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=key_len,
            type=Type.ID,
            version=VERSION,
        )
    except HashingError as exc:
        raise DerivationFailed(str(exc)) from exc
