"""
PHC string codec.

    $argon2id$m=<memory KiB>,t=<time cost>,p=<parallelism>$<b64 salt>$<b64 digest>

Base64 is the standard alphabet with padding. The string carries no version
segment and no explicit lengths: salt and digest sizes are whatever the
base64 segments decode to.

Reference:
https://github.com/P-H-C/phc-string-format/blob/master/phc-sf-spec.md
"""
import base64
import binascii
from typing import Tuple, Union

from pydantic import ValidationError

from .errors import Base64DecodeError, EmptyInput, MalformedHash, UnknownAlgorithm
from .kdf import ALGORITHM_ID
from .schemas import U8_MAX, U32_MAX, EncodedHash, HashParameters

DELIMITER = "$"
SEGMENTS = 4  # algorithm, params, salt, digest

# (key, upper bound) in the only accepted order
PARAM_KEYS = (("m", U32_MAX), ("t", U32_MAX), ("p", U8_MAX))

_DIGITS = "0123456789"
# PHC identifiers: [a-z0-9-]{1,32}
_ID_CHARS = frozenset("abcdefghijklmnopqrstuvwxyz0123456789-")

def encode(algorithm: str, params: HashParameters, salt: bytes, digest: bytes) -> str:
    return "$%s$m=%d,t=%d,p=%d$%s$%s" % (
        algorithm,
        params.memory_cost,
        params.time_cost,
        params.parallelism,
        base64.b64encode(salt).decode("ascii"),
        base64.b64encode(digest).decode("ascii"),
    )

def _b64decode(field: str, value: str) -> bytes:
    try:
        raw = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise Base64DecodeError(field, str(exc)) from exc
    # b64decode ignores set padding bits; reject them so each bit of the text counts
    if base64.b64encode(raw).decode("ascii") != value:
        raise Base64DecodeError(field, "non-canonical encoding")
    return raw

def _scan_number(s: str, pos: int, key: str, limit: int) -> Tuple[int, int]:
    start = pos
    while pos < len(s) and s[pos] in _DIGITS:
        pos += 1
    digits = s[start:pos]
    if not digits:
        raise MalformedHash(f"parameter {key!r} has no numeric value")
    if len(digits) > 1 and digits[0] == "0":
        raise MalformedHash(f"parameter {key!r} has leading zeros")
    value = int(digits) if len(digits) <= len(str(limit)) else limit + 1
    if value > limit:
        raise MalformedHash(f"parameter {key!r} exceeds {limit}")
    return value, pos

def parse_params(s: str) -> Tuple[int, int, int]:
    """
    Scan ``m=<n>,t=<n>,p=<n>`` and return ``(m, t, p)``. Keys must appear
    exactly once, in that order.
    """
    values = []
    pos = 0
    for i, (key, limit) in enumerate(PARAM_KEYS):
        if i:
            if pos >= len(s) or s[pos] != ",":
                raise MalformedHash(f"expected ',' before parameter {key!r} at offset {pos}")
            pos += 1
        if s[pos:pos + 2] != key + "=":
            raise MalformedHash(f"expected parameter {key!r} at offset {pos}")
        value, pos = _scan_number(s, pos + 2, key, limit)
        values.append(value)
    if pos != len(s):
        raise MalformedHash(f"unexpected trailing data in parameters at offset {pos}")
    m, t, p = values
    return m, t, p

def decode(s: Union[str, bytes]) -> EncodedHash:
    # some database drivers hand text columns back as bytes
    if isinstance(s, (bytes, bytearray)):
        try:
            s = bytes(s).decode("ascii")
        except UnicodeDecodeError as exc:
            raise MalformedHash("hash contains non-ASCII bytes") from exc
    elif s is not None and not isinstance(s, str):
        raise MalformedHash(f"hash must be str or bytes, not {type(s).__name__}")
    if not s or not s.strip():
        raise EmptyInput("hash is empty")
    if not s.startswith(DELIMITER):
        raise MalformedHash("hash must start with '$'")
    parts = s[1:].split(DELIMITER)
    if len(parts) != SEGMENTS:
        raise MalformedHash(f"expected {SEGMENTS} '$'-separated segments, got {len(parts)}")
    algorithm, params, salt_b64, digest_b64 = parts

    if algorithm != ALGORITHM_ID:
        if not algorithm or len(algorithm) > 32 or any(c not in _ID_CHARS for c in algorithm):
            raise MalformedHash("missing or malformed algorithm identifier")
        raise UnknownAlgorithm(algorithm)

    salt = _b64decode("salt", salt_b64)
    digest = _b64decode("digest", digest_b64)
    m, t, p = parse_params(params)

    try:
        return EncodedHash(
            algorithm=algorithm, memory_cost=m, time_cost=t, parallelism=p,
            salt=salt, digest=digest,
        )
    except ValidationError as exc:
        raise MalformedHash(f"unusable parameters: {exc.errors()[0]['msg']}") from exc
