# tests/test_primitives.py
import logging
import unicodedata

import pytest

from passwd.compare import equal
from passwd.errors import DerivationFailed, InvalidPassword, SaltGenerationFailed
from passwd.kdf import ALGORITHM_ID, VERSION, derive
from passwd.normalize import normalize, rune_count
from passwd.salt import generate_salt
from passwd.utils.logging import configure_logging, logger

def test_normalize_precomposed_and_combining():
    a = normalize("1234567\u00e9")
    b = normalize("1234567e\u0301")
    assert a == b
    assert rune_count(a) == 8
    assert len(a) == 9

def test_normalization_forms_lengths():
    s = "1234567\u00e9"
    assert len(unicodedata.normalize("NFC", s).encode()) == 9
    assert len(unicodedata.normalize("NFD", s).encode()) == 10
    assert len(normalize(s)) == 9

def test_normalize_accepts_bytes():
    assert normalize("é".encode("utf-8")) == normalize("é")
    assert normalize(bytearray(b"abc")) == b"abc"

@pytest.mark.parametrize("value", [b"\xc3", b"\xff", "\ud800", 1234, ["pw"]])
def test_normalize_rejects_unreadable_input(value):
    with pytest.raises(InvalidPassword):
        normalize(value)

def test_generate_salt():
    salt = generate_salt(16)
    assert isinstance(salt, bytes) and len(salt) == 16
    assert generate_salt(16) != salt
    assert len(generate_salt(1)) == 1

def test_generate_salt_bad_length():
    with pytest.raises(ValueError):
        generate_salt(0)

@pytest.mark.parametrize("exc", [OSError("entropy pool closed"), NotImplementedError()])
def test_generate_salt_no_weaker_fallback(monkeypatch, exc):
    def broken(n):
        raise exc
    monkeypatch.setattr("secrets.token_bytes", broken)
    with pytest.raises(SaltGenerationFailed) as exc_info:
        generate_salt(16)
    assert exc_info.value.__cause__ is exc

def test_derive_is_deterministic():
    args = (b"secret", b"saltsaltsalt", 1, 64, 1, 32)
    first = derive(*args)
    assert len(first) == 32
    assert derive(*args) == first

def test_derive_depends_on_every_input():
    base = dict(password=b"secret", salt=b"saltsaltsalt", time_cost=1, memory_cost=64,
                parallelism=1, key_len=32)
    digest = derive(**base)
    for change in [
        {"password": b"Secret"},
        {"salt": b"saltsaltsalT"},
        {"time_cost": 2},
        {"memory_cost": 128},
        {"parallelism": 2},
    ]:
        assert derive(**{**base, **change}) != digest, change
    assert len(derive(**{**base, "key_len": 64})) == 64

def test_derive_wraps_primitive_errors():
    # argon2 refuses salts under 8 bytes
    with pytest.raises(DerivationFailed) as exc_info:
        derive(b"secret", b"short", 1, 64, 1, 32)
    assert exc_info.value.__cause__ is not None

def test_algorithm_identity():
    assert ALGORITHM_ID == "argon2id"
    assert VERSION == 0x13

def test_equal():
    assert equal(b"abc", b"abc")
    assert not equal(b"abc", b"abd")
    assert not equal(b"abc", b"abcd")
    assert not equal(b"", b"a")
    assert equal(b"", b"")

def test_configure_logging_is_idempotent():
    before = list(logger.handlers)
    try:
        configure_logging("debug")
        configure_logging("info")
        added = [h for h in logger.handlers if h not in before]
        assert len(added) == 1
        assert logger.level == logging.INFO
    finally:
        logger.handlers[:] = before
        logger.setLevel(logging.NOTSET)

def test_configure_logging_reuses_its_handler():
    from passwd.utils import logging as passwd_logging

    before = list(logger.handlers)
    try:
        configure_logging("warning")
        handler = passwd_logging._stream_handler
        assert handler in logger.handlers
        # a host that strips handlers gets the same one back, not a second
        logger.removeHandler(handler)
        configure_logging("warning")
        assert passwd_logging._stream_handler is handler
        assert logger.handlers.count(handler) == 1
    finally:
        logger.handlers[:] = before
        logger.setLevel(logging.NOTSET)
