"""
Password canonicalization.

The same password typed on two keyboards can reach us as different code point
sequences: "é" precomposed (U+00E9) or "e" followed by a combining acute
accent (U+0065 U+0301). NFKC folds both, along with compatibility forms such
as full-width digits, into one representation before it reaches the KDF.
"""
import unicodedata
from typing import Union

from .errors import InvalidPassword

def normalize(password: Union[str, bytes]) -> bytes:
    """
    Return the NFKC form of ``password`` as UTF-8 bytes.
    ``bytes`` input must be valid UTF-8.
    """
    if isinstance(password, (bytes, bytearray)):
        try:
            password = bytes(password).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidPassword("password is not valid UTF-8") from exc
    elif not isinstance(password, str):
        raise InvalidPassword(f"password must be str or bytes, not {type(password).__name__}")
    try:
        return unicodedata.normalize("NFKC", password).encode("utf-8")
    except UnicodeEncodeError as exc:
        # lone surrogates survive str() but not UTF-8
        raise InvalidPassword("password contains unpaired surrogates") from exc

def rune_count(normalized: bytes) -> int:
    return len(normalized.decode("utf-8"))
