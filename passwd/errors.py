# passwd/errors.py

class PasswdError(Exception):
    """Base class for every error raised by passwd."""


class PasswordRequired(PasswdError):
    """The supplied password is empty after normalization."""


class InvalidPassword(PasswdError):
    """The supplied password could not be read as text."""


class SaltGenerationFailed(PasswdError):
    """The OS entropy source could not produce a salt. Safe to retry."""


class DerivationFailed(PasswdError):
    """The argon2 primitive rejected its inputs."""


class VerificationMismatch(PasswdError):
    """The password does not match the stored hash."""


class HashFormatError(PasswdError, ValueError):
    """
    The stored hash cannot be used. Subclasses tell apart a corrupt string,
    a foreign algorithm and a bad base64 segment.
    """


class MalformedHash(HashFormatError):
    pass


class EmptyInput(MalformedHash):
    pass


class UnknownAlgorithm(HashFormatError):
    def __init__(self, algorithm: str):
        super().__init__(f"unknown password hashing algorithm: {algorithm!r}")
        self.algorithm = algorithm


class Base64DecodeError(HashFormatError):
    def __init__(self, field: str, reason: str):
        super().__init__(f"{field} is not valid base64: {reason}")
        self.field = field
