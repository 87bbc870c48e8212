from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .kdf import ALGORITHM_ID

U8_MAX = 0xFF
U32_MAX = 0xFFFFFFFF

DEFAULT_TIME_COST = 2
DEFAULT_MEMORY_COST = 64 * 1024  # KiB
DEFAULT_PARALLELISM = 4
DEFAULT_SALT_LEN = 16
DEFAULT_KEY_LEN = 32

# Lower bounds accepted by the argon2 reference implementation.
MIN_SALT_LEN = 8
MIN_KEY_LEN = 4
MIN_MEMORY_PER_LANE = 8

class HashParameters(BaseModel):
    """Cost and size settings for one argon2id hash. Validated on construction."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    time_cost: int = Field(DEFAULT_TIME_COST, ge=1, le=U32_MAX)
    memory_cost: int = Field(DEFAULT_MEMORY_COST, ge=1, le=U32_MAX)
    parallelism: int = Field(DEFAULT_PARALLELISM, ge=1, le=U8_MAX)
    salt_len: int = Field(DEFAULT_SALT_LEN, ge=MIN_SALT_LEN, le=U32_MAX)
    key_len: int = Field(DEFAULT_KEY_LEN, ge=MIN_KEY_LEN, le=U32_MAX)

    @model_validator(mode="after")
    def check_memory_covers_lanes(self):
        if self.memory_cost < MIN_MEMORY_PER_LANE * self.parallelism:
            raise ValueError(
                f"memory_cost must be at least {MIN_MEMORY_PER_LANE} * parallelism "
                f"({MIN_MEMORY_PER_LANE * self.parallelism} KiB), got {self.memory_cost}"
            )
        return self

class EncodedHash(BaseModel):
    """
    A decoded PHC string. Salt and digest lengths come from the bytes
    themselves. Only argon2id records with usable parameters can be built,
    so ``str()`` of any instance decodes back to an equal record.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    algorithm: str
    memory_cost: int
    time_cost: int
    parallelism: int
    salt: bytes
    digest: bytes

    @model_validator(mode="after")
    def check_usable(self):
        if self.algorithm != ALGORITHM_ID:
            raise ValueError(f"algorithm must be {ALGORITHM_ID!r}, got {self.algorithm!r}")
        try:
            self.params
        except ValidationError as exc:
            raise ValueError(exc.errors()[0]["msg"]) from None
        return self

    @property
    def params(self) -> HashParameters:
        return HashParameters(
            time_cost=self.time_cost,
            memory_cost=self.memory_cost,
            parallelism=self.parallelism,
            salt_len=len(self.salt),
            key_len=len(self.digest),
        )

    def __str__(self) -> str:
        from passwd.codec import encode
        return encode(self.algorithm, self.params, self.salt, self.digest)
