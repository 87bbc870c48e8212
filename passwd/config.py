from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    LOG_LEVEL: str = "WARNING"

    # Unset values fall back to the HashParameters defaults.
    TIME_COST: Optional[int] = None
    MEMORY_COST: Optional[int] = None
    PARALLELISM: Optional[int] = None
    SALT_LEN: Optional[int] = None
    KEY_LEN: Optional[int] = None

    model_config = SettingsConfigDict(env_prefix="PASSWD_", env_file=".env", extra="ignore")

    def hash_overrides(self) -> dict:
        """Map the set PASSWD_* cost variables onto HashParameters field names."""
        fields = {
            "time_cost": self.TIME_COST,
            "memory_cost": self.MEMORY_COST,
            "parallelism": self.PARALLELISM,
            "salt_len": self.SALT_LEN,
            "key_len": self.KEY_LEN,
        }
        return {k: v for k, v in fields.items() if v is not None}

settings = Settings()
