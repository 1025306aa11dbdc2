"""
Runtime configuration read from the environment.
"""

import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field

from rabinxor.crypto.primality import DEFAULT_ROUNDS


class Settings(BaseModel):
    mr_rounds: int = Field(DEFAULT_ROUNDS, ge=1, le=128, description="Miller-Rabin rounds")
    prime_bits: int = Field(512, ge=5, description="Default prime size for key generation")
    max_prime_bits: int = Field(4096, ge=5, le=6144, description="Largest prime size the API accepts")
    prime_max_attempts: int = Field(0, ge=0, description="Retry cap for prime search, 0 = unlimited")
    log_level: str = Field("INFO", description="Logging level for the rabinxor logger")
    cors_origins: list[str] = Field(default_factory=list)

    @property
    def attempts_cap(self) -> Optional[int]:
        return self.prime_max_attempts or None


@lru_cache
def get_settings() -> Settings:
    origins = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
    return Settings(
        mr_rounds=int(os.getenv("RABIN_MR_ROUNDS", str(DEFAULT_ROUNDS))),
        prime_bits=int(os.getenv("RABIN_PRIME_BITS", "512")),
        max_prime_bits=int(os.getenv("RABIN_MAX_PRIME_BITS", "4096")),
        prime_max_attempts=int(os.getenv("RABIN_PRIME_MAX_ATTEMPTS", "0")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
    )
