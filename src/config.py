"""Configuration for the cache policy simulator."""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEMO_SEQUENCE = "A,B,C,D,A,E,A,B,A,C,D,E,D,C"


class Settings(BaseSettings):
    """Simulator settings loaded from CACHESIM_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CACHESIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    capacity: int = Field(default=4, description="Cache capacity in keys")
    policies: str = Field(default="LRU,FIFO,LFU", description="Comma-separated policies to run")
    demo_sequence: str = Field(default=DEMO_SEQUENCE, description="Comma-separated demo access sequence")
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=False, description="Render logs as JSON")

    @property
    def policies_list(self) -> List[str]:
        return split_keys(self.policies)

    @property
    def demo_sequence_list(self) -> List[str]:
        return split_keys(self.demo_sequence)


def split_keys(raw: str) -> List[str]:
    """Split a comma (or whitespace) separated string into trimmed keys."""
    return [part.strip() for part in raw.replace(",", " ").split() if part.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
