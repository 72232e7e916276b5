"""Application configuration loading via Pydantic settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


_DEFAULT_ADDRESS = "localhost:8080"


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    address: str = Field(default=_DEFAULT_ADDRESS, alias="ADDRESS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("address")
    @classmethod
    def validate_address(cls, value: str) -> str:
        host, sep, port = value.strip().rpartition(":")
        if not sep or not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError("ADDRESS must look like <host>:<port>")
        if host.startswith("[") or host.endswith("]"):
            if not (host.startswith("[") and host.endswith("]") and len(host) > 2):
                raise ValueError("ADDRESS has a malformed bracketed IPv6 host")
        elif ":" in host:
            raise ValueError("IPv6 hosts in ADDRESS must be bracketed, e.g. [::1]:8080")
        return f"{host or '0.0.0.0'}:{int(port)}"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def host(self) -> str:
        """Bind host without the brackets an IPv6 literal carries in ADDRESS."""

        return self.address.rpartition(":")[0].removeprefix("[").removesuffix("]")

    @property
    def port(self) -> int:
        return int(self.address.rpartition(":")[2])


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()  # type: ignore[call-arg]
