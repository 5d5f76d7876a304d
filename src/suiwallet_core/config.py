"""Configuration surface for the wallet transfer core."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import model_validator, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import SUI_TYPE_ARG, GasLimits


class WalletSettings(BaseSettings):
    """Main wallet transfer configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SUIWALLET_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    # Environment
    environment: Literal["dev", "testnet", "mainnet"] = "dev"

    # Native gas coin; spend-all is only allowed for this type
    native_coin_type: str = SUI_TYPE_ARG

    # Gas
    default_gas_budget: int = GasLimits.DEFAULT_BUDGET
    max_gas_budget: int = GasLimits.MAX_BUDGET

    # Signer/executor
    signer_mode: Literal["simulated", "remote"] = "simulated"
    signer_url: str = "http://localhost:9000"
    signer_timeout_seconds: float = 30.0
    request_type: str = "WaitForLocalExecution"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("default_gas_budget", "max_gas_budget")
    @classmethod
    def validate_gas_budget(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("gas budget must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @model_validator(mode="after")
    def check_signer(self) -> "WalletSettings":
        if self.default_gas_budget > self.max_gas_budget:
            raise ValueError("default_gas_budget exceeds max_gas_budget")
        if self.signer_mode == "remote" and not self.signer_url:
            raise ValueError("signer_url is required when signer_mode is 'remote'")
        return self


@lru_cache
def load_settings(env_file: str | None = None) -> WalletSettings:
    """Load WalletSettings once per process to keep services consistent."""
    if env_file:
        return WalletSettings(_env_file=Path(env_file))
    return WalletSettings()
