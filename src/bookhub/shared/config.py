"""Storefront configuration read from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_TAX_RATE = 0.18  # GST
DEFAULT_CURRENCY = "INR"
DEFAULT_DELIVERY_DAYS = 7

ROLE_POLICIES = ("email", "user")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _path_env(name: str) -> Path | None:
    raw = os.getenv(name)
    return Path(raw) if raw else None


@dataclass(frozen=True)
class Settings:
    data_dir: Path | None = None
    tax_rate: float = DEFAULT_TAX_RATE
    currency: str = DEFAULT_CURRENCY
    delivery_days: int = DEFAULT_DELIVERY_DAYS
    role_policy: str = "email"
    log_dir: Path | None = None

    def __post_init__(self):
        if not 0 <= self.tax_rate < 1:
            raise ValueError(f"Tax rate must be in [0, 1), got {self.tax_rate}")
        if self.delivery_days < 0:
            raise ValueError(f"Delivery window cannot be negative, got {self.delivery_days}")
        if self.role_policy not in ROLE_POLICIES:
            raise ValueError(f"Unknown role policy {self.role_policy!r}; expected one of {ROLE_POLICIES}")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            data_dir=_path_env("BOOKHUB_DATA_DIR"),
            tax_rate=_float_env("BOOKHUB_TAX_RATE", DEFAULT_TAX_RATE),
            currency=os.getenv("BOOKHUB_CURRENCY") or DEFAULT_CURRENCY,
            delivery_days=_int_env("BOOKHUB_DELIVERY_DAYS", DEFAULT_DELIVERY_DAYS),
            role_policy=(os.getenv("BOOKHUB_ROLE_POLICY") or "email").lower(),
            log_dir=_path_env("BOOKHUB_LOG_DIR"),
        )
