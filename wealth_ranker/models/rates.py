from __future__ import annotations

import math
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

BASE_CURRENCY = "USD"


class RateTable(BaseModel):
    """Units of each currency per one USD, as served by the rate provider."""

    model_config = ConfigDict(frozen=True)

    base: str = BASE_CURRENCY
    date: str = ""
    rates: Dict[str, float] = Field(default_factory=dict)

    @field_validator("rates")
    @classmethod
    def base_rate_present(cls, v: Dict[str, float]) -> Dict[str, float]:
        if any(r <= 0 for r in v.values()):
            raise ValueError("rates must be positive")
        v.setdefault(BASE_CURRENCY, 1.0)
        return v

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RateTable":
        """Build from the provider's JSON body, dropping unusable entries."""
        raw = payload.get("rates")
        if not isinstance(raw, Mapping):
            raise ValueError("rate payload has no 'rates' mapping")
        rates: Dict[str, float] = {}
        for code, value in raw.items():
            # bool is an int subclass; "true" is not a rate
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                continue
            if math.isfinite(value) and value > 0:
                rates[str(code).upper()] = float(value)
        return cls(
            base=str(payload.get("base") or BASE_CURRENCY).upper(),
            date=str(payload.get("date") or ""),
            rates=rates,
        )
