from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from wealth_ranker.core.errors import CurrencyLookupError

"""USD-routed currency conversion.

Every rate is "units of currency per 1 USD", so any amount converts to USD by
division and from USD by multiplication. No rounding is applied here; callers
format for display.
"""


@dataclass(frozen=True)
class ConversionResult:
    original_amount: float
    currency: str
    rate: float
    usd_equivalent: float


def lookup_rate(rates: Mapping[str, float], currency: str) -> float:
    rate = rates.get(currency.upper())
    if rate is None or rate <= 0:
        raise CurrencyLookupError(currency)
    return rate


def to_usd(amount: float, currency: str, rates: Mapping[str, float]) -> ConversionResult:
    currency = currency.upper()
    rate = lookup_rate(rates, currency)
    return ConversionResult(
        original_amount=amount,
        currency=currency,
        rate=rate,
        usd_equivalent=amount / rate,
    )


def from_usd(usd_amount: float, currency: str, rates: Mapping[str, float]) -> float:
    return usd_amount * lookup_rate(rates, currency)


def convert(
    amount: float, source: str, target: str, rates: Mapping[str, float]
) -> float:
    return from_usd(to_usd(amount, source, rates).usd_equivalent, target, rates)
