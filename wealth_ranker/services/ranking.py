from __future__ import annotations

"""Wealth ranking across countries.

A wealth amount is routed through USD into each country's local currency and
classified against fixed local-currency thresholds. Countries whose currency
has no rate are skipped; the skip count is logged, not returned.
"""
import logging
import math
from typing import Iterable, Mapping, Optional, Tuple

from wealth_ranker.core.errors import InputValidationError
from wealth_ranker.models.country import Country, RankedCountry, WealthStatus
from wealth_ranker.models.ranking import RankingResult
from wealth_ranker.services.rates.conversion import to_usd

logger = logging.getLogger(__name__)

BILLIONAIRE_THRESHOLD = 1_000_000_000
MILLIONAIRE_THRESHOLD = 1_000_000


def classify(local_wealth: float) -> WealthStatus:
    if local_wealth >= BILLIONAIRE_THRESHOLD:
        return WealthStatus.BILLIONAIRE
    if local_wealth >= MILLIONAIRE_THRESHOLD:
        return WealthStatus.MILLIONAIRE
    return WealthStatus.NOT_WEALTHY


def validate_request(wealth: Optional[float], currency: Optional[str]) -> Tuple[float, str]:
    """Return (wealth, upper-cased currency) or raise InputValidationError."""
    if wealth is None or currency is None or not str(currency).strip():
        raise InputValidationError("Wealth and currency are required")
    if isinstance(wealth, bool) or not isinstance(wealth, (int, float)):
        raise InputValidationError("Wealth must be a number")
    if not math.isfinite(wealth) or wealth <= 0:
        raise InputValidationError("Wealth must be a positive number")
    return float(wealth), str(currency).strip().upper()


def _rank_country(country: Country, local_wealth: float) -> Optional[RankedCountry]:
    status = classify(local_wealth)
    if status is WealthStatus.NOT_WEALTHY:
        return None
    return RankedCountry(
        **country.model_dump(),
        status=status,
        wealth_in_local_currency=local_wealth,
        wealth_in_billions=(
            local_wealth / BILLIONAIRE_THRESHOLD if status is WealthStatus.BILLIONAIRE else 0.0
        ),
        wealth_in_millions=(
            local_wealth / MILLIONAIRE_THRESHOLD if status is WealthStatus.MILLIONAIRE else 0.0
        ),
    )


def rank(
    wealth: Optional[float],
    source_currency: Optional[str],
    rates: Mapping[str, float],
    countries: Iterable[Country],
) -> RankingResult:
    wealth, source_currency = validate_request(wealth, source_currency)
    conversion = to_usd(wealth, source_currency, rates)
    wealth_in_usd = conversion.usd_equivalent
    if not math.isfinite(wealth_in_usd):
        raise InputValidationError("Wealth is too large to convert")

    ranked = []
    skipped = 0
    for country in countries:
        rate = rates.get(country.currency_code)
        if not rate or rate <= 0:
            skipped += 1
            logger.debug(
                "skipping %s: no rate", country.name, extra={"currency": country.currency_code}
            )
            continue
        # Multiply before dividing: same-currency amounts come back unchanged.
        local_wealth = wealth * rate / conversion.rate
        if not math.isfinite(local_wealth):
            raise InputValidationError("Wealth is too large to convert")
        entry = _rank_country(country, local_wealth)
        if entry is not None:
            ranked.append(entry)

    # sorted() is stable, so equal amounts keep catalog order
    ranked = sorted(ranked, key=lambda c: c.wealth_in_local_currency, reverse=True)
    billionaires = sum(1 for c in ranked if c.status is WealthStatus.BILLIONAIRE)

    logger.info(
        "ranked %s %s: %d qualifying countries, %d skipped for missing currency data",
        wealth,
        source_currency,
        len(ranked),
        skipped,
        extra={"currency": source_currency, "skipped": skipped},
    )
    return RankingResult(
        original_wealth=wealth,
        original_currency=source_currency,
        wealth_in_usd=wealth_in_usd,
        total_countries=len(ranked),
        billionaire_countries=billionaires,
        millionaire_countries=len(ranked) - billionaires,
        countries=ranked,
    )
