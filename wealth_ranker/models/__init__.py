"""Pydantic domain models for the Wealth Ranker API."""

from .country import Country, RankedCountry, WealthStatus
from .rates import BASE_CURRENCY, RateTable
from .ranking import RankingRequest, RankingResult

__all__ = [
    "BASE_CURRENCY",
    "Country",
    "RankedCountry",
    "WealthStatus",
    "RateTable",
    "RankingRequest",
    "RankingResult",
]
