from .conversion import ConversionResult, convert, from_usd, lookup_rate, to_usd
from .fetcher import ExchangeRateFetcher

__all__ = [
    "ConversionResult",
    "ExchangeRateFetcher",
    "convert",
    "from_usd",
    "lookup_rate",
    "to_usd",
]
