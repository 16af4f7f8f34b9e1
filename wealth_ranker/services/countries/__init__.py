from .facts import FACTS, describe
from .fetcher import CountryCatalog, CountryCatalogFetcher
from .normalize import PLACEHOLDER_FLAG, flag_emoji, normalize_record, normalize_records

__all__ = [
    "FACTS",
    "PLACEHOLDER_FLAG",
    "CountryCatalog",
    "CountryCatalogFetcher",
    "describe",
    "flag_emoji",
    "normalize_record",
    "normalize_records",
]
