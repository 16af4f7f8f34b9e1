from __future__ import annotations

"""Raw restcountries record -> Country.

Handles both response shapes the catalog endpoints return:

    v3.x: name {common, official}, currencies {CODE: {name, symbol}},
          languages {key: name}, flags {png, svg}, flag (emoji), cca2
    v2:   name (str), currencies [{code, name, symbol}],
          languages [{name}], flags {png, svg}, flag (svg url), alpha2Code

Missing currency information falls back to USD / Dollar / $.
"""
import logging
import math
import random
from typing import Any, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from wealth_ranker.models.country import Country

from .facts import Selector, describe

logger = logging.getLogger(__name__)

PLACEHOLDER_FLAG = "\U0001F3F3\uFE0F"  # white flag
REGIONAL_INDICATOR_OFFSET = 127397  # ord("🇦") - ord("A")

DEFAULT_CURRENCY: Tuple[str, str, str] = ("USD", "Dollar", "$")


def flag_emoji(country_code: Optional[str]) -> str:
    """Compose a flag emoji from a two-letter ISO code.

    Anything other than exactly two ASCII letters yields PLACEHOLDER_FLAG.
    """
    if not isinstance(country_code, str) or len(country_code) != 2:
        return PLACEHOLDER_FLAG
    if not (country_code.isascii() and country_code.isalpha()):
        return PLACEHOLDER_FLAG
    return "".join(chr(ord(c) + REGIONAL_INDICATOR_OFFSET) for c in country_code.upper())


def _str(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _names(raw: Mapping[str, Any]) -> Tuple[str, str]:
    name = raw.get("name")
    if isinstance(name, Mapping):
        common = _str(name.get("common"))
        return common, _str(name.get("official")) or common
    common = _str(name)
    return common, common


def _currency(raw: Mapping[str, Any]) -> Tuple[str, str, str]:
    currencies = raw.get("currencies")
    if isinstance(currencies, Mapping) and currencies:
        code, info = next(iter(currencies.items()))
        info = info if isinstance(info, Mapping) else {}
        return (
            _str(code) or DEFAULT_CURRENCY[0],
            _str(info.get("name")) or DEFAULT_CURRENCY[1],
            _str(info.get("symbol")) or DEFAULT_CURRENCY[2],
        )
    if isinstance(currencies, list) and currencies and isinstance(currencies[0], Mapping):
        info = currencies[0]
        return (
            _str(info.get("code")) or DEFAULT_CURRENCY[0],
            _str(info.get("name")) or DEFAULT_CURRENCY[1],
            _str(info.get("symbol")) or DEFAULT_CURRENCY[2],
        )
    return DEFAULT_CURRENCY


def _flags(raw: Mapping[str, Any]) -> Tuple[str, str]:
    flags = raw.get("flags")
    flags = flags if isinstance(flags, Mapping) else {}
    top_level = _str(raw.get("flag"))
    # v3 puts the emoji in "flag"; v2 puts an svg url there
    top_level_is_url = top_level.startswith(("http://", "https://"))

    glyph = _str(flags.get("emoji"))
    if not glyph and top_level and not top_level_is_url:
        glyph = top_level
    if not glyph:
        glyph = flag_emoji(raw.get("cca2") or raw.get("alpha2Code"))

    image = _str(flags.get("png")) or _str(flags.get("svg"))
    if not image and top_level_is_url:
        image = top_level
    return glyph, image


def _capital(raw: Mapping[str, Any]) -> str:
    capital = raw.get("capital")
    if isinstance(capital, list):
        return (_str(capital[0]) or "N/A") if capital else "N/A"
    return _str(capital) or "N/A"


def _languages(raw: Mapping[str, Any]) -> List[str]:
    languages = raw.get("languages")
    if isinstance(languages, Mapping):
        return [v for v in languages.values() if isinstance(v, str) and v]
    if isinstance(languages, list):
        out = []
        for lang in languages:
            if isinstance(lang, Mapping):
                lang = lang.get("name")
            if isinstance(lang, str) and lang:
                out.append(lang)
        return out
    return []


def _population(raw: Mapping[str, Any]) -> int:
    population = raw.get("population")
    if isinstance(population, bool) or not isinstance(population, (int, float)):
        return 0
    if not math.isfinite(population):
        return 0
    return max(int(population), 0)


def normalize_record(
    raw: Any, choose: Selector = random.choice
) -> Optional[Country]:
    """Return the canonical Country for ``raw``, or None when it has no name."""
    if not isinstance(raw, Mapping):
        return None
    name, official_name = _names(raw)
    if not name:
        return None

    code, currency_name, symbol = _currency(raw)
    glyph, image = _flags(raw)
    try:
        country = Country(
            name=name,
            official_name=official_name,
            flag_glyph=glyph,
            flag_image_url=image,
            currency_code=code.upper(),
            currency_name=currency_name,
            currency_symbol=symbol,
            region=_str(raw.get("region")),
            subregion=_str(raw.get("subregion")),
            population=_population(raw),
            capital=_capital(raw),
            languages=_languages(raw),
        )
    except ValidationError as e:
        logger.warning("dropping malformed country record %r: %s", name, e)
        return None
    return country.model_copy(update={"descriptive_fact": describe(country, choose)})


def normalize_records(
    records: List[Any], choose: Selector = random.choice
) -> Tuple[Country, ...]:
    countries = []
    for raw in records:
        country = normalize_record(raw, choose)
        if country is not None:
            countries.append(country)
    dropped = len(records) - len(countries)
    if dropped:
        logger.info("dropped %d country records without a usable name", dropped)
    return tuple(countries)
