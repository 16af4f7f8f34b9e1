from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class WealthStatus(str, Enum):
    BILLIONAIRE = "billionaire"
    MILLIONAIRE = "millionaire"
    NOT_WEALTHY = "not-wealthy"


class Country(BaseModel):
    """Canonical country record built from a raw restcountries entry.

    Instances are frozen: cached catalogs are shared across requests.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    name: str = Field(..., min_length=1)
    official_name: str = ""
    flag_glyph: str = ""
    flag_image_url: str = ""
    currency_code: str = "USD"
    currency_name: str = "Dollar"
    currency_symbol: str = "$"
    region: str = ""
    subregion: str = ""
    population: int = Field(0, ge=0)
    capital: str = "N/A"
    languages: List[str] = Field(default_factory=list)
    descriptive_fact: str = ""

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("country name cannot be blank")
        return v


class RankedCountry(Country):
    status: WealthStatus
    wealth_in_local_currency: float
    wealth_in_billions: float = 0.0
    wealth_in_millions: float = 0.0
