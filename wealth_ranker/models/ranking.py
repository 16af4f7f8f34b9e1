from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .country import RankedCountry


class RankingRequest(BaseModel):
    # Both optional so a missing field reaches the ranking validation (400)
    # instead of the generic request schema error (422).
    wealth: Optional[float] = None
    currency: Optional[str] = None


class RankingResult(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    original_wealth: float
    original_currency: str
    wealth_in_usd: float = Field(..., alias="wealthInUSD")
    total_countries: int
    billionaire_countries: int
    millionaire_countries: int
    countries: List[RankedCountry] = Field(default_factory=list)
