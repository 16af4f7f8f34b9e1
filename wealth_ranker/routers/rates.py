from __future__ import annotations

from fastapi import APIRouter, Depends

from wealth_ranker.models.rates import RateTable
from wealth_ranker.services.context import AppContext, get_context

"""Exchange rates router.

GET /api/exchange-rates -> {base, date, rates} with USD as base. Served from
the rates cache; a stale table is returned when the provider is down.
"""

router = APIRouter(prefix="/api", tags=["rates"])


@router.get(
    "/exchange-rates",
    response_model=RateTable,
    summary="Latest exchange rates (units per 1 USD)",
)
def exchange_rates(ctx: AppContext = Depends(get_context)):
    return ctx.get_rates()
