from typing import List

from fastapi import APIRouter, Depends

from wealth_ranker.models.country import Country
from wealth_ranker.services.context import AppContext, get_context

router = APIRouter(prefix="/api", tags=["countries"])


@router.get(
    "/countries",
    response_model=List[Country],
    summary="All countries with currency, flag and a descriptive fact",
)
def list_countries(ctx: AppContext = Depends(get_context)):
    return list(ctx.get_countries())
