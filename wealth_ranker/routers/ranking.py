from fastapi import APIRouter, Depends

from wealth_ranker.models.ranking import RankingRequest, RankingResult
from wealth_ranker.services.context import AppContext, get_context

router = APIRouter(prefix="/api", tags=["ranking"])


@router.post(
    "/calculate-ranking",
    response_model=RankingResult,
    summary="Rank countries where the given wealth is millionaire+ in local currency",
)
def calculate_ranking(
    payload: RankingRequest, ctx: AppContext = Depends(get_context)
):
    return ctx.calculate_ranking(payload.wealth, payload.currency)
