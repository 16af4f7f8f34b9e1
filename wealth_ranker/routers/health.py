from typing import Dict

from fastapi import APIRouter, Depends

from wealth_ranker.services.context import AppContext, get_context

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", summary="Liveness check (no upstream calls)")
def health(ctx: AppContext = Depends(get_context)) -> Dict[str, str]:
    return ctx.health_check()
