from fastapi import APIRouter

from foryou.core.config import settings
from foryou.core.constants import REMOTE_WEIGHTS_KEY

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/ai-recommend")
async def get_recommend_weights() -> dict[str, dict[str, float | int]]:
    """Server-configured weights in the shape RemoteWeightsClient consumes. Unset weights are omitted."""
    configured = {
        "wFav": settings.RECOMMEND_W_FAV,
        "wRecency": settings.RECOMMEND_W_RECENCY,
        "wProgress": settings.RECOMMEND_W_PROGRESS,
        "decayDays": settings.RECOMMEND_DECAY_DAYS,
        "maxItems": settings.RECOMMEND_MAX_ITEMS,
    }
    return {REMOTE_WEIGHTS_KEY: {k: v for k, v in configured.items() if v is not None}}
