from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response
from loguru import logger
from pydantic import BaseModel, Field

from foryou.core.security import redact_user
from foryou.services.feed import FeedRegistry, get_feed_registry

router = APIRouter(tags=["for-you"])


class SliderUpdate(BaseModel):
    field: str = Field(description="Slider to move: wFav, wRecency or wProgress")
    value: float = Field(description="New weight; clamped to [0, 5] and snapped to steps of 0.5")


@router.get("/{user_id}/for-you.json")
async def get_for_you(user_id: str, registry: FeedRegistry = Depends(get_feed_registry)) -> dict[str, Any]:
    """
    Ranked recommendations for a user.

    Record or remote-config failures never surface here; the list is simply shorter
    (possibly empty) and the weights stay where they were.
    """
    try:
        feed = await registry.get_feed(user_id)
        return feed.snapshot()
    except Exception as e:
        logger.exception(f"[{redact_user(user_id)}] Error building For You row: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.patch("/{user_id}/weights")
async def update_weight(
    user_id: str, payload: SliderUpdate, registry: FeedRegistry = Depends(get_feed_registry)
) -> dict[str, Any]:
    try:
        feed = await registry.get_feed(user_id)
        try:
            feed.set_weight(payload.field, payload.value)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        logger.debug(f"[{redact_user(user_id)}] Slider {payload.field} set to {payload.value}")
        return feed.snapshot()
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"[{redact_user(user_id)}] Error applying slider {payload.field}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{user_id}/session", status_code=204)
async def end_session(user_id: str, registry: FeedRegistry = Depends(get_feed_registry)) -> Response:
    registry.drop(user_id)
    return Response(status_code=204)
