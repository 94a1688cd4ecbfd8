"""API routes for the player score streams service."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from streamboard.context import AppContext
from streamboard.models import (
    PublishRequest,
    PublishResponse,
    SchemaResponse,
    LeaderboardResponse,
    ErrorResponse,
)
from streamboard.services import LeaderboardService, RecordService
from .dependencies import get_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get("/schema", response_model=SchemaResponse)
async def get_schema(
    context: AppContext = Depends(get_context),
) -> SchemaResponse:
    """
    Get the current schema id.
    """
    return SchemaResponse(schemaId=context.schema_id)


@router.post("/publish", response_model=PublishResponse, responses=ERROR_RESPONSES)
async def publish(
    body: PublishRequest,
    context: AppContext = Depends(get_context),
):
    """
    Publish one player score record to the stream.

    Body: player, score, playTime
    Returns: success, txHash
    """
    if not body.player or body.score is None or body.playTime is None:
        return JSONResponse(
            status_code=400,
            content={"error": "Missing player, score, or playTime"},
        )

    service = RecordService(context)
    tx_hash = await service.publish(
        player=body.player,
        score=body.score,
        play_time=body.playTime,
    )
    return PublishResponse(success=True, txHash=tx_hash)


@router.get("/data", response_model=LeaderboardResponse, responses=ERROR_RESPONSES)
async def get_data(
    publisher: Optional[str] = Query(
        None,
        description="Publisher address, defaults to PUBLISHER_WALLET",
        examples=["0x0e09b56ef137f417e424f1265425e93bfff77e17"],
    ),
    context: AppContext = Depends(get_context),
) -> LeaderboardResponse:
    """
    Get the leaderboard of every record the publisher has written.

    Returns: totalPlayers, leaderboard[rank, player, score, playTime]
    """
    service = LeaderboardService(context)
    return await service.get_leaderboard(publisher=publisher)
