from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from starlette.responses import JSONResponse

from voting_backend.api.dependencies import get_node_api
from voting_backend.config import Config, get_config
from voting_backend.lib.logger import configure_logger
from voting_backend.services.integrations.hiro import HiroApiError, StacksNodeApi
from voting_backend.services.processing.clarity import UINT_MAX, ClarityDecodeError
from voting_backend.services.voting import (
    AggregationMode,
    PollAggregator,
    PollCountError,
    PollCountResolver,
    PollFetchError,
)

# Configure logger
logger = configure_logger(__name__)

# Create the router
router = APIRouter(prefix="/api/voting")


class PollQuery(BaseModel):
    """Request body shared by the aggregation routes."""

    sender: Optional[str] = Field(
        default=None,
        description="Principal the read-only calls are evaluated as. Defaults to VOTING_DEFAULT_SENDER.",
    )


class PollRequest(PollQuery):
    """Request body for a single poll lookup."""

    model_config = ConfigDict(populate_by_name=True)

    poll_id: int = Field(
        ..., alias="pollId", ge=0, le=UINT_MAX, description="Id of the poll"
    )


def _count_error_response(error: PollCountError) -> JSONResponse:
    logger.error(
        "Failed to get poll count",
        extra={"status_code": error.status_code, "error": str(error)},
    )
    return JSONResponse(
        status_code=error.status_code or 500,
        content={"error": "Failed to get poll count", "details": error.details},
    )


def _aggregator(node_api: StacksNodeApi, settings: Config) -> PollAggregator:
    return PollAggregator(node_api, settings.contract, settings.aggregation)


async def _aggregate(
    query: Optional[PollQuery],
    mode: AggregationMode,
    node_api: StacksNodeApi,
    settings: Config,
):
    sender = query.sender if query else None
    try:
        result = await _aggregator(node_api, settings).aggregate(sender, mode)
    except PollCountError as e:
        return _count_error_response(e)
    return result.to_dict()


@router.post("/poll-count")
async def poll_count(
    query: Optional[PollQuery] = Body(None),
    node_api: StacksNodeApi = Depends(get_node_api),
    settings: Config = Depends(get_config),
):
    """Return the number of polls created in the voting contract.

    Returns:
        dict: ``{"count": n}``
    """
    resolver = PollCountResolver(node_api, settings.contract)
    try:
        count = await resolver.resolve_count(query.sender if query else None)
    except PollCountError as e:
        return _count_error_response(e)
    return {"count": count}


@router.post("/poll")
async def get_poll(
    request: PollRequest,
    node_api: StacksNodeApi = Depends(get_node_api),
    settings: Config = Depends(get_config),
):
    """Return a single poll.

    Raises:
        HTTPException: 404 when no poll has the id, 502 when the node
            lookup fails or the record cannot be decoded
    """
    try:
        poll = await _aggregator(node_api, settings).get_poll(
            request.poll_id, request.sender
        )
    except (HiroApiError, ClarityDecodeError, PollFetchError) as e:
        logger.error(
            "Poll lookup failed",
            extra={"poll_id": request.poll_id, "error": str(e)},
        )
        raise HTTPException(status_code=502, detail=f"Failed to fetch poll: {e}")

    if poll is None:
        raise HTTPException(status_code=404, detail="Poll not found")
    return poll.to_dict()


@router.post("/polls")
async def list_polls(
    query: Optional[PollQuery] = Body(None),
    node_api: StacksNodeApi = Depends(get_node_api),
    settings: Config = Depends(get_config),
):
    """Return every poll, newest first, fetched one at a time.

    Polls whose lookup fails are left out.
    """
    return await _aggregate(query, AggregationMode.INCREMENTAL, node_api, settings)


@router.post("/all-polls")
async def all_polls(
    query: Optional[PollQuery] = Body(None),
    node_api: StacksNodeApi = Depends(get_node_api),
    settings: Config = Depends(get_config),
):
    """Return every poll in id order, fetched concurrently.

    Polls whose lookup fails appear as ``{"pollId", "error"}`` entries.
    """
    return await _aggregate(query, AggregationMode.BULK, node_api, settings)
