"""
Activity feed endpoints.

A polling endpoint for the newest records and an SSE stream that pushes
each new record as it is written.
"""

from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, Query
from sse_starlette.sse import EventSourceResponse

from api.dependencies import get_audit_logger, get_broadcaster

from .broadcast import ACTIVITY_FEED_TOPIC, BroadcastHub
from .exceptions import PushUnavailableError, UnknownTopicError
from .interfaces import IActivityBroadcaster
from .models import ActivityListResponse
from .service import AuditLogger

router = APIRouter()

NEW_ACTIVITY_EVENT = "new-activity"


@router.get("", response_model=ActivityListResponse)
async def list_activities(
    limit: Optional[str] = Query(default=None, description="Maximum records (default 20, max 100)"),
    audit: AuditLogger = Depends(get_audit_logger),
) -> ActivityListResponse:
    """
    Newest activities first.

    Missing, non-numeric or non-positive limits fall back to the default;
    larger limits are clamped to the maximum.
    """
    return ActivityListResponse(activities=await audit.recent(limit))


async def activity_event_generator(hub: BroadcastHub, topic: str) -> AsyncIterator[dict]:
    """
    Yield one SSE event per activity published after subscribing.

    Yields events in the format:
        event: new-activity
        id: <activity id>
        data: <activity json>
    """
    async with hub.subscribe(topic) as queue:
        while True:
            activity = await queue.get()
            yield {
                "event": NEW_ACTIVITY_EVENT,
                "id": activity.id,
                "data": activity.model_dump_json(),
            }


@router.get("/stream")
async def stream_activities(
    topic: str = Query(default=ACTIVITY_FEED_TOPIC),
    broadcaster: IActivityBroadcaster = Depends(get_broadcaster),
):
    """
    Stream new activities via SSE.

    There is no backfill: use GET /api/activities for history. Returns
    503 when live push is disabled so clients fall back to polling.
    """
    if not isinstance(broadcaster, BroadcastHub):
        raise PushUnavailableError()
    if not broadcaster.has_topic(topic):
        raise UnknownTopicError(topic)

    return EventSourceResponse(
        activity_event_generator(broadcaster, topic),
        media_type="text/event-stream",
    )
