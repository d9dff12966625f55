"""Feed routes.

``GET /feed`` returns one snapshot. ``/feed/live`` is a WebSocket that
pushes a new snapshot whenever a source stream changes. Clients may send
``{"filter": "<value>"}`` at any time to change the view-time filter.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import logfire
from dishka import AsyncContainer
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import (
    APIRouter,
    Cookie,
    Header,
    Query,
    WebSocket,
    WebSocketDisconnect,
    status,
)

from vouch.application.usecase.feed import (
    BuildFeedRequest,
    BuildFeedResponse,
    BuildFeedUseCase,
)
from vouch.domain.error import RetrievalError
from vouch.domain.model import FeedSnapshot
from vouch.domain.service import (
    FeatureFlagService,
    FeedService,
    FeedSubscription,
    JWTService,
)
from vouch.domain.value import FeedFilter, Identity
from vouch.interface.api.auth import extract_token, require_identity
from vouch.persistence.change_feed import InProcessChangeFeed

LIVE_FEED_FLAG = "enable_live_feed"

router = APIRouter(tags=["feed"], route_class=DishkaRoute)


@router.get("/feed", response_model=BuildFeedResponse)
async def get_feed(
    build_feed_use_case: FromDishka[BuildFeedUseCase],
    jwt_service: FromDishka[JWTService],
    filter: str | None = Query(default=None),
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> BuildFeedResponse:
    """Build the caller's feed.

    Args:
        build_feed_use_case: Build feed use case from DI
        jwt_service: JWT service for token verification (injected)
        filter: View-time filter (all, recommendations, activity, a category
            or an activity category)
        auth_token: JWT token from cookie
        authorization: Optional bearer token header

    Returns:
        Feed entries, newest first, plus any streams that failed to load

    Raises:
        HTTPException: 401 if not authenticated, 422 on an unknown filter,
            503 if the caller's circle could not be loaded
    """
    identity = require_identity(
        jwt_service, auth_token, authorization, action="view the feed"
    )
    return await build_feed_use_case.execute(
        BuildFeedRequest(viewer=identity, filter=filter)
    )


def _render(snapshot: FeedSnapshot, feed_filter: FeedFilter) -> dict:
    return BuildFeedResponse.from_snapshot(snapshot, feed_filter).model_dump(
        mode="json"
    )


async def _receive_filters(
    websocket: WebSocket, subscription: FeedSubscription, send_lock: asyncio.Lock
) -> None:
    """Apply filter changes sent by the client until it disconnects."""
    try:
        while True:
            message = await websocket.receive_json()
            try:
                feed_filter = FeedFilter.parse(message.get("filter"))
            except (AttributeError, ValueError) as e:
                async with send_lock:
                    await websocket.send_json({"error": str(e)})
                continue

            snapshot = subscription.set_filter(feed_filter)
            if snapshot is not None:
                async with send_lock:
                    await websocket.send_json(_render(snapshot, feed_filter))
    except WebSocketDisconnect:
        logfire.info("Live feed client disconnected", viewer=subscription.viewer)
    finally:
        subscription.close()


def _feed_service_scope(container: AsyncContainer):
    """Factory for one-load scopes: each entry gets a fresh session."""

    @asynccontextmanager
    async def scope() -> AsyncIterator[FeedService]:
        async with container() as request_container:
            yield await request_container.get(FeedService)

    return scope


async def _authorize(
    container: AsyncContainer, websocket: WebSocket
) -> Optional[Identity]:
    """Identity of a client allowed to open the live feed, else None."""
    async with container() as request_container:
        jwt_service = await request_container.get(JWTService)
        identity = jwt_service.get_identity_from_token(
            extract_token(
                websocket.cookies.get("auth_token"),
                websocket.headers.get("authorization"),
            )
            or websocket.query_params.get("token")
        )
        if not identity:
            return None

        flags = await request_container.get(FeatureFlagService)
        if not await flags.is_enabled(LIVE_FEED_FLAG):
            logfire.info("Live feed disabled", viewer=identity)
            return None
        return identity


@router.websocket("/feed/live")
async def live_feed(websocket: WebSocket) -> None:
    """Stream feed snapshots to an authenticated client.

    No DI scope stays open while the socket waits: authorization and every
    reload each run in a scope of their own. A client that switches
    identity must reconnect.
    """
    container: AsyncContainer = websocket.app.state.dishka_container

    identity = await _authorize(container, websocket)
    if not identity:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    try:
        feed_filter = FeedFilter.parse(websocket.query_params.get("filter"))
    except ValueError:
        await websocket.close(code=status.WS_1003_UNSUPPORTED_DATA)
        return

    subscription = FeedSubscription(
        viewer=identity,
        feed_services=_feed_service_scope(container),
        change_feed=await container.get(InProcessChangeFeed),
        feed_filter=feed_filter,
    )

    await websocket.accept()
    logfire.info("Live feed opened", viewer=identity)

    send_lock = asyncio.Lock()
    receiver = asyncio.create_task(_receive_filters(websocket, subscription, send_lock))
    try:
        async for snapshot in subscription.updates():
            async with send_lock:
                await websocket.send_json(_render(snapshot, subscription.feed_filter))
    except RetrievalError as e:
        logfire.warn("Live feed could not load circle", viewer=identity, error=str(e))
        await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
    except WebSocketDisconnect:
        pass
    finally:
        subscription.close()
        receiver.cancel()
