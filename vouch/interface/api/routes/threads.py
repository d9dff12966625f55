"""Comment thread routes.

A thread is the private conversation attached to one response of a
request. Only the requester and that response's author may read or post.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from vouch.application.usecase.thread import (
    OpenThreadRequest,
    OpenThreadResponse,
    OpenThreadUseCase,
    PostThreadCommentRequest,
    PostThreadCommentResponse,
    PostThreadCommentUseCase,
)
from vouch.domain.service import JWTService
from vouch.interface.api.auth import require_identity

router = APIRouter(prefix="/requests", tags=["threads"], route_class=DishkaRoute)


class PostThreadCommentAPIRequest(BaseModel):
    """API request for posting to a thread."""

    text: str = Field(min_length=1, max_length=2000)


@router.get(
    "/{request_id}/responses/{response_index}/comments",
    response_model=OpenThreadResponse,
)
async def open_thread(
    request_id: str,
    response_index: int,
    open_thread_use_case: FromDishka[OpenThreadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> OpenThreadResponse:
    """Read a response thread, oldest comment first.

    Raises:
        HTTPException: 401 if not authenticated, 403 if the caller is not a
            participant, 404 if the request does not exist
    """
    identity = require_identity(
        jwt_service, auth_token, authorization, action="read conversations"
    )
    return await open_thread_use_case.execute(
        OpenThreadRequest(
            request_id=request_id, response_index=response_index, viewer=identity
        )
    )


@router.post(
    "/{request_id}/responses/{response_index}/comments",
    response_model=PostThreadCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def post_thread_comment(
    request_id: str,
    response_index: int,
    request: PostThreadCommentAPIRequest,
    post_comment_use_case: FromDishka[PostThreadCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> PostThreadCommentResponse:
    """Post a follow-up comment to a response thread."""
    identity = require_identity(
        jwt_service, auth_token, authorization, action="post comments"
    )
    return await post_comment_use_case.execute(
        PostThreadCommentRequest(
            request_id=request_id,
            response_index=response_index,
            author=identity,
            text=request.text,
        )
    )
