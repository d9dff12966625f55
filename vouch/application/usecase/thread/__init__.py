"""Thread use cases."""

from .open_thread import OpenThreadRequest, OpenThreadResponse, OpenThreadUseCase
from .post_thread_comment import (
    PostThreadCommentRequest,
    PostThreadCommentResponse,
    PostThreadCommentUseCase,
)

__all__ = [
    "OpenThreadRequest",
    "OpenThreadResponse",
    "OpenThreadUseCase",
    "PostThreadCommentRequest",
    "PostThreadCommentResponse",
    "PostThreadCommentUseCase",
]
