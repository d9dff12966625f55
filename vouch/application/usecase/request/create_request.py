"""Create recommendation request use case."""

from pydantic import BaseModel

from vouch.application.usecase.feed.items import RequestItem, to_request_item
from vouch.domain.service import RequestService
from vouch.domain.value import Category, Identity


class CreateRequestRequest(BaseModel):
    """Create request request."""

    requester: str  # Identity from authenticated session
    category: Category
    question: str
    description: str | None = None


class CreateRequestResponse(BaseModel):
    """Create request response."""

    request: RequestItem


class CreateRequestUseCase:
    """Use case for asking friends for recommendations."""

    def __init__(self, request_service: RequestService) -> None:
        self.request_service = request_service

    async def execute(self, request: CreateRequestRequest) -> CreateRequestResponse:
        created = await self.request_service.create_request(
            requester=Identity(request.requester),
            category=request.category,
            question=request.question,
            description=request.description,
        )
        return CreateRequestResponse(request=to_request_item(created))
