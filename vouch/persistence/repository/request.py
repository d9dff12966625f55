"""PostgreSQL implementation of RecommendationRequest repository."""

from collections import defaultdict
from typing import Any, Iterable, List, Optional, Sequence

from sqlalchemy import desc, insert, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vouch.domain.model import RecommendationRequest, Response
from vouch.domain.repository import RecommendationRequestRepository
from vouch.domain.value import Identity, RequestId
from vouch.persistence.mappers import (
    request_to_dict,
    response_to_dict,
    row_to_request,
    row_to_response,
)
from vouch.persistence.tables import (
    recommendation_requests_table,
    request_responses_table,
)


class PostgresRecommendationRequestRepository(RecommendationRequestRepository):
    """PostgreSQL implementation of RecommendationRequestRepository.

    Responses live in their own table; requests are assembled with one extra
    query per batch.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _with_responses(
        self, rows: Sequence[Any]
    ) -> List[RecommendationRequest]:
        if not rows:
            return []

        request_ids = [row.id for row in rows]
        stmt = select(request_responses_table).where(
            request_responses_table.c.request_id.in_(request_ids)
        )
        result = await self.session.execute(stmt)

        responses: dict[Any, list[Response]] = defaultdict(list)
        for response_row in result.fetchall():
            response = row_to_response(response_row._asdict())
            responses[response.request_id].append(response)

        return [
            row_to_request(row._asdict(), responses.get(row.id, [])) for row in rows
        ]

    async def find_by_id(self, request_id: RequestId) -> Optional[RecommendationRequest]:
        """Find a request, with its responses, by ID."""
        stmt = select(recommendation_requests_table).where(
            recommendation_requests_table.c.id == request_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        if not row:
            return None
        requests = await self._with_responses([row])
        return requests[0]

    async def find_all(self) -> List[RecommendationRequest]:
        """Find every request, newest first."""
        stmt = select(recommendation_requests_table).order_by(
            desc(recommendation_requests_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return await self._with_responses(result.fetchall())

    async def find_relevant(
        self, requesters: Iterable[Identity], responder: Identity
    ) -> List[RecommendationRequest]:
        """Find requests by circle members or answered by the viewer."""
        answered = select(request_responses_table.c.request_id).where(
            request_responses_table.c.responder == responder
        )
        stmt = (
            select(recommendation_requests_table)
            .where(
                or_(
                    recommendation_requests_table.c.requester.in_(list(requesters)),
                    recommendation_requests_table.c.id.in_(answered),
                )
            )
            .order_by(desc(recommendation_requests_table.c.created_at))
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            return await self._with_responses(result.fetchall())

    async def save(self, request: RecommendationRequest) -> RecommendationRequest:
        """Save a new request (responses are appended separately)."""
        stmt = insert(recommendation_requests_table).values(**request_to_dict(request))
        await self.session.execute(stmt)
        await self.session.flush()
        return request

    async def append_response(self, response: Response) -> Response:
        """Append a response; the (request_id, index) constraint decides races."""
        # Savepoint keeps the outer transaction usable after a conflict
        async with self.session.begin_nested():
            stmt = insert(request_responses_table).values(**response_to_dict(response))
            await self.session.execute(stmt)
        return response
