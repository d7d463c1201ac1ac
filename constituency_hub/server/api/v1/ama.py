"""
Ask Me Anything Endpoints.

Citizens submit questions, browse the published ones and vote on questions
and answers. Votes are keyed by client IP address.
"""

from typing import List, Literal, Optional

from fastapi import APIRouter, Query

from constituency_hub.core.models.io import Envelope, ok
from constituency_hub.core.models.io.ama import (
    AMACategoryRead,
    QuestionPublic,
    QuestionSubmit,
    VoteRequest,
    VoteResult,
)
from constituency_hub.server.services.ama import AMAService
from constituency_hub.server.services.deps import ClientIP, SessionDep

router = APIRouter()


@router.get(
    "/questions",
    response_model=Envelope[List[QuestionPublic]],
    summary="List Questions",
    description="Approved and answered questions, newest first then most upvoted.",
)
async def list_questions(
    session: SessionDep,
    client_ip: ClientIP,
    category: Optional[str] = Query(None, description="Category slug, 'all' for every category"),
    status: Optional[Literal["answered", "pending"]] = Query(None),
    search: Optional[str] = Query(None, max_length=200),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1),
) -> Envelope[List[QuestionPublic]]:
    """
    List published questions.

    - **category**: Category slug
    - **status**: ``answered``, or ``pending`` for approved questions without an answer
    - **search**: Substring of the English or Bengali question
    """
    questions, pagination = await AMAService(session).list_public(
        category, status, search, page, limit, voter_ip=client_ip
    )
    return ok(questions, pagination)


@router.post(
    "/questions",
    response_model=Envelope[QuestionPublic],
    status_code=201,
    summary="Submit Question",
    description="Submit a question for moderation. It is published once approved.",
    responses={400: {"description": "Invalid submission"}},
)
async def submit_question(data: QuestionSubmit, session: SessionDep, client_ip: ClientIP) -> Envelope[QuestionPublic]:
    question = await AMAService(session).submit(data, submitter_ip=client_ip)
    return ok(QuestionPublic.model_validate(question))


@router.post(
    "/vote",
    response_model=Envelope[VoteResult],
    summary="Vote",
    description="Up- or down-vote a question or its answer. Repeating a vote removes it.",
    responses={400: {"description": "Voter unknown or no answer to vote on"}, 404: {"description": "Question not found"}},
)
async def vote(request: VoteRequest, session: SessionDep, client_ip: ClientIP) -> Envelope[VoteResult]:
    return ok(await AMAService(session).vote(request, client_ip))


@router.get(
    "/categories",
    response_model=Envelope[List[AMACategoryRead]],
    summary="List Question Categories",
)
async def list_ama_categories(session: SessionDep) -> Envelope[List[AMACategoryRead]]:
    categories = await AMAService(session).list_categories()
    return ok([AMACategoryRead.model_validate(c) for c in categories])
