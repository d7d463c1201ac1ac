"""
Question moderation.

Staff approve, reject, feature and answer submitted questions, and manage
the question categories.
"""

from typing import List, Optional

from fastapi import APIRouter, Query
from sqlalchemy import select

from constituency_hub.core.database.entities.ama import AMACategory, AMAQuestion, QuestionStatus
from constituency_hub.core.exceptions import BadRequestError, NotFoundError
from constituency_hub.core.models.io import Deleted, Envelope, ok
from constituency_hub.core.models.io.ama import (
    AMACategoryCreate,
    AMACategoryRead,
    AMACategoryUpdate,
    QuestionAdminRead,
    QuestionAdminUpdate,
)
from constituency_hub.server.services.ama import AMAService
from constituency_hub.server.services.content import resolve_slug
from constituency_hub.server.services.deps import SessionDep, StaffUser

router = APIRouter()


@router.get("/categories", response_model=Envelope[List[AMACategoryRead]], summary="List All Question Categories")
async def list_categories(session: SessionDep) -> Envelope[List[AMACategoryRead]]:
    categories = await AMAService(session).list_categories(active_only=False)
    return ok([AMACategoryRead.model_validate(c) for c in categories])


@router.post("/categories", response_model=Envelope[AMACategoryRead], status_code=201, summary="Create Category")
async def create_category(data: AMACategoryCreate, session: SessionDep) -> Envelope[AMACategoryRead]:
    payload = data.model_dump()
    payload["slug"] = await resolve_slug(session, AMACategory, data.slug, data.name_en)
    category = AMACategory(**payload)
    session.add(category)
    await session.commit()
    await session.refresh(category)
    return ok(AMACategoryRead.model_validate(category))


@router.put("/categories/{category_id}", response_model=Envelope[AMACategoryRead], summary="Update Category")
async def update_category(category_id: str, data: AMACategoryUpdate, session: SessionDep) -> Envelope[AMACategoryRead]:
    category = await session.get(AMACategory, category_id)
    if category is None:
        raise NotFoundError("Question category not found")
    update = data.model_dump(exclude_unset=True)
    if "slug" in update:
        update["slug"] = await resolve_slug(
            session, AMACategory, update["slug"], update.get("name_en") or category.name_en, exclude_id=category.id
        )
    for key, value in update.items():
        setattr(category, key, value)
    session.add(category)
    await session.commit()
    await session.refresh(category)
    return ok(AMACategoryRead.model_validate(category))


@router.delete("/categories/{category_id}", response_model=Envelope[Deleted], summary="Delete Category")
async def delete_category(category_id: str, session: SessionDep) -> Envelope[Deleted]:
    category = await session.get(AMACategory, category_id)
    if category is None:
        raise NotFoundError("Question category not found")
    in_use = await session.execute(select(AMAQuestion.id).where(AMAQuestion.category_id == category.id).limit(1))
    if in_use.first() is not None:
        raise BadRequestError("Category is still used by questions")
    await session.delete(category)
    await session.commit()
    return ok(Deleted(id=category_id))


@router.get("/questions", response_model=Envelope[List[QuestionAdminRead]], summary="List All Questions")
async def list_questions(
    session: SessionDep,
    status: Optional[QuestionStatus] = Query(None),
    category_id: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
) -> Envelope[List[QuestionAdminRead]]:
    questions, pagination = await AMAService(session).list_admin(
        status.value if status else None, category_id, page, limit
    )
    return ok(questions, pagination)


@router.patch(
    "/questions/{question_id}",
    response_model=Envelope[QuestionAdminRead],
    summary="Moderate Question",
    responses={400: {"description": "Marked answered without an answer"}, 404: {"description": "Question not found"}},
)
async def moderate_question(
    question_id: str, data: QuestionAdminUpdate, session: SessionDep, user: StaffUser
) -> Envelope[QuestionAdminRead]:
    """
    Moderate a question.

    Supplying a non-empty answer marks the question ``answered`` and records
    who answered it and when.
    """
    return ok(await AMAService(session).moderate(question_id, data, user))


@router.delete("/questions/{question_id}", response_model=Envelope[Deleted], summary="Delete Question")
async def delete_question(question_id: str, session: SessionDep) -> Envelope[Deleted]:
    await AMAService(session).delete(question_id)
    return ok(Deleted(id=question_id))
