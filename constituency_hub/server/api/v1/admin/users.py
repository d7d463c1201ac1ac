"""
User administration.

Admin only. Staff accounts are created here; an admin cannot change their
own role or deactivate themselves.
"""

from typing import List

from fastapi import APIRouter, Query

from constituency_hub.core.models.io import Envelope, ok
from constituency_hub.core.models.io.users import UserCreate, UserRead, UserUpdate
from constituency_hub.server.services.deps import AdminUser, SessionDep
from constituency_hub.server.services.users import UserService

router = APIRouter()


@router.get("", response_model=Envelope[List[UserRead]], summary="List Users")
async def list_users(
    session: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1),
) -> Envelope[List[UserRead]]:
    users, pagination = await UserService(session).list_users(page, limit)
    return ok([UserRead.model_validate(u) for u in users], pagination)


@router.post(
    "",
    response_model=Envelope[UserRead],
    status_code=201,
    summary="Create User",
    responses={409: {"description": "Email already registered"}},
)
async def create_user(data: UserCreate, session: SessionDep) -> Envelope[UserRead]:
    return ok(UserRead.model_validate(await UserService(session).create(data)))


@router.patch(
    "/{user_id}",
    response_model=Envelope[UserRead],
    summary="Update User",
    responses={400: {"description": "Attempt to demote or deactivate yourself"}},
)
async def update_user(user_id: str, data: UserUpdate, session: SessionDep, admin: AdminUser) -> Envelope[UserRead]:
    return ok(UserRead.model_validate(await UserService(session).update(user_id, data, admin)))
