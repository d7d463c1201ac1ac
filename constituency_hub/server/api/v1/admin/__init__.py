"""Back-office endpoints. Every router here requires a staff bearer token."""

from fastapi import APIRouter, Depends

from constituency_hub.server.services.deps import require_admin, require_staff

from . import (
    achievements,
    ama,
    categories,
    contacts,
    emergency,
    events,
    news,
    polls,
    settings,
    store,
    users,
    volunteers,
    voters,
)

router = APIRouter()

_staff = [Depends(require_staff)]

router.include_router(news.router, prefix="/news", tags=["admin: news"], dependencies=_staff)
router.include_router(categories.router, prefix="/categories", tags=["admin: categories"], dependencies=_staff)
router.include_router(events.router, prefix="/events", tags=["admin: events"], dependencies=_staff)
router.include_router(
    achievements.router, prefix="/achievements", tags=["admin: achievements"], dependencies=_staff
)
router.include_router(ama.router, prefix="/ama", tags=["admin: ama"], dependencies=_staff)
router.include_router(polls.router, prefix="/polls", tags=["admin: polls"], dependencies=_staff)
router.include_router(voters.router, prefix="/voters", tags=["admin: voters"], dependencies=_staff)
router.include_router(volunteers.router, prefix="/volunteers", tags=["admin: volunteers"], dependencies=_staff)
router.include_router(emergency.router, prefix="/emergency", tags=["admin: emergency"], dependencies=_staff)
router.include_router(store.router, prefix="/store", tags=["admin: store"], dependencies=_staff)
router.include_router(contacts.router, prefix="/contacts", tags=["admin: contacts"], dependencies=_staff)
router.include_router(settings.router, prefix="/settings", tags=["admin: settings"], dependencies=_staff)
router.include_router(users.router, prefix="/users", tags=["admin: users"], dependencies=[Depends(require_admin)])
