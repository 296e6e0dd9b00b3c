"""
Route du calendrier : épisodes diffusés non vus, groupés par série.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter

from ..deps import CalendarDep, CurrentUser
from ..schemas import calendar_payload

router = APIRouter(prefix="/api/calendar", tags=["calendar"])


@router.get("")
async def calendar(
    user: CurrentUser,
    service: CalendarDep,
    today: Optional[date] = None,
):
    return calendar_payload(await service.unwatched_aired_episodes(user, today))
