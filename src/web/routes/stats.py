"""
Routes des statistiques.
"""

from dataclasses import asdict

from fastapi import APIRouter

from ..deps import CurrentUser, StatsDep

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/summary")
def summary(user: CurrentUser, stats: StatsDep) -> dict:
    return asdict(stats.status_summary(user))


@router.get("")
async def detailed(user: CurrentUser, stats: StatsDep) -> dict:
    result = await stats.detailed_stats(user)
    payload = asdict(result)
    payload["formatted_duration"] = result.formatted_duration
    return payload
