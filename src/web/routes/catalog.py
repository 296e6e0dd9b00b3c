"""
Routes du catalogue typé (recherche, découverte, fiches séries).
"""

from fastapi import APIRouter, HTTPException, Query

from ...services.catalog import DISCOVER_LISTS, DISCOVER_MAX_PAGES
from ..deps import CatalogDep
from ..schemas import show_page_payload

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("/search")
async def search(catalog: CatalogDep, q: str = "", page: int = 1):
    return await catalog.search(q, page)


@router.get("/discover/{list_name}")
async def discover(
    list_name: str,
    catalog: CatalogDep,
    page: int = 1,
    time_window: str = "week",
    pages: int = Query(1, ge=1, le=DISCOVER_MAX_PAGES),
):
    """Une page de la liste, ou plusieurs pages concaténées (défilement infini)."""
    if list_name not in DISCOVER_LISTS:
        raise HTTPException(status_code=404, detail=f"Unknown list: {list_name}")
    try:
        return await catalog.discover_pages(list_name, page, pages, time_window)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.get("/genres")
async def genres(catalog: CatalogDep):
    return await catalog.genres()


@router.get("/genres/{genre_id}")
async def by_genre(genre_id: int, catalog: CatalogDep, page: int = 1):
    return await catalog.by_genre(genre_id, page)


@router.get("/shows/{show_id}")
async def show(show_id: int, catalog: CatalogDep):
    return show_page_payload(await catalog.show_page(show_id))


@router.get("/shows/{show_id}/images")
async def images(show_id: int, catalog: CatalogDep):
    return await catalog.images(show_id)


@router.get("/shows/{show_id}/seasons/{season_number}")
async def season(show_id: int, season_number: int, catalog: CatalogDep):
    details, season_details = await catalog.season(show_id, season_number)
    return {"show": details, "season": season_details}
