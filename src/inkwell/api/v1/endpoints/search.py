"""Search and category endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query

from inkwell.schemas.article import CategoryCount, SearchResponse
from inkwell.services import query

from ..dependencies import OptionalCallerDep, StoreDep

router = APIRouter(tags=["search"])


@router.get("/search", response_model=SearchResponse)
def search(
    store: StoreDep,
    caller_id: OptionalCallerDep,
    q: str | None = Query(None, description="Search term"),
    search_type: query.SearchType = Query("all", alias="type"),
) -> SearchResponse:
    """Search published articles and users."""
    return query.search(store, q, search_type, caller_id)


@router.get("/categories", response_model=list[CategoryCount])
def list_categories(store: StoreDep) -> list[CategoryCount]:
    """Categories used by published articles, with counts."""
    return query.categories(store)
