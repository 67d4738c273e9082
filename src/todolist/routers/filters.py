from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..filtering import FilterCriteria
from ..schemas import FilterOut, FilterUpdate
from ..service import TodoService
from . import get_service

router = APIRouter(
    prefix="/api/v1/filters",
    tags=["filters"],
)

# Value used when a field is explicitly sent as null.
_RESET: Dict[str, Any] = {"status": "all", "priority": "all", "due_date": None, "search_text": ""}


def _out(criteria: FilterCriteria) -> FilterOut:
    return FilterOut(
        status=criteria.status,
        priority=criteria.priority,
        due_date=criteria.due_date,
        search_text=criteria.search_text,
    )


# PUBLIC_INTERFACE
@router.get("/", response_model=FilterOut, summary="Current Filters")
def get_filters(service: TodoService = Depends(get_service)) -> FilterOut:
    return _out(service.criteria)


# PUBLIC_INTERFACE
@router.patch(
    "/",
    response_model=FilterOut,
    summary="Update Filters",
    description="Change only the criteria present in the body; null resets a field to 'any'.",
)
def update_filters(payload: FilterUpdate, service: TodoService = Depends(get_service)) -> FilterOut:
    """
    Partial update of the filter criteria.
    """
    changes = {}
    for field in payload.model_fields_set:
        value = getattr(payload, field)
        changes[field] = _RESET[field] if value is None else value
    return _out(service.set_filter(**changes))


# PUBLIC_INTERFACE
@router.delete("/", response_model=FilterOut, summary="Clear Filters")
def clear_filters(service: TodoService = Depends(get_service)) -> FilterOut:
    return _out(service.clear_filters())


# PUBLIC_INTERFACE
@router.delete("/search", response_model=FilterOut, summary="Clear Search")
def clear_search(service: TodoService = Depends(get_service)) -> FilterOut:
    """
    Clear only the search text, keeping the other criteria.
    """
    return _out(service.clear_search())
