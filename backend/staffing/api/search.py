"""
Employee Search API

Endpoints:
    GET /api/search/projects/{project_id} - Rank all employees for a project
    GET /api/search/projects/{project_id}/positions - Rank employees per position

Every request builds its own throwaway corpus; nothing is cached between
requests. A search exceeding SEARCH_TIMEOUT_SECONDS returns 504.
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from staffing.api.deps import get_repository
from staffing.config import get_settings
from staffing.schemas import (
    EmployeeScore,
    ProjectSearchResponse,
    PositionSearchResult,
    PositionSearchResponse,
)
from staffing.services.repository import StaffingRepository
from staffing.services.search import (
    IndexBuildError,
    InputValidationError,
    ProjectNotFoundError,
    search_by_position,
    search_project_wide,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/search", tags=["search"])


async def _run_search(coro):
    """Await a search, mapping its failures onto HTTP errors."""
    settings = get_settings()
    try:
        return await asyncio.wait_for(coro, timeout=settings.search_timeout_seconds)
    except InputValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except IndexBuildError as e:
        logger.error(f"Search index build failed: {e}")
        raise HTTPException(status_code=500, detail="Search index build failed")
    except asyncio.TimeoutError:
        logger.warning("Search timed out")
        raise HTTPException(status_code=504, detail="Search timed out")


@router.get("/projects/{project_id}", response_model=ProjectSearchResponse)
async def search_project(
    project_id: int,
    limit: Optional[int] = Query(None),
    repository: StaffingRepository = Depends(get_repository),
):
    """
    Rank employees against the project's own keyword document.

    Returns employees sorted by score descending, at most `limit` of them.
    """
    settings = get_settings()
    results = await _run_search(search_project_wide(
        repository,
        project_id,
        limit if limit is not None else settings.search_default_limit,
        max_limit=settings.search_max_limit,
    ))
    return ProjectSearchResponse(
        project_id=project_id,
        results=[EmployeeScore(score=score, employee_id=eid) for score, eid in results],
    )


@router.get("/projects/{project_id}/positions", response_model=PositionSearchResponse)
async def search_project_positions(
    project_id: int,
    limit: Optional[int] = Query(None),
    repository: StaffingRepository = Depends(get_repository),
):
    """
    Rank employees separately for every position of the project.

    Positions with compulsory skills only consider employees holding all of
    them. Positions are reported in project position order.
    """
    settings = get_settings()
    rankings = await _run_search(search_by_position(
        repository,
        project_id,
        limit if limit is not None else settings.search_default_limit,
        max_limit=settings.search_max_limit,
        max_workers=settings.search_position_workers,
    ))
    return PositionSearchResponse(
        project_id=project_id,
        positions=[
            PositionSearchResult(
                position_id=ranking.position_id,
                results=[EmployeeScore(score=score, employee_id=eid) for score, eid in ranking.results],
            )
            for ranking in rankings
        ],
    )
