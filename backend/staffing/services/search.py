"""
Employee Search Service - Project-Wide and Position-Partitioned Ranking

Orchestrates the matching engine for the two search modes:

    search_project_wide:  project keywords vs. every employee
    search_by_position:   each position's keywords vs. employees that hold
                          all of the position's compulsory skills

Pipeline (per request):
    validate → read query keywords + positions → read employee pool once
            → [per position] compulsory filter → fresh corpus → rank
            → results in project position order

The employee pool is fetched in a single upfront read; compulsory filtering
happens in memory with the same whole-token rule the repository's
containment query uses.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, Tuple

from staffing.middleware.metrics import record_search_latency
from staffing.services.keywords import contains_token
from staffing.services.ranking import CandidateDocument, IndexBuildError, rank
from staffing.services.repository import EmployeeRecord, PositionRecord

logger = logging.getLogger(__name__)

__all__ = [
    "SearchError",
    "InputValidationError",
    "ProjectNotFoundError",
    "IndexBuildError",
    "PositionRanking",
    "filter_by_compulsory_skills",
    "search_project_wide",
    "search_by_position",
]


class SearchError(Exception):
    """Base class for search failures surfaced to the API layer."""


class InputValidationError(SearchError):
    """Malformed project id or limit. Raised before any corpus work."""


class ProjectNotFoundError(SearchError):
    pass


class SearchRepository(Protocol):
    async def get_project_keywords(self, project_id: int) -> Optional[str]: ...

    async def get_positions_with_skills(self, project_id: int) -> List[PositionRecord]: ...

    async def get_all_employees(self) -> List[EmployeeRecord]: ...


@dataclass
class PositionRanking:
    position_id: int
    results: List[Tuple[float, int]] = field(default_factory=list)


def _validate(project_id, limit, max_limit: int) -> None:
    if isinstance(project_id, bool) or not isinstance(project_id, int) or project_id < 1:
        raise InputValidationError(f"Invalid project id: {project_id!r}")
    if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= max_limit:
        raise InputValidationError(f"Limit must be an integer between 1 and {max_limit}, got {limit!r}")


def _documents(employees: Sequence[EmployeeRecord]) -> List[CandidateDocument]:
    return [CandidateDocument(employee_id=e.id, keywords=e.keywords) for e in employees]


def filter_by_compulsory_skills(
    employees: Sequence[EmployeeRecord],
    skill_names: Sequence[str],
) -> List[EmployeeRecord]:
    """
    Keep employees whose keyword document holds every skill as a whole token.

    Args:
        employees: Candidate pool, order preserved
        skill_names: Compulsory skill names

    Returns:
        Filtered pool; the full pool when `skill_names` is empty
    """
    return [
        employee for employee in employees
        if all(contains_token(employee.keywords, name) for name in skill_names)
    ]


def _rank_position(
    position: PositionRecord,
    employees: Sequence[EmployeeRecord],
    limit: int,
) -> PositionRanking:
    compulsory = [skill.name for skill in position.skills if skill.compulsory]

    pool = employees
    if compulsory:
        pool = filter_by_compulsory_skills(employees, compulsory)
        if not pool:
            # Nothing to vectorize; an empty corpus is not an error here
            logger.info(
                f"Position {position.id}: no employees hold compulsory skills {compulsory}"
            )
            return PositionRanking(position_id=position.id, results=[])

    results = rank(position.keywords, _documents(pool), limit)
    logger.debug(f"Position {position.id}: ranked {len(pool)} candidates")
    return PositionRanking(position_id=position.id, results=results)


async def search_project_wide(
    repository: SearchRepository,
    project_id: int,
    limit: int,
    max_limit: int = 500,
) -> List[Tuple[float, int]]:
    """
    Rank all employees against a project's keyword document.

    Args:
        repository: Persistence gateway
        project_id: Project to search for
        limit: Maximum number of results
        max_limit: Upper bound accepted for `limit`

    Returns:
        List of (score, employee_id) sorted by score descending

    Raises:
        InputValidationError: Bad project id or limit
        ProjectNotFoundError: No such project
        IndexBuildError: Corpus could not be built
    """
    _validate(project_id, limit, max_limit)
    start_time = time.perf_counter()

    query = await repository.get_project_keywords(project_id)
    if query is None:
        raise ProjectNotFoundError(f"Project not found: {project_id}")

    employees = await repository.get_all_employees()
    if not employees:
        return []

    results = await asyncio.to_thread(rank, query, _documents(employees), limit)

    duration = time.perf_counter() - start_time
    record_search_latency("project", duration)
    logger.info(
        f"Project search {project_id}: {len(employees)} candidates, "
        f"{len(results)} results in {duration:.3f}s"
    )
    return results


async def search_by_position(
    repository: SearchRepository,
    project_id: int,
    limit: int,
    max_limit: int = 500,
    max_workers: int = 1,
) -> List[PositionRanking]:
    """
    Rank employees separately for every position of a project.

    Each position gets its own corpus fitted on its own candidate pool.
    With `max_workers > 1`, positions are ranked concurrently in worker
    threads; the result list still follows project position order.

    Args:
        repository: Persistence gateway
        project_id: Project whose positions are searched
        limit: Maximum number of results per position
        max_limit: Upper bound accepted for `limit`
        max_workers: Number of positions ranked at the same time

    Returns:
        One PositionRanking per position, in project position order

    Raises:
        InputValidationError: Bad project id or limit
        ProjectNotFoundError: No such project
        IndexBuildError: A position's corpus could not be built; no partial
            results are returned
    """
    _validate(project_id, limit, max_limit)
    start_time = time.perf_counter()

    if await repository.get_project_keywords(project_id) is None:
        raise ProjectNotFoundError(f"Project not found: {project_id}")

    positions = await repository.get_positions_with_skills(project_id)
    employees = await repository.get_all_employees()

    semaphore = asyncio.Semaphore(max(1, max_workers))

    async def run(position: PositionRecord) -> PositionRanking:
        async with semaphore:
            return await asyncio.to_thread(_rank_position, position, employees, limit)

    if max_workers > 1:
        rankings = list(await asyncio.gather(*(run(p) for p in positions)))
    else:
        rankings = [await run(p) for p in positions]

    duration = time.perf_counter() - start_time
    record_search_latency("position", duration)
    logger.info(
        f"Position search {project_id}: {len(positions)} positions, "
        f"{len(employees)} employees in {duration:.3f}s"
    )
    return rankings
