"""
Employee keyword recomputation trigger.

Called after employee create/update and after every experience
create/update/delete. A failure here is logged and counted but never fails
the mutation that triggered it: a stale employee document only degrades
search relevance until the next successful rebuild.
"""

import logging
from typing import Optional

from staffing.config import get_settings
from staffing.middleware.metrics import record_recompute_failure
from staffing.services.repository import StaffingRepository
from staffing.tasks.keywords import recompute_employee_keywords_task

logger = logging.getLogger(__name__)


async def trigger_employee_recompute(
    repository: StaffingRepository,
    employee_id: int,
    mode: Optional[str] = None,
) -> None:
    """
    Rebuild an employee's keyword document in the configured mode.

    Args:
        repository: Repository bound to the request's session
        employee_id: Employee to rebuild
        mode: "sync" awaits the rebuild in-request; "background" enqueues a
              Celery task and returns immediately. Defaults to settings.
    """
    mode = mode or get_settings().keyword_recompute_mode

    if mode == "background":
        try:
            recompute_employee_keywords_task.delay(employee_id)
        except Exception:
            logger.exception(f"Could not enqueue keyword recomputation for employee {employee_id}")
            record_recompute_failure(mode)
        return

    try:
        await repository.recompute_employee_keywords(employee_id)
    except Exception:
        logger.exception(f"Keyword recomputation failed for employee {employee_id}")
        record_recompute_failure(mode)
        await repository.db.rollback()
