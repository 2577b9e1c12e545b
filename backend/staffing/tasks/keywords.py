"""
Background Tasks for Employee Keyword Recomputation

Used when KEYWORD_RECOMPUTE_MODE=background: employee and experience
mutations enqueue a rebuild of the employee's aggregate keyword document
instead of awaiting it. The request does not wait for completion, so a
search issued right after an edit may still see the previous document.

All tasks support:
- Automatic retries on failure
- Prometheus metrics
"""

import logging
import time
from typing import Optional

from prometheus_client import Histogram, Counter

from staffing.celery import celery_app
from staffing.database import sync_session_scope
from staffing.middleware.metrics import record_recompute_failure
from staffing.models import Employee
from staffing.services.keywords import rebuild_employee_keywords

logger = logging.getLogger(__name__)

TASK_DURATION = Histogram(
    "celery_task_duration_seconds",
    "Time spent executing Celery tasks",
    ["task_name"]
)

TASK_FAILURES = Counter(
    "celery_task_failures_total",
    "Number of Celery task failures",
    ["task_name"]
)


def recompute_employee_keywords_sync(employee_id: int) -> Optional[str]:
    """
    Rebuild an employee's keyword document through a synchronous session.

    Returns:
        The new keyword document, or None if the employee does not exist
    """
    with sync_session_scope() as session:
        employee = session.get(Employee, employee_id)
        if employee is None:
            logger.warning(f"Employee not found for keyword recomputation: {employee_id}")
            return None

        return rebuild_employee_keywords(employee)


@celery_app.task(bind=True, max_retries=3, default_retry_delay=30)
def recompute_employee_keywords_task(self, employee_id: int) -> Optional[str]:
    """
    Celery entry point for employee keyword recomputation.

    Args:
        employee_id: Employee whose aggregate document is rebuilt

    Returns:
        The new keyword document, or None if the employee does not exist
    """
    start_time = time.time()

    try:
        keywords = recompute_employee_keywords_sync(employee_id)
        logger.info(f"Recomputed keywords for employee {employee_id}")
        return keywords

    except Exception as exc:
        TASK_FAILURES.labels(task_name="recompute_employee_keywords").inc()
        record_recompute_failure("background")
        logger.error(f"Keyword recomputation failed for employee {employee_id}: {exc}")
        raise self.retry(exc=exc, countdown=30)

    finally:
        duration = time.time() - start_time
        TASK_DURATION.labels(task_name="recompute_employee_keywords").observe(duration)
