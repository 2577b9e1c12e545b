"""
Celery Application Configuration

Runs employee keyword recomputation out of band when
KEYWORD_RECOMPUTE_MODE=background:
- Redis as message broker and result backend
- Task autodiscovery from staffing.tasks
- Late acknowledgement so a lost worker does not lose a recomputation

Usage:
    # Start worker:
    celery -A staffing.celery worker --loglevel=info -Q keywords

    # Enqueue a task:
    from staffing.tasks.keywords import recompute_employee_keywords_task
    recompute_employee_keywords_task.delay(42)
"""

from celery import Celery
from staffing.config import get_settings

settings = get_settings()

celery_app = Celery(
    "staffing",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,

    worker_prefetch_multiplier=1,
    result_expires=3600,
    task_track_started=True,

    task_acks_late=True,
    task_reject_on_worker_lost=True,

    task_routes={
        "staffing.tasks.keywords.recompute_employee_keywords_task": {"queue": "keywords"},
    },
    task_default_queue="default",
)

celery_app.autodiscover_tasks(["staffing.tasks"])
