"""
Celery Task Modules

Background tasks:
- keywords.py: Employee keyword document recomputation
"""

from staffing.tasks.keywords import recompute_employee_keywords_task

__all__ = [
    "recompute_employee_keywords_task",
]
