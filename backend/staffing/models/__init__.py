from staffing.models.project import Project, ProjectPosition, PositionSkill
from staffing.models.employee import Employee, EmployeeSkill, EmployeeExperience

__all__ = [
    "Project",
    "ProjectPosition",
    "PositionSkill",
    "Employee",
    "EmployeeSkill",
    "EmployeeExperience",
]
