from staffing.schemas.project import (
    PositionSkillIn,
    PositionIn,
    PositionResponse,
    ProjectIn,
    ProjectResponse,
    ProjectListResponse,
)
from staffing.schemas.employee import (
    SkillIn,
    ExperienceIn,
    ExperienceResponse,
    EmployeeIn,
    EmployeeResponse,
    EmployeeListResponse,
)
from staffing.schemas.search import (
    EmployeeScore,
    ProjectSearchResponse,
    PositionSearchResult,
    PositionSearchResponse,
)

__all__ = [
    "PositionSkillIn",
    "PositionIn",
    "PositionResponse",
    "ProjectIn",
    "ProjectResponse",
    "ProjectListResponse",
    "SkillIn",
    "ExperienceIn",
    "ExperienceResponse",
    "EmployeeIn",
    "EmployeeResponse",
    "EmployeeListResponse",
    "EmployeeScore",
    "ProjectSearchResponse",
    "PositionSearchResult",
    "PositionSearchResponse",
]
