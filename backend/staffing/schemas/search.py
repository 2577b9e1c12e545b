from pydantic import BaseModel


class EmployeeScore(BaseModel):
    score: float
    employee_id: int


class ProjectSearchResponse(BaseModel):
    project_id: int
    results: list[EmployeeScore]


class PositionSearchResult(BaseModel):
    position_id: int
    results: list[EmployeeScore]


class PositionSearchResponse(BaseModel):
    project_id: int
    positions: list[PositionSearchResult]
