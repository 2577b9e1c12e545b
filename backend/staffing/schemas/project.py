from pydantic import BaseModel, Field
from staffing.schemas.employee import MAX_SKILL_LEVEL


class PositionSkillIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    level: float = Field(1.0, ge=0, le=MAX_SKILL_LEVEL, allow_inf_nan=False)
    compulsory: bool = False


class PositionSkillResponse(PositionSkillIn):
    id: int

    class Config:
        from_attributes = True


class PositionIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=500)
    description: str = ""
    skills: list[PositionSkillIn] = []


class PositionResponse(BaseModel):
    id: int
    project_id: int
    name: str
    description: str
    keywords: str
    skills: list[PositionSkillResponse]

    class Config:
        from_attributes = True


class ProjectIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=500)
    description: str = ""


class ProjectResponse(BaseModel):
    id: int
    name: str
    description: str
    keywords: str
    positions: list[PositionResponse] = []

    class Config:
        from_attributes = True


class ProjectListResponse(BaseModel):
    projects: list[ProjectResponse]
    total: int
