from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

# Each level unit repeats the skill name four times in keyword documents
MAX_SKILL_LEVEL = 100


class SkillIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    level: float = Field(1.0, ge=0, le=MAX_SKILL_LEVEL, allow_inf_nan=False)


class SkillResponse(SkillIn):
    id: int

    class Config:
        from_attributes = True


class ExperienceIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=500)
    customer: str = ""
    position: str = ""
    description: str = ""
    skills: list[str] = []
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class ExperienceResponse(ExperienceIn):
    id: int
    employee_id: int
    keywords: str

    class Config:
        from_attributes = True


class EmployeeIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=500)
    email: str = ""
    preferences: str = ""
    skills: list[SkillIn] = []


class EmployeeResponse(BaseModel):
    id: int
    name: str
    email: str
    preferences: str
    keywords: str
    skills: list[SkillResponse]
    experience: list[ExperienceResponse]

    class Config:
        from_attributes = True


class EmployeeListResponse(BaseModel):
    employees: list[EmployeeResponse]
    total: int
