"""
Staffing Repository - Async persistence for projects, positions and employees

Wraps an AsyncSession and is the only place that writes keyword columns.
Project, position and experience saves synthesize keywords before commit.
Employee keywords are rebuilt by `recompute_employee_keywords`, which the
API layer triggers after employee and experience mutations.

Relationships are always loaded eagerly (selectinload): async sessions
cannot lazy-load, and cascade deletes need the children in the session.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from sqlalchemy import select, and_, literal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from staffing.models import (
    Project,
    ProjectPosition,
    PositionSkill,
    Employee,
    EmployeeSkill,
    EmployeeExperience,
)
from staffing.schemas import ProjectIn, PositionIn, EmployeeIn, ExperienceIn
from staffing.services.keywords import (
    normalize,
    project_keywords,
    position_keywords,
    experience_keywords,
    rebuild_employee_keywords,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PositionSkillRecord:
    name: str
    compulsory: bool


@dataclass(frozen=True)
class PositionRecord:
    id: int
    name: str
    keywords: str
    skills: List[PositionSkillRecord] = field(default_factory=list)


@dataclass(frozen=True)
class EmployeeRecord:
    id: int
    name: str
    keywords: str


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _employee_record(employee: Employee) -> EmployeeRecord:
    return EmployeeRecord(id=employee.id, name=employee.name, keywords=employee.keywords or "")


class StaffingRepository:
    """
    Persistence gateway used by the API layer and the search service.

    Attributes:
        db: Async SQLAlchemy session, owned by the caller
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ==================== Search reads ====================

    async def get_project_keywords(self, project_id: int) -> Optional[str]:
        """Return the project's keyword document, or None if it does not exist."""
        result = await self.db.execute(
            select(Project.keywords).where(Project.id == project_id)
        )
        row = result.first()
        return None if row is None else (row[0] or "")

    async def get_positions_with_skills(self, project_id: int) -> List[PositionRecord]:
        result = await self.db.execute(
            select(ProjectPosition)
            .options(selectinload(ProjectPosition.skills))
            .where(ProjectPosition.project_id == project_id)
            .order_by(ProjectPosition.id)
        )
        return [
            PositionRecord(
                id=position.id,
                name=position.name,
                keywords=position.keywords or "",
                skills=[
                    PositionSkillRecord(name=skill.name, compulsory=bool(skill.compulsory))
                    for skill in position.skills
                ],
            )
            for position in result.scalars().all()
        ]

    async def get_all_employees(self) -> List[EmployeeRecord]:
        result = await self.db.execute(select(Employee).order_by(Employee.id))
        return [_employee_record(e) for e in result.scalars().all()]

    async def get_employees_with_all_keyword_tokens(
        self, tokens: Sequence[str]
    ) -> List[EmployeeRecord]:
        """
        Employees whose keyword document contains every token as a whole word.

        Tokens are normalized like documents and matched as " token " against
        the space-padded keyword column. A token that normalizes to nothing
        matches no employee.

        Args:
            tokens: Skill names or words

        Returns:
            Matching employees ordered by id
        """
        needles = [normalize(token) for token in tokens]
        if any(not needle for needle in needles):
            return []

        padded = literal(" ") + Employee.keywords + literal(" ")
        query = select(Employee).order_by(Employee.id)
        if needles:
            query = query.where(and_(*[
                padded.like(f"% {_escape_like(needle)} %", escape="\\")
                for needle in needles
            ]))

        result = await self.db.execute(query)
        return [_employee_record(e) for e in result.scalars().all()]

    async def recompute_employee_keywords(self, employee_id: int) -> Optional[str]:
        """
        Rebuild and store an employee's aggregate keyword document.

        Re-reads the employee's preferences, skills and all experience
        keyword documents, then writes the aggregate back.

        Returns:
            The new keyword document, or None if the employee does not exist
        """
        employee = await self.get_employee(employee_id)
        if employee is None:
            logger.warning(f"Employee not found for keyword recomputation: {employee_id}")
            return None

        keywords = rebuild_employee_keywords(employee)
        await self.db.commit()
        return keywords

    # ==================== Projects ====================

    async def get_project(self, project_id: int) -> Optional[Project]:
        result = await self.db.execute(
            select(Project)
            .options(selectinload(Project.positions).selectinload(ProjectPosition.skills))
            .where(Project.id == project_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_projects(self) -> List[Project]:
        result = await self.db.execute(
            select(Project)
            .options(selectinload(Project.positions).selectinload(ProjectPosition.skills))
            .order_by(Project.id)
        )
        return list(result.scalars().all())

    async def save_project(self, data: ProjectIn, project_id: Optional[int] = None) -> Optional[Project]:
        """Create a project, or update it when `project_id` is given."""
        if project_id is None:
            project = Project()
            self.db.add(project)
        else:
            project = await self.get_project(project_id)
            if project is None:
                return None

        project.name = data.name
        project.description = data.description
        project.keywords = project_keywords(data.name, data.description)

        await self.db.commit()
        return await self.get_project(project.id)

    async def delete_project(self, project_id: int) -> bool:
        project = await self.get_project(project_id)
        if project is None:
            return False
        await self.db.delete(project)
        await self.db.commit()
        return True

    # ==================== Positions ====================

    async def get_position(self, position_id: int) -> Optional[ProjectPosition]:
        result = await self.db.execute(
            select(ProjectPosition)
            .options(selectinload(ProjectPosition.skills))
            .where(ProjectPosition.id == position_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def save_position(
        self,
        data: PositionIn,
        project_id: Optional[int] = None,
        position_id: Optional[int] = None,
    ) -> Optional[ProjectPosition]:
        """
        Create a position under `project_id`, or update `position_id`.

        The skill list is replaced wholesale.

        Returns:
            The saved position, or None if the project/position does not exist
        """
        if position_id is None:
            exists = await self.db.execute(select(Project.id).where(Project.id == project_id))
            if exists.first() is None:
                return None
            position = ProjectPosition(project_id=project_id, skills=[])
            self.db.add(position)
        else:
            position = await self.get_position(position_id)
            if position is None:
                return None

        position.name = data.name
        position.description = data.description
        position.skills = [
            PositionSkill(name=skill.name, level=skill.level, compulsory=skill.compulsory)
            for skill in data.skills
        ]
        position.keywords = position_keywords(data.name, data.description, data.skills)

        await self.db.commit()
        return await self.get_position(position.id)

    async def delete_position(self, position_id: int) -> bool:
        position = await self.get_position(position_id)
        if position is None:
            return False
        await self.db.delete(position)
        await self.db.commit()
        return True

    # ==================== Employees ====================

    async def get_employee(self, employee_id: int) -> Optional[Employee]:
        result = await self.db.execute(
            select(Employee)
            .options(selectinload(Employee.skills), selectinload(Employee.experience))
            .where(Employee.id == employee_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_employees(self, employee_ids: Optional[Sequence[int]] = None) -> List[Employee]:
        query = (
            select(Employee)
            .options(selectinload(Employee.skills), selectinload(Employee.experience))
            .order_by(Employee.id)
        )
        if employee_ids is not None:
            query = query.where(Employee.id.in_(list(employee_ids)))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def save_employee(self, data: EmployeeIn, employee_id: Optional[int] = None) -> Optional[Employee]:
        """
        Create or update an employee and replace its skills.

        Keywords are left as they are; the caller triggers recomputation.
        """
        if employee_id is None:
            employee = Employee(skills=[], experience=[])
            self.db.add(employee)
        else:
            employee = await self.get_employee(employee_id)
            if employee is None:
                return None

        employee.name = data.name
        employee.email = data.email
        employee.preferences = data.preferences
        employee.skills = [EmployeeSkill(name=skill.name, level=skill.level) for skill in data.skills]

        await self.db.commit()
        return await self.get_employee(employee.id)

    async def delete_employee(self, employee_id: int) -> bool:
        employee = await self.get_employee(employee_id)
        if employee is None:
            return False
        await self.db.delete(employee)
        await self.db.commit()
        return True

    # ==================== Experience ====================

    async def get_experience(self, experience_id: int) -> Optional[EmployeeExperience]:
        result = await self.db.execute(
            select(EmployeeExperience)
            .where(EmployeeExperience.id == experience_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def save_experience(
        self,
        data: ExperienceIn,
        employee_id: Optional[int] = None,
        experience_id: Optional[int] = None,
    ) -> Optional[EmployeeExperience]:
        """
        Create experience for `employee_id`, or update `experience_id`.

        Keywords of the experience record are synthesized here; the owning
        employee's aggregate is the caller's to recompute.
        """
        if experience_id is None:
            exists = await self.db.execute(select(Employee.id).where(Employee.id == employee_id))
            if exists.first() is None:
                return None
            experience = EmployeeExperience(employee_id=employee_id)
            self.db.add(experience)
        else:
            experience = await self.get_experience(experience_id)
            if experience is None:
                return None

        experience.name = data.name
        experience.customer = data.customer
        experience.position = data.position
        experience.description = data.description
        experience.skills = list(data.skills)
        experience.start_date = data.start_date
        experience.end_date = data.end_date
        experience.keywords = experience_keywords(
            data.name, data.customer, data.position, data.description, data.skills
        )

        await self.db.commit()
        return await self.get_experience(experience.id)

    async def delete_experience(self, experience_id: int) -> Optional[EmployeeExperience]:
        """Delete an experience record and return it (for its employee_id)."""
        experience = await self.get_experience(experience_id)
        if experience is None:
            return None
        await self.db.delete(experience)
        await self.db.commit()
        return experience
