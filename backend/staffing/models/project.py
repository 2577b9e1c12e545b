"""
Project Models - SQLAlchemy ORM models for projects and their open positions

A project owns an ordered list of positions; each position owns the skills
it requires. Positions are ordered by id, which is the order they were
created in and the order position-partitioned search reports them.

Keyword columns are derived by the keyword synthesizer on every save and
are never written from client input.
"""

from sqlalchemy import Column, String, Integer, Float, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from staffing.database import Base


class Project(Base):
    """
    Customer project staffed from the employee pool.

    Attributes:
        id: Integer primary key
        name: Project name
        description: Free-text description
        keywords: Derived keyword document (name + description)
        positions: Positions of this project, in creation order
    """

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(500), nullable=False)
    description = Column(Text, nullable=False, default="")
    keywords = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    positions = relationship(
        "ProjectPosition",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ProjectPosition.id",
    )


class ProjectPosition(Base):
    """
    Open position within a project.

    Attributes:
        name: Position title, weighted x4 in the keyword document
        description: Free-text description
        keywords: Derived keyword document (name, description, skills)
        skills: Required skills, some of them compulsory
    """

    __tablename__ = "project_positions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    name = Column(String(500), nullable=False)
    description = Column(Text, nullable=False, default="")
    keywords = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    project = relationship("Project", back_populates="positions")
    skills = relationship(
        "PositionSkill",
        back_populates="position",
        cascade="all, delete-orphan",
        order_by="PositionSkill.id",
    )


class PositionSkill(Base):
    """
    Skill requirement of a position.

    Compulsory skills gate candidate eligibility: an employee whose keyword
    document lacks the skill token is never ranked for the position.
    """

    __tablename__ = "position_skills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    position_id = Column(Integer, ForeignKey("project_positions.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    level = Column(Float, nullable=False, default=1.0)
    compulsory = Column(Boolean, nullable=False, default=False)

    position = relationship("ProjectPosition", back_populates="skills")
