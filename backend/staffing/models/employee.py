"""
Employee Models - SQLAlchemy ORM models for employees, skills and experience

The employee keyword document aggregates the employee's own fields with the
keyword documents of all experience records. It is rebuilt after every
employee save and every experience create/update/delete.
"""

from sqlalchemy import Column, String, Integer, Float, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from staffing.database import Base


class Employee(Base):
    """
    Staffable employee.

    Attributes:
        name: Display name (not part of the keyword document)
        email: Contact address
        preferences: Free-text work preferences
        keywords: Derived aggregate keyword document
    """

    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(500), nullable=False)
    email = Column(String(500), nullable=False, default="")
    preferences = Column(Text, nullable=False, default="")
    keywords = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    skills = relationship(
        "EmployeeSkill",
        back_populates="employee",
        cascade="all, delete-orphan",
        order_by="EmployeeSkill.id",
    )
    experience = relationship(
        "EmployeeExperience",
        back_populates="employee",
        cascade="all, delete-orphan",
        order_by="EmployeeExperience.id",
    )


class EmployeeSkill(Base):
    __tablename__ = "employee_skills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    level = Column(Float, nullable=False, default=1.0)

    employee = relationship("Employee", back_populates="skills")


class EmployeeExperience(Base):
    """
    Past engagement of an employee.

    Attributes:
        name: Engagement name
        customer: Customer name, weighted x4
        position: Title held, weighted x4
        skills: JSON list of skill names, weighted x4 as a group
        keywords: Derived keyword document of this record alone
    """

    __tablename__ = "employee_experience"

    id = Column(Integer, primary_key=True, autoincrement=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    name = Column(String(500), nullable=False)
    customer = Column(String(500), nullable=False, default="")
    position = Column(String(500), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    skills = Column(JSON, nullable=False, default=list)
    keywords = Column(Text, nullable=False, default="")
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)

    employee = relationship("Employee", back_populates="experience")
