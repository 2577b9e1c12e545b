from fastapi import APIRouter, Depends, HTTPException, Query, Response
from typing import List, Optional
from staffing.api.deps import get_repository
from staffing.schemas import (
    EmployeeIn,
    EmployeeResponse,
    EmployeeListResponse,
    ExperienceIn,
    ExperienceResponse,
)
from staffing.services.recompute import trigger_employee_recompute
from staffing.services.repository import StaffingRepository

router = APIRouter()


async def _recompute_and_reload_employee(
    repository: StaffingRepository, employee_id: int
) -> EmployeeResponse:
    await trigger_employee_recompute(repository, employee_id)
    # Re-read by id; the recompute may have rolled back the session
    return EmployeeResponse.model_validate(await repository.get_employee(employee_id))


@router.get("/employees", response_model=EmployeeListResponse)
async def list_employees(
    skill: Optional[List[str]] = Query(None),
    repository: StaffingRepository = Depends(get_repository),
):
    employee_ids = None
    if skill:
        # Same whole-token containment rule as compulsory-skill filtering
        matches = await repository.get_employees_with_all_keyword_tokens(skill)
        employee_ids = [e.id for e in matches]

    employees = await repository.list_employees(employee_ids)
    return EmployeeListResponse(
        employees=[EmployeeResponse.model_validate(e) for e in employees],
        total=len(employees),
    )


@router.post("/employees", response_model=EmployeeResponse, status_code=201)
async def create_employee(
    data: EmployeeIn,
    repository: StaffingRepository = Depends(get_repository),
):
    employee = await repository.save_employee(data)
    return await _recompute_and_reload_employee(repository, employee.id)


@router.get("/employees/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: int,
    repository: StaffingRepository = Depends(get_repository),
):
    employee = await repository.get_employee(employee_id)
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    return EmployeeResponse.model_validate(employee)


@router.put("/employees/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: int,
    data: EmployeeIn,
    repository: StaffingRepository = Depends(get_repository),
):
    employee = await repository.save_employee(data, employee_id=employee_id)
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    return await _recompute_and_reload_employee(repository, employee.id)


@router.delete("/employees/{employee_id}", status_code=204)
async def delete_employee(
    employee_id: int,
    repository: StaffingRepository = Depends(get_repository),
):
    if not await repository.delete_employee(employee_id):
        raise HTTPException(status_code=404, detail="Employee not found")
    return Response(status_code=204)


@router.post("/employees/{employee_id}/experience", response_model=ExperienceResponse, status_code=201)
async def create_experience(
    employee_id: int,
    data: ExperienceIn,
    repository: StaffingRepository = Depends(get_repository),
):
    experience = await repository.save_experience(data, employee_id=employee_id)
    if not experience:
        raise HTTPException(status_code=404, detail="Employee not found")
    # Serialize before the recompute: a failed recompute rolls back and
    # expires every instance in the session
    response = ExperienceResponse.model_validate(experience)
    await trigger_employee_recompute(repository, response.employee_id)
    return response


@router.put("/experience/{experience_id}", response_model=ExperienceResponse)
async def update_experience(
    experience_id: int,
    data: ExperienceIn,
    repository: StaffingRepository = Depends(get_repository),
):
    experience = await repository.save_experience(data, experience_id=experience_id)
    if not experience:
        raise HTTPException(status_code=404, detail="Experience not found")
    # Serialize before the recompute: a failed recompute rolls back and
    # expires every instance in the session
    response = ExperienceResponse.model_validate(experience)
    await trigger_employee_recompute(repository, response.employee_id)
    return response


@router.delete("/experience/{experience_id}", status_code=204)
async def delete_experience(
    experience_id: int,
    repository: StaffingRepository = Depends(get_repository),
):
    experience = await repository.delete_experience(experience_id)
    if not experience:
        raise HTTPException(status_code=404, detail="Experience not found")
    await trigger_employee_recompute(repository, experience.employee_id)
    return Response(status_code=204)
