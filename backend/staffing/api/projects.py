from fastapi import APIRouter, Depends, HTTPException, Response
from staffing.api.deps import get_repository
from staffing.schemas import (
    PositionIn,
    PositionResponse,
    ProjectIn,
    ProjectResponse,
    ProjectListResponse,
)
from staffing.services.repository import StaffingRepository

router = APIRouter()


@router.get("/projects", response_model=ProjectListResponse)
async def list_projects(repository: StaffingRepository = Depends(get_repository)):
    projects = await repository.list_projects()
    return ProjectListResponse(
        projects=[ProjectResponse.model_validate(p) for p in projects],
        total=len(projects),
    )


@router.post("/projects", response_model=ProjectResponse, status_code=201)
async def create_project(
    data: ProjectIn,
    repository: StaffingRepository = Depends(get_repository),
):
    project = await repository.save_project(data)
    return ProjectResponse.model_validate(project)


@router.get("/projects/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: int,
    repository: StaffingRepository = Depends(get_repository),
):
    project = await repository.get_project(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return ProjectResponse.model_validate(project)


@router.put("/projects/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    data: ProjectIn,
    repository: StaffingRepository = Depends(get_repository),
):
    project = await repository.save_project(data, project_id=project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return ProjectResponse.model_validate(project)


@router.delete("/projects/{project_id}", status_code=204)
async def delete_project(
    project_id: int,
    repository: StaffingRepository = Depends(get_repository),
):
    if not await repository.delete_project(project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return Response(status_code=204)


@router.post("/projects/{project_id}/positions", response_model=PositionResponse, status_code=201)
async def create_position(
    project_id: int,
    data: PositionIn,
    repository: StaffingRepository = Depends(get_repository),
):
    position = await repository.save_position(data, project_id=project_id)
    if not position:
        raise HTTPException(status_code=404, detail="Project not found")
    return PositionResponse.model_validate(position)


@router.put("/positions/{position_id}", response_model=PositionResponse)
async def update_position(
    position_id: int,
    data: PositionIn,
    repository: StaffingRepository = Depends(get_repository),
):
    position = await repository.save_position(data, position_id=position_id)
    if not position:
        raise HTTPException(status_code=404, detail="Position not found")
    return PositionResponse.model_validate(position)


@router.delete("/positions/{position_id}", status_code=204)
async def delete_position(
    position_id: int,
    repository: StaffingRepository = Depends(get_repository),
):
    if not await repository.delete_position(position_id):
        raise HTTPException(status_code=404, detail="Position not found")
    return Response(status_code=204)
