from fastapi import APIRouter
from staffing.api import employees, projects, search

api_router = APIRouter(prefix="/api")
api_router.include_router(projects.router, tags=["projects"])
api_router.include_router(employees.router, tags=["employees"])
api_router.include_router(search.router)
