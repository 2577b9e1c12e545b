from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from staffing.database import get_db
from staffing.services.repository import StaffingRepository


async def get_repository(db: AsyncSession = Depends(get_db)) -> StaffingRepository:
    return StaffingRepository(db)
