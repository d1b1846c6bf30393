from fastapi import APIRouter, status
from services.stats_service import StatsService
from utils.deps import db_dependency, operator_dependency


router = APIRouter(tags=["stats"])


@router.get("/stats", status_code=status.HTTP_200_OK)
async def get_stats(user: operator_dependency, db: db_dependency):
    return StatsService.summary(db)
