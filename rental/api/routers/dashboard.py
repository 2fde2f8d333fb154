from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rental.api.deps import get_db, require_roles
from rental.schemas.report import DashboardStats
from rental.services.report import dashboard_stats

router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
    dependencies=[Depends(require_roles("admin"))],
)


@router.get("/stats", response_model=DashboardStats)
def get_stats(db: Session = Depends(get_db)):
    return dashboard_stats(db)
