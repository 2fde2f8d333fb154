from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rental.api.deps import get_db, require_roles
from rental.schemas.report import MonthlyIncome, PropertyAnalytics, StatusCount
from rental.services.report import (
    INCOME_MONTHS,
    income_by_month,
    property_analytics,
    status_counts,
)

router = APIRouter(
    prefix="/charts",
    tags=["charts"],
    dependencies=[Depends(require_roles("admin"))],
)


@router.get("/income", response_model=list[MonthlyIncome])
def get_income(
    period: int = Query(INCOME_MONTHS, ge=1, le=120, description="Number of months"),
    db: Session = Depends(get_db),
):
    """Income from signed contracts for the last `period` months with data, newest first."""
    return income_by_month(db, months=period)


@router.get("/status", response_model=list[StatusCount])
def get_status(db: Session = Depends(get_db)):
    return status_counts(db)


@router.get("/properties", response_model=PropertyAnalytics)
def get_properties(db: Session = Depends(get_db)):
    """Signed contracts grouped by property type, size band and address."""
    return property_analytics(db)
