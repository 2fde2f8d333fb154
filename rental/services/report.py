import re
from datetime import datetime, timezone

from sqlalchemy.orm import Session

import rental.repositories.contract as contract_repo
from rental.domain.contract_status import ContractStatus, status_label
from rental.schemas.report import (
    ContractTotals,
    DashboardStats,
    IncomeTotals,
    LocationStat,
    MonthlyIncome,
    PropertyAnalytics,
    PropertySizeStat,
    PropertyTypeStat,
    StatusCount,
)

# Month names indexed by the two-digit month of the `YYYY-MM` key.
MONTH_NAMES: dict[str, str] = {
    "01": "فروردین",
    "02": "اردیبهشت",
    "03": "خرداد",
    "04": "تیر",
    "05": "مرداد",
    "06": "شهریور",
    "07": "مهر",
    "08": "آبان",
    "09": "آذر",
    "10": "دی",
    "11": "بهمن",
    "12": "اسفند",
}

INCOME_MONTHS = 12
TOP_LOCATIONS = 10

# (exclusive upper bound in square metres, label); larger sizes fall in LARGEST_SIZE_BAND.
SIZE_BANDS: tuple[tuple[int, str], ...] = (
    (50, "کمتر از 50 متر"),
    (100, "50-100 متر"),
    (150, "100-150 متر"),
)
LARGEST_SIZE_BAND = "بیشتر از 150 متر"

_SIZE_RE = re.compile(r"[0-9]+")


def format_month(month_key: str) -> str:
    """'2024-03' -> '<name of month 03> 2024'."""
    year, month = month_key.split("-")
    return f"{MONTH_NAMES.get(month, month)} {year}"


def size_band(property_size: str) -> str | None:
    """Band label for a free-text size such as '85' or '85 متر'; None when no number is given."""
    match = _SIZE_RE.search(property_size)
    if not match:
        return None
    size = int(match.group())
    for upper, label in SIZE_BANDS:
        if size < upper:
            return label
    return LARGEST_SIZE_BAND


def income_by_month(db: Session, months: int = INCOME_MONTHS) -> list[MonthlyIncome]:
    """Rent income and count of signed contracts for the `months` most recent months, newest first."""
    rows = contract_repo.get_signed_income_by_month(db, limit=months)
    return [
        MonthlyIncome(
            month=format_month(month),
            income=float(income or 0),
            contracts=count,
        )
        for month, income, count in rows
    ]


def status_counts(db: Session) -> list[StatusCount]:
    """Contract count per status, labelled for display."""
    return [
        StatusCount(status=status_label(status), count=count)
        for status, count in contract_repo.get_status_counts(db)
    ]


def property_analytics(db: Session) -> PropertyAnalytics:
    """Counts and average rent of signed contracts by property type, size band and address."""
    bands: dict[str, list[float]] = {}
    for property_size, rent_amount in contract_repo.get_property_sizes(db):
        label = size_band(property_size)
        if label is not None:
            bands.setdefault(label, []).append(float(rent_amount))

    band_order = [label for _, label in SIZE_BANDS] + [LARGEST_SIZE_BAND]
    sizes = sorted(
        (
            PropertySizeStat(size_range=label, count=len(rents), avg_rent=sum(rents) / len(rents))
            for label, rents in bands.items()
        ),
        key=lambda stat: (-stat.count, band_order.index(stat.size_range)),
    )

    return PropertyAnalytics(
        property_types=[
            PropertyTypeStat(type=property_type, count=count, avg_rent=float(avg_rent or 0))
            for property_type, count, avg_rent in contract_repo.get_property_type_stats(db)
        ],
        property_sizes=sizes,
        top_locations=[
            LocationStat(property_address=address, count=count, avg_rent=float(avg_rent or 0))
            for address, count, avg_rent in contract_repo.get_top_locations(
                db, limit=TOP_LOCATIONS
            )
        ],
    )


def dashboard_stats(db: Session) -> DashboardStats:
    """Contract totals per status and income overall and for the current month."""
    counts = dict(contract_repo.get_status_counts(db))
    this_month = datetime.now(timezone.utc).strftime("%Y-%m")
    return DashboardStats(
        contracts=ContractTotals(
            total=sum(counts.values()),
            draft=counts.get(ContractStatus.DRAFT.value, 0),
            active=counts.get(ContractStatus.ACTIVE.value, 0),
            signed=counts.get(ContractStatus.SIGNED.value, 0),
            terminated=counts.get(ContractStatus.TERMINATED.value, 0),
        ),
        income=IncomeTotals(
            total=float(contract_repo.get_income_total(db) or 0),
            this_month=float(contract_repo.get_income_total(db, month_key=this_month) or 0),
        ),
    )
