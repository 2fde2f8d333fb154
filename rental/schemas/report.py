from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class MonthlyIncome(BaseModel):
    month: str
    income: float
    contracts: int


class StatusCount(BaseModel):
    status: str
    count: int


class ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PropertyTypeStat(ReportModel):
    type: str
    count: int
    avg_rent: float


class PropertySizeStat(ReportModel):
    size_range: str
    count: int
    avg_rent: float


class LocationStat(ReportModel):
    property_address: str
    count: int
    avg_rent: float


class PropertyAnalytics(ReportModel):
    property_types: list[PropertyTypeStat]
    property_sizes: list[PropertySizeStat]
    top_locations: list[LocationStat]


class ContractTotals(ReportModel):
    total: int
    draft: int
    active: int
    signed: int
    terminated: int


class IncomeTotals(ReportModel):
    total: float
    this_month: float


class DashboardStats(ReportModel):
    contracts: ContractTotals
    income: IncomeTotals
