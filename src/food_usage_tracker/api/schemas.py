"""Pydantic models for API request payloads."""

from pydantic import BaseModel, ConfigDict

from food_usage_tracker.domain.foods import ComponentCode
from food_usage_tracker.domain.usage import UsageCalculationRow, UsageInputRow


class UsageRowPayload(BaseModel):
    """One usage input row."""

    food_id: str
    origin_name: str = ""
    food_name: str
    unit: str
    value: float
    quantity: float
    month_year: str | None = None

    def to_domain(self) -> UsageInputRow:
        return UsageInputRow(**self.model_dump())


class CalculateRequest(BaseModel):
    month_year: str
    rows: list[UsageRowPayload]


class ImportUsageRequest(BaseModel):
    month_year: str
    path: str


class SaveUsageRequest(BaseModel):
    import_month_year: str
    rows: list[UsageCalculationRow]


class ExportUsageRequest(BaseModel):
    rows: list[UsageCalculationRow]
    path: str


class HistoryExportRequest(BaseModel):
    import_month_year: str
    path: str


class PeriodExportRequest(BaseModel):
    from_month_year: str
    to_month_year: str
    path: str


class PatientDetailExportRequest(PeriodExportRequest):
    patient: str
    component: ComponentCode


class FoodDetailExportRequest(PeriodExportRequest):
    food_id: str


class ImportFoodsRequest(BaseModel):
    path: str
    export_errors: bool = False


class FoodStatusRequest(BaseModel):
    active: bool


class FoodUpdateRequest(BaseModel):
    """Mutable catalog fields; identity fields are rejected."""

    model_config = ConfigDict(extra="forbid")

    calorie_usage: str | None = None
    hh_1_1_ratio: str | None = None
    hh_1_1_patient: str | None = None
    hh_2_1_ratio: str | None = None
    hh_2_1_patient: str | None = None
    hh_2_2_ratio: str | None = None
    hh_2_2_patient: str | None = None
    hh_2_3_ratio: str | None = None
    hh_2_3_patient: str | None = None
    hh_3_1_ratio: str | None = None
    hh_3_1_patient: str | None = None
    loss_ratio: str | None = None
    apply_date: str | None = None
    active: bool = True
