"""Domain models for reports and analyses."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PeriodRange:
    """Inclusive range of import periods, compared as YYYY-MM strings."""

    from_month_year: str
    to_month_year: str


@dataclass
class PatientSummaryRow:
    """Totals for one patient within one allocation component."""

    patient: str
    hh_group: str
    total_calories: float = 0.0
    total_used_calories: int = 0
    total_loss: int = 0


@dataclass
class FoodSummaryRow:
    """Totals for one food code."""

    food_id: str
    food_name: str
    total_quantity: float = 0.0
    total_calories: float = 0.0
    hh_group: str = ""


@dataclass
class PatientAnalysisRow:
    """HH 3.1 loss analysis for one patient."""

    patient: str
    total_calories: float = 0.0
    total_loss: int = 0
    remaining_calories: int = 0


@dataclass
class FoodAnalysisRow:
    """Loss analysis for one food code."""

    food_id: str
    food_name: str
    quantity: float = 0.0
    total_loss: int = 0
    hh31_loss: int = 0
    remaining_calories: int = 0
