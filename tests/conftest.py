"""Shared test fixtures."""

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path
from uuid import UUID, uuid4

import pytest

from food_usage_tracker.adapters.openpyxl_spreadsheet import (
    SpreadsheetReader,
    SpreadsheetWriter,
)
from food_usage_tracker.config import Settings
from food_usage_tracker.containers import AppContainer
from food_usage_tracker.domain.catalog import CategoryKind
from food_usage_tracker.domain.errors import DuplicateFoodError, FoodNotFoundError
from food_usage_tracker.domain.foods import (
    COMPONENT_CODES,
    AllocationSlot,
    ComponentCode,
    FoodKey,
    FoodRecord,
)
from food_usage_tracker.domain.reports import PeriodRange
from food_usage_tracker.domain.usage import StoredUsage, UsageCalculationRow
from food_usage_tracker.services.allocation import (
    AllocationCalculator,
    EmptyLossFallback,
)
from food_usage_tracker.services.analysis import AnalysisService
from food_usage_tracker.services.catalog import CatalogService, CategoryRepository
from food_usage_tracker.services.matching import FoodMatcher, FoodRepository
from food_usage_tracker.services.reports import ReportService
from food_usage_tracker.services.usage import UsageRepository, UsageService


def make_food(  # noqa: PLR0913
    food_id: str = "F001",
    origin_name: str = "Kitchen A",
    food_name: str = "Rice",
    unit: str = "kg",
    calorie_per_unit: float = 1000.0,
    slots: dict[ComponentCode, tuple[str | None, str | None]] | None = None,
    loss_ratio: str | None = None,
    calorie_usage: str | None = None,
    active: bool = True,
    food_record_id: UUID | None = None,
) -> FoodRecord:
    """Build a catalog entry; ``slots`` maps codes to (ratio, patient)."""
    configured = slots or {}
    return FoodRecord(
        id=food_record_id or uuid4(),
        food_id=food_id,
        origin_name=origin_name,
        food_name=food_name,
        unit=unit,
        calorie_per_unit=calorie_per_unit,
        calorie_usage=calorie_usage,
        slots=tuple(
            AllocationSlot(
                code=code,
                ratio=configured.get(code, (None, None))[0],
                patient=configured.get(code, (None, None))[1],
            )
            for code in COMPONENT_CODES
        ),
        loss_ratio=loss_ratio,
        active=active,
    )


@dataclass
class InMemoryCategoryRepository(CategoryRepository):
    """In-memory category repository for tests."""

    entries: dict[tuple[CategoryKind, str], UUID] = field(default_factory=dict)

    def find_or_create(self, category: CategoryKind, name: str) -> UUID:
        key = (category, name)
        if key not in self.entries:
            self.entries[key] = uuid4()
        return self.entries[key]

    def name_of(self, category_id: object) -> str | None:
        for (_, name), entry_id in self.entries.items():
            if str(entry_id) == str(category_id):
                return name
        return None


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory catalog repository enforcing one active entry per key."""

    foods: list[FoodRecord] = field(default_factory=list)
    categories: InMemoryCategoryRepository = field(
        default_factory=InMemoryCategoryRepository
    )
    lookups: list[FoodKey] = field(default_factory=list)

    def add(self, food: FoodRecord) -> FoodRecord:
        self.foods.append(food)
        return food

    def find_active_foods(self, key: FoodKey) -> list[FoodRecord]:
        self.lookups.append(key)
        return [food for food in self.foods if food.active and food.key.matches(key)]

    def list_foods(self) -> list[FoodRecord]:
        return list(self.foods)

    def get_food(self, food_record_id: UUID) -> FoodRecord | None:
        return next((food for food in self.foods if food.id == food_record_id), None)

    def create_food(self, payload: dict[str, object]) -> UUID:
        slots = tuple(
            AllocationSlot(
                code=code,
                ratio=payload.get(f"{code.value.lower()}_ratio"),
                patient=payload.get(f"{code.value.lower()}_patient"),
            )
            for code in COMPONENT_CODES
        )
        food = FoodRecord(
            id=uuid4(),
            food_id=str(payload["food_id"]),
            origin_name=self.categories.name_of(payload.get("origin_id")) or "",
            food_name=self.categories.name_of(payload["food_name_id"]) or "",
            unit=self.categories.name_of(payload["unit_id"]) or "",
            calorie_per_unit=float(payload["calorie_per_unit"]),
            calorie_usage=payload.get("calorie_usage"),
            slots=slots,
            loss_ratio=payload.get("loss_ratio"),
            destination_name=self.categories.name_of(payload.get("destination_id")),
            insurance_type_name=self.categories.name_of(
                payload.get("insurance_type_id")
            ),
            apply_date=payload.get("apply_date"),
            active=bool(payload.get("active", True)),
        )
        if food.active:
            self._check_unique(food)
        self.foods.append(food)
        return food.id

    def update_food(
        self, food_record_id: UUID, changes: dict[str, object]
    ) -> FoodRecord:
        food = self.get_food(food_record_id)
        if food is None:
            raise FoodNotFoundError(str(food_record_id))
        slot_changes = {}
        for slot in food.slots:
            prefix = slot.code.value.lower()
            slot_changes[slot.code] = replace(
                slot,
                ratio=changes.get(f"{prefix}_ratio", slot.ratio),
                patient=changes.get(f"{prefix}_patient", slot.patient),
            )
        plain = {
            name: value
            for name, value in changes.items()
            if name in {"calorie_usage", "loss_ratio", "apply_date", "active"}
        }
        updated = replace(food, slots=tuple(slot_changes.values()), **plain)
        if updated.active and not food.active:
            self._check_unique(updated)
        self.foods[self.foods.index(food)] = updated
        return updated

    def set_active(self, food_record_id: UUID, active: bool) -> FoodRecord:
        return self.update_food(food_record_id, {"active": active})

    def _check_unique(self, food: FoodRecord) -> None:
        if any(
            other.active and other.id != food.id and other.key.matches(food.key)
            for other in self.foods
        ):
            raise DuplicateFoodError(
                'duplicate key value violates unique constraint "foods_active_natural_key"'
            )


@dataclass
class InMemoryUsageRepository(UsageRepository):
    """In-memory usage repository keyed by import period."""

    foods: InMemoryFoodRepository
    records: list[StoredUsage] = field(default_factory=list)
    replaced: list[str] = field(default_factory=list)

    def replace_period(
        self, import_month_year: str, rows: list[UsageCalculationRow]
    ) -> int:
        self.replaced.append(import_month_year)
        kept = [
            record
            for record in self.records
            if record.import_month_year != import_month_year
        ]
        new_records = []
        for row in rows:
            food = self.foods.get_food(row.id)
            if food is None:
                raise FoodNotFoundError(str(row.id))
            new_records.append(
                StoredUsage(
                    food=food,
                    sample_date=row.month_year,
                    quantity=row.quantity,
                    import_month_year=import_month_year,
                )
            )
        self.records = kept + new_records
        return len(new_records)

    def list_usage(
        self,
        period: PeriodRange,
        *,
        patient: str | None = None,
        component: ComponentCode | None = None,
        food_id: str | None = None,
    ) -> list[StoredUsage]:
        selected = []
        for record in reversed(self.records):
            if not (
                period.from_month_year
                <= record.import_month_year
                <= period.to_month_year
            ):
                continue
            if food_id is not None and record.food.food_id != food_id:
                continue
            codes = [component] if component is not None else list(COMPONENT_CODES)
            if patient is not None and not any(
                record.food.slot(code).patient == patient for code in codes
            ):
                continue
            if (
                patient is None
                and component is not None
                and record.food.slot(component).ratio is None
            ):
                continue
            selected.append(record)
        return selected

    def add(
        self,
        food: FoodRecord,
        quantity: float,
        import_month_year: str,
        sample_date: str | None = None,
    ) -> StoredUsage:
        record = StoredUsage(
            food=food,
            sample_date=sample_date,
            quantity=quantity,
            import_month_year=import_month_year,
        )
        self.records.append(record)
        return record


@dataclass
class FakeSpreadsheet(SpreadsheetReader, SpreadsheetWriter):
    """Spreadsheet fake that serves tables and records writes."""

    tables: dict[str, list[list[object]]] = field(default_factory=dict)
    written: list[tuple[Path, str, list[dict[str, object]]]] = field(
        default_factory=list
    )

    def read_table(self, path: str | Path) -> list[list[object]]:
        key = str(path)
        if key not in self.tables:
            raise FileNotFoundError(f"No such file or directory: {key!r}")
        return self.tables[key]

    def write_records(
        self,
        path: str | Path,
        sheet_name: str,
        records: Sequence[dict[str, object]],
    ) -> Path:
        self.written.append((Path(path), sheet_name, list(records)))
        return Path(path)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        api_token="api-token",
        export_dir=tmp_path / "exports",
    )


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def usage_repository(food_repository: InMemoryFoodRepository) -> InMemoryUsageRepository:
    return InMemoryUsageRepository(foods=food_repository)


@pytest.fixture
def spreadsheet() -> FakeSpreadsheet:
    return FakeSpreadsheet()


@pytest.fixture
def usage_service(
    settings: Settings,
    food_repository: InMemoryFoodRepository,
    usage_repository: InMemoryUsageRepository,
    spreadsheet: FakeSpreadsheet,
) -> UsageService:
    return UsageService(
        matcher=FoodMatcher(food_repository),
        calculator=AllocationCalculator(empty_loss_fallback=EmptyLossFallback.ZERO),
        history_calculator=AllocationCalculator(
            empty_loss_fallback=EmptyLossFallback.TOTAL_CALORIES
        ),
        repository=usage_repository,
        reader=spreadsheet,
        writer=spreadsheet,
        export_dir=settings.export_dir,
    )


@pytest.fixture
def report_service(
    usage_repository: InMemoryUsageRepository, spreadsheet: FakeSpreadsheet
) -> ReportService:
    return ReportService(
        repository=usage_repository,
        calculator=AllocationCalculator(
            empty_loss_fallback=EmptyLossFallback.TOTAL_CALORIES
        ),
        writer=spreadsheet,
    )


@pytest.fixture
def catalog_service(
    settings: Settings,
    food_repository: InMemoryFoodRepository,
    spreadsheet: FakeSpreadsheet,
) -> CatalogService:
    return CatalogService(
        repository=food_repository,
        categories=food_repository.categories,
        reader=spreadsheet,
        writer=spreadsheet,
        export_dir=settings.export_dir,
    )


@pytest.fixture
def container(
    settings: Settings,
    usage_service: UsageService,
    report_service: ReportService,
    catalog_service: CatalogService,
    spreadsheet: FakeSpreadsheet,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        usage_service=usage_service,
        report_service=report_service,
        analysis_service=AnalysisService(
            report_service=report_service, writer=spreadsheet
        ),
        catalog_service=catalog_service,
    )
