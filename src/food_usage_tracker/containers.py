"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from food_usage_tracker.adapters.openpyxl_spreadsheet import OpenpyxlSpreadsheet
from food_usage_tracker.adapters.supabase_category_repository import (
    SupabaseCategoryRepository,
)
from food_usage_tracker.adapters.supabase_food_repository import (
    SupabaseFoodRepository,
)
from food_usage_tracker.adapters.supabase_usage_repository import (
    SupabaseUsageRepository,
)
from food_usage_tracker.config import Settings
from food_usage_tracker.services.allocation import AllocationCalculator
from food_usage_tracker.services.analysis import AnalysisService
from food_usage_tracker.services.catalog import CatalogService
from food_usage_tracker.services.matching import FoodMatcher
from food_usage_tracker.services.reports import ReportService
from food_usage_tracker.services.usage import UsageService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    usage_service: UsageService
    report_service: ReportService
    analysis_service: AnalysisService
    catalog_service: CatalogService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_repository = SupabaseFoodRepository(supabase_client)
    usage_repository = SupabaseUsageRepository(supabase_client)
    category_repository = SupabaseCategoryRepository(supabase_client)
    spreadsheet = OpenpyxlSpreadsheet()
    batch_calculator = AllocationCalculator(
        empty_loss_fallback=resolved_settings.batch_empty_loss_fallback
    )
    report_calculator = AllocationCalculator(
        empty_loss_fallback=resolved_settings.report_empty_loss_fallback
    )

    usage_service = UsageService(
        matcher=FoodMatcher(food_repository),
        calculator=batch_calculator,
        history_calculator=report_calculator,
        repository=usage_repository,
        reader=spreadsheet,
        writer=spreadsheet,
        export_dir=resolved_settings.export_dir,
    )
    report_service = ReportService(
        repository=usage_repository,
        calculator=report_calculator,
        writer=spreadsheet,
    )
    analysis_service = AnalysisService(
        report_service=report_service,
        writer=spreadsheet,
    )
    catalog_service = CatalogService(
        repository=food_repository,
        categories=category_repository,
        reader=spreadsheet,
        writer=spreadsheet,
        export_dir=resolved_settings.export_dir,
    )

    return AppContainer(
        settings=resolved_settings,
        usage_service=usage_service,
        report_service=report_service,
        analysis_service=analysis_service,
        catalog_service=catalog_service,
    )
