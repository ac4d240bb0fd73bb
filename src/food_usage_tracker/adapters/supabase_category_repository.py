"""Supabase implementation for catalog name lists."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from food_usage_tracker.adapters.supabase_errors import store_errors
from food_usage_tracker.domain.catalog import CategoryKind
from food_usage_tracker.services.catalog import CategoryRepository


@dataclass
class SupabaseCategoryRepository(CategoryRepository):
    """Supabase-backed repository for origins, food names, units and the like."""

    client: Client

    def find_or_create(self, category: CategoryKind, name: str) -> UUID:
        """Return the id of the named entry, inserting it when it is missing."""
        with store_errors(f"Category lookup in {category.value}"):
            response = (
                self.client.table(category.value)
                .select("id")
                .eq("name", name)
                .limit(1)
                .execute()
            )
            if response.data:
                return UUID(str(response.data[0]["id"]))
            created = self.client.table(category.value).insert({"name": name}).execute()
        if not created.data:
            raise RuntimeError(f"Failed to create {category.value} entry")
        return UUID(str(created.data[0]["id"]))
