"""ASGI entrypoint for the food usage API."""

from food_usage_tracker.api.app import create_app
from food_usage_tracker.containers import build_container

app = create_app(build_container())
