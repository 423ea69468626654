"""ASGI entrypoint for the Daily N'Oats planner API."""

from noats_planner.api.app import create_app
from noats_planner.containers import build_container

app = create_app(build_container())
