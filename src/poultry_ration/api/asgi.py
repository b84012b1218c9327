"""ASGI entrypoint for the ration API."""

from poultry_ration.api.app import create_app
from poultry_ration.containers import build_container

app = create_app(build_container())
