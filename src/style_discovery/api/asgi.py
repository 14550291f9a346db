"""ASGI entrypoint for the style discovery API."""

from style_discovery.api.app import create_app
from style_discovery.containers import build_container

app = create_app(build_container())
