"""ASGI entrypoint."""

from bitesnaps.api.app import create_app
from bitesnaps.containers import build_container

app = create_app(build_container())
