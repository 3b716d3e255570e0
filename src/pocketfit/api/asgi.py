"""ASGI entrypoint for the PocketFit API."""

from pocketfit.api.app import create_app
from pocketfit.containers import build_container

app = create_app(build_container())
