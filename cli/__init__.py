"""CLI package for running and querying the IoT sensor API."""

from importlib import import_module
from types import ModuleType


def __getattr__(name: str) -> ModuleType:
    if name == "app":
        return import_module("cli.app")
    raise AttributeError(name)

# The Typer instance stays in ``cli.app`` so that tests can patch attributes
# such as ``cli.app.ApiClient`` and ``cli.app.uvicorn`` on the module itself.

__all__ = []
