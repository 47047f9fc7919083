"""CLI commands for weigh-in."""

from .entries import entries
from .init import init
from .serve import serve
from .settings import settings
from .transfer import export, import_data, template

__all__ = [
    "entries",
    "export",
    "import_data",
    "init",
    "serve",
    "settings",
    "template",
]
