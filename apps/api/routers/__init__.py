"""Routers package."""

from . import (
    health,
    workflow,
)
